"""vulnboard - board state engine for a vulnerability kanban board."""

__version__ = "0.1.0"
