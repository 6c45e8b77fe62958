"""View Projector - Search, filter and sort board columns for display."""

from vulnboard.projector.models import BoardView, ColumnView
from vulnboard.projector.projector import (
    PRIORITY_RANK,
    matches_filter,
    matches_search,
    priority_rank,
    project_board,
    project_column,
    project_tasks,
    sort_tasks,
)

__all__ = [
    "PRIORITY_RANK",
    "BoardView",
    "ColumnView",
    "matches_filter",
    "matches_search",
    "priority_rank",
    "project_board",
    "project_column",
    "project_tasks",
    "sort_tasks",
]
