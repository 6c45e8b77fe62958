"""Custom exceptions for Board Store."""


class BoardError(Exception):
    """Base exception for Board Store errors."""


class TaskNotFoundError(BoardError):
    """Task with given ID does not exist."""


class ColumnNotFoundError(BoardError):
    """Column with given ID does not exist."""
