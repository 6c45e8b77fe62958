"""Board Store - Canonical board state and the commands that mutate it."""

from vulnboard.board_store.events import BoardEvent, EventManager, EventType
from vulnboard.board_store.exceptions import (
    BoardError,
    ColumnNotFoundError,
    TaskNotFoundError,
)
from vulnboard.board_store.ids import IdAllocator
from vulnboard.board_store.models import (
    Board,
    BoardSnapshot,
    Column,
    ColumnColor,
    ColumnSnapshot,
    CommandResult,
    CommandStatus,
    Priority,
    SortKey,
    Task,
    TaskFields,
    TaskType,
    ViewSettings,
    clamp_score,
)
from vulnboard.board_store.seed import default_columns
from vulnboard.board_store.store import BoardStore

__all__ = [
    "Board",
    "BoardError",
    "BoardEvent",
    "BoardSnapshot",
    "BoardStore",
    "Column",
    "ColumnColor",
    "ColumnNotFoundError",
    "ColumnSnapshot",
    "CommandResult",
    "CommandStatus",
    "EventManager",
    "EventType",
    "IdAllocator",
    "Priority",
    "SortKey",
    "Task",
    "TaskFields",
    "TaskNotFoundError",
    "TaskType",
    "ViewSettings",
    "clamp_score",
    "default_columns",
]
