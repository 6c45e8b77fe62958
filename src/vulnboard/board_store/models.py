"""Data models for the Board Store."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

SCORE_MIN = 0.0
SCORE_MAX = 10.0


class Priority(StrEnum):
    """Task priority enum."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TaskType(StrEnum):
    """Task type enum."""

    BUG = "Bug"
    FEATURE = "Feature"
    ENHANCEMENT = "Enhancement"
    DOCUMENTATION = "Documentation"


class ColumnColor(StrEnum):
    """Column color palette."""

    GRAY = "gray"
    ORANGE = "orange"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"

    @classmethod
    def parse(cls, value: str | None) -> ColumnColor:
        """Parse a color name, falling back to gray for unknown values."""
        if value is None:
            return cls.GRAY
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.GRAY


class SortKey(StrEnum):
    """Sort keys understood by the view projector."""

    DATE = "date"
    PRIORITY = "priority"
    SCORE = "score"


class CommandStatus(StrEnum):
    """Outcome of a board command."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


def clamp_score(score: float) -> float:
    """Clamp a score into the [0, 10] range. NaN becomes 0."""
    value = float(score)
    if math.isnan(value):
        return SCORE_MIN
    return min(max(value, SCORE_MIN), SCORE_MAX)


@dataclass(frozen=True)
class Task:
    """A single work item on the board.

    Tasks are immutable; edits replace the task object at the same position
    in its column. The score is clamped and labels are de-duplicated on
    construction, so every Task instance satisfies the board invariants.
    """

    id: str
    title: str
    priority: Priority
    type: TaskType
    score: float
    date: date
    labels: tuple[str, ...] = ()
    description: str | None = None
    assignee: str | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Task title must not be empty")
        object.__setattr__(self, "score", clamp_score(self.score))
        object.__setattr__(self, "labels", tuple(dict.fromkeys(self.labels)))

    def __repr__(self) -> str:
        return f"<Task(id={self.id!r}, title={self.title!r}, priority={self.priority!r})>"


@dataclass(frozen=True)
class TaskFields:
    """Every Task field except the id, as carried by create/edit commands."""

    title: str
    priority: Priority
    type: TaskType
    score: float
    date: date
    labels: tuple[str, ...] = ()
    description: str | None = None
    assignee: str | None = None

    def to_task(self, task_id: str) -> Task:
        """Build a Task with the given id."""
        return Task(
            id=task_id,
            title=self.title,
            priority=self.priority,
            type=self.type,
            score=self.score,
            date=self.date,
            labels=self.labels,
            description=self.description,
            assignee=self.assignee,
        )

    @classmethod
    def from_task(cls, task: Task) -> TaskFields:
        """Extract the editable fields of a Task."""
        return cls(
            title=task.title,
            priority=task.priority,
            type=task.type,
            score=task.score,
            date=task.date,
            labels=task.labels,
            description=task.description,
            assignee=task.assignee,
        )


@dataclass
class Column:
    """An ordered, colored container of tasks.

    The tasks list is owned by the Board Store. Collaborators only ever see
    ColumnSnapshot copies.
    """

    id: str
    title: str
    color: ColumnColor = ColumnColor.GRAY
    tasks: list[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Column title must not be empty")

    def index_of(self, task_id: str) -> int:
        """Return the position of a task in this column, or -1."""
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return -1

    def __repr__(self) -> str:
        return f"<Column(id={self.id!r}, title={self.title!r}, tasks={len(self.tasks)})>"


@dataclass
class ViewSettings:
    """Board-wide search, filter and sort settings.

    Attributes:
        search_term: Case-insensitive title/label substring. Empty disables it.
        filter_label: Label or task type to keep. Empty disables it.
        sort_by: Sort key applied to every column's projection.
    """

    search_term: str = ""
    filter_label: str = ""
    sort_by: SortKey = SortKey.DATE


@dataclass
class Board:
    """Top-level aggregate: ordered columns plus view settings."""

    columns: list[Column] = field(default_factory=list)
    settings: ViewSettings = field(default_factory=ViewSettings)


@dataclass(frozen=True)
class ColumnSnapshot:
    """Read-only copy of a column in canonical order."""

    id: str
    title: str
    color: ColumnColor
    tasks: tuple[Task, ...]


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only copy of the whole board, emitted after every change."""

    columns: tuple[ColumnSnapshot, ...]
    search_term: str
    filter_label: str
    sort_by: SortKey

    @property
    def task_ids(self) -> list[str]:
        """All task ids in board order."""
        return [task.id for column in self.columns for task in column.tasks]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command.

    Attributes:
        status: What happened.
        command: Name of the command, e.g. "move_task".
        message: Human-readable description of the outcome.
        entity_id: Id of the task or column the command created or touched.
        errors: Validation messages when the command was rejected.
    """

    status: CommandStatus
    command: str
    message: str = ""
    entity_id: str | None = None
    errors: tuple[str, ...] = ()

    @property
    def applied(self) -> bool:
        """Whether the command changed the board."""
        return self.status == CommandStatus.APPLIED
