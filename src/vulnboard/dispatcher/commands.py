"""Pydantic models for the board command vocabulary.

Each command carries a ``command`` tag so plain mappings coming from a form or a
JSON-lines script can be parsed with ``COMMAND_ADAPTER``.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationInfo, field_validator

from vulnboard.board_store import (
    ColumnColor,
    Priority,
    SortKey,
    Task,
    TaskFields,
    TaskType,
    clamp_score,
)

DEFAULT_MIN_TITLE_LENGTH = 3


def _optional_text(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


# Task payloads


class TaskPayload(BaseModel):
    """Fields shared by the add_task and edit_task commands.

    Defaults mirror a blank task form: Medium priority, Feature type, score 0,
    today's date and no labels.
    """

    title: str
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    type: TaskType = TaskType.FEATURE
    score: float = 0.0
    date: dt.date = Field(default_factory=dt.date.today)
    labels: tuple[str, ...] = ()
    assignee: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            raise ValueError("Task title is required")
        min_length = DEFAULT_MIN_TITLE_LENGTH
        if info.context and "min_title_length" in info.context:
            min_length = info.context["min_title_length"]
        if len(value) < min_length:
            raise ValueError(f"Title must be at least {min_length} characters long")
        return value

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> float:
        # Out-of-range scores are clamped, and unparseable input counts as 0
        try:
            return clamp_score(value)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("labels", mode="before")
    @classmethod
    def _normalize_labels(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, Iterable):
            stripped = (str(label).strip() for label in value)
            return tuple(dict.fromkeys(label for label in stripped if label))
        return value

    @field_validator("description", "assignee", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return _optional_text(value)

    def to_fields(self) -> TaskFields:
        """Convert to the store's TaskFields."""
        return TaskFields(
            title=self.title,
            priority=self.priority,
            type=self.type,
            score=self.score,
            date=self.date,
            labels=self.labels,
            description=self.description,
            assignee=self.assignee,
        )


class AddTaskCommand(TaskPayload):
    """Create a task at the end of a column (the first column if omitted)."""

    command: Literal["add_task"] = "add_task"
    column_id: str | None = None


class EditTaskCommand(TaskPayload):
    """Replace every field of an existing task except its id."""

    command: Literal["edit_task"] = "edit_task"
    id: str = Field(..., min_length=1)

    def to_task(self) -> Task:
        """Build the edited Task."""
        return self.to_fields().to_task(self.id)


class MoveTaskCommand(BaseModel):
    """Move a task to another column."""

    command: Literal["move_task"] = "move_task"
    task_id: str = Field(..., min_length=1)
    source_column_id: str = Field(..., min_length=1)
    destination_column_id: str = Field(..., min_length=1)
    destination_index: int


class ReorderTaskCommand(BaseModel):
    """Move a task to a new position inside its own column."""

    command: Literal["reorder_task"] = "reorder_task"
    task_id: str = Field(..., min_length=1)
    column_id: str = Field(..., min_length=1)
    destination_index: int


class DropTaskCommand(BaseModel):
    """A finished drag gesture: a task dropped over a column or another task."""

    command: Literal["drop_task"] = "drop_task"
    task_id: str = Field(..., min_length=1)
    over_id: str = Field(..., min_length=1)


class DeleteTaskCommand(BaseModel):
    """Delete a task."""

    command: Literal["delete_task"] = "delete_task"
    task_id: str = Field(..., min_length=1)


# Column payloads


class ColumnPayload(BaseModel):
    """Fields shared by add_column and edit_column. Tasks are never carried."""

    title: str = Field(..., min_length=1, max_length=255)
    color: ColumnColor = ColumnColor.GRAY

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> ColumnColor:
        return ColumnColor.parse(value if isinstance(value, str) else None)


class AddColumnCommand(ColumnPayload):
    """Append a new, empty column."""

    command: Literal["add_column"] = "add_column"


class EditColumnCommand(ColumnPayload):
    """Change a column's title and color."""

    command: Literal["edit_column"] = "edit_column"
    id: str = Field(..., min_length=1)


class DeleteColumnCommand(BaseModel):
    """Delete a column and every task in it."""

    command: Literal["delete_column"] = "delete_column"
    column_id: str = Field(..., min_length=1)


# View settings


class SetSearchTermCommand(BaseModel):
    """Set the board-wide search term."""

    command: Literal["set_search_term"] = "set_search_term"
    search_term: str = ""


class SetFilterLabelCommand(BaseModel):
    """Set the board-wide label/type filter."""

    command: Literal["set_filter_label"] = "set_filter_label"
    filter_label: str = ""


class SetSortByCommand(BaseModel):
    """Set the board-wide sort key."""

    command: Literal["set_sort_by"] = "set_sort_by"
    sort_by: SortKey


Command = Annotated[
    AddTaskCommand
    | EditTaskCommand
    | MoveTaskCommand
    | ReorderTaskCommand
    | DropTaskCommand
    | DeleteTaskCommand
    | AddColumnCommand
    | EditColumnCommand
    | DeleteColumnCommand
    | SetSearchTermCommand
    | SetFilterLabelCommand
    | SetSortByCommand,
    Field(discriminator="command"),
]

COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)

COMMAND_NAMES: tuple[str, ...] = (
    "add_task",
    "edit_task",
    "move_task",
    "reorder_task",
    "drop_task",
    "delete_task",
    "add_column",
    "edit_column",
    "delete_column",
    "set_search_term",
    "set_filter_label",
    "set_sort_by",
)
