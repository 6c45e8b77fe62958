"""BoardStore - Main API for board mutations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from vulnboard.board_store.events import BoardEvent, BoardListener, EventManager, EventType
from vulnboard.board_store.exceptions import ColumnNotFoundError, TaskNotFoundError
from vulnboard.board_store.ids import IdAllocator
from vulnboard.board_store.models import (
    Board,
    BoardSnapshot,
    Column,
    ColumnColor,
    ColumnSnapshot,
    CommandResult,
    CommandStatus,
    SortKey,
    Task,
    TaskFields,
    ViewSettings,
)
from vulnboard.board_store.seed import default_columns
from vulnboard.logging import get_logger, truncate_output

logger = get_logger("board_store")


def _clamp_index(index: int, length: int) -> int:
    return min(max(index, 0), length)


def _copy_columns(columns: Iterable[Column]) -> list[Column]:
    """Copy initial columns so the caller keeps no handle on store state.

    Raises:
        ValueError: If a column id or a task id appears more than once.
    """
    copied: list[Column] = []
    column_ids: set[str] = set()
    task_ids: set[str] = set()
    for column in columns:
        if column.id in column_ids:
            raise ValueError(f"Duplicate column id '{column.id}'")
        column_ids.add(column.id)
        for task in column.tasks:
            if task.id in task_ids:
                raise ValueError(f"Duplicate task id '{task.id}' in column '{column.id}'")
            task_ids.add(task.id)
        copied.append(
            Column(id=column.id, title=column.title, color=column.color, tasks=list(column.tasks))
        )
    return copied


class BoardStore:
    """Owns the board and applies every mutating command to it.

    Unknown task or column ids never raise from a command; the command
    reports NOT_FOUND and leaves the board untouched. Each command validates
    all of its lookups before changing anything, so no partial effect is ever
    observable. Subscribers receive a BoardEvent after every APPLIED command.
    """

    def __init__(
        self,
        columns: Iterable[Column] | None = None,
        settings: ViewSettings | None = None,
        id_allocator: IdAllocator | None = None,
        events: EventManager | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            columns: Initial columns, copied into the store. Defaults to the
                built-in board.
            settings: Initial view settings.
            id_allocator: Id source for new tasks and columns.
            events: Event manager used to publish snapshots.

        Raises:
            ValueError: If a column id or task id is repeated in ``columns``.
        """
        self._board = Board(
            columns=default_columns() if columns is None else _copy_columns(columns),
            settings=replace(settings) if settings is not None else ViewSettings(),
        )
        self._ids = id_allocator if id_allocator is not None else IdAllocator()
        self._ids.reserve(column.id for column in self._board.columns)
        self._ids.reserve(task.id for column in self._board.columns for task in column.tasks)
        self.events = events if events is not None else EventManager()

    @classmethod
    def empty(cls, settings: ViewSettings | None = None) -> BoardStore:
        """Create a store with no columns."""
        return cls(columns=[], settings=settings)

    # --- Reads ---

    @property
    def settings(self) -> ViewSettings:
        """Current view settings (a copy)."""
        current = self._board.settings
        return ViewSettings(
            search_term=current.search_term,
            filter_label=current.filter_label,
            sort_by=current.sort_by,
        )

    @property
    def columns(self) -> tuple[ColumnSnapshot, ...]:
        """All columns in board order, as read-only snapshots."""
        return tuple(self._column_snapshot(column) for column in self._board.columns)

    @property
    def task_count(self) -> int:
        """Total number of tasks across all columns."""
        return sum(len(column.tasks) for column in self._board.columns)

    def snapshot(self) -> BoardSnapshot:
        """Take a read-only snapshot of the board and its view settings."""
        settings = self._board.settings
        return BoardSnapshot(
            columns=self.columns,
            search_term=settings.search_term,
            filter_label=settings.filter_label,
            sort_by=settings.sort_by,
        )

    def get_column(self, column_id: str) -> ColumnSnapshot:
        """Get a column by ID.

        Raises:
            ColumnNotFoundError: If column doesn't exist
        """
        column = self._find_column(column_id)
        if column is None:
            raise ColumnNotFoundError(f"Column with id '{column_id}' not found")
        return self._column_snapshot(column)

    def get_task(self, task_id: str) -> Task:
        """Get a task by ID.

        Raises:
            TaskNotFoundError: If task doesn't exist
        """
        found = self._locate_task(task_id)
        if found is None:
            raise TaskNotFoundError(f"Task with id '{task_id}' not found")
        column, index = found
        return column.tasks[index]

    def find_column_by_task_id(self, task_id: str) -> ColumnSnapshot | None:
        """Return the column holding a task, or None."""
        found = self._locate_task(task_id)
        if found is None:
            return None
        return self._column_snapshot(found[0])

    def subscribe(self, callback: BoardListener) -> str:
        """Register a callback for board events and return its subscriber id."""
        return self.events.subscribe(callback).id

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a previously registered callback."""
        self.events.unsubscribe(subscriber_id)

    # --- Task Operations ---

    def move_task(
        self,
        task_id: str,
        source_column_id: str,
        destination_column_id: str,
        destination_index: int,
    ) -> CommandResult:
        """Move a task from one column to another.

        Same-column moves are a no-op; use reorder_task() to
        change a task's position inside its own column.

        Args:
            task_id: The task to move
            source_column_id: Column currently holding the task
            destination_column_id: Column to move the task into
            destination_index: Insert position, clamped to [0, len(destination)]

        Returns:
            APPLIED, UNCHANGED for same-column moves, or NOT_FOUND
        """
        command = "move_task"
        source = self._find_column(source_column_id)
        destination = self._find_column(destination_column_id)
        if source is None or destination is None:
            missing = source_column_id if source is None else destination_column_id
            return self._not_found(command, f"Column '{missing}' not found")

        index = source.index_of(task_id)
        if index == -1:
            return self._not_found(
                command, f"Task '{task_id}' not found in column '{source_column_id}'"
            )

        if source is destination:
            return CommandResult(
                status=CommandStatus.UNCHANGED,
                command=command,
                message=f"Task '{task_id}' already in column '{source_column_id}'",
                entity_id=task_id,
            )

        position = _clamp_index(destination_index, len(destination.tasks))
        task = source.tasks.pop(index)
        destination.tasks.insert(position, task)
        logger.info(
            "Moved task %s from %s to %s at %d",
            task_id,
            source_column_id,
            destination_column_id,
            position,
        )
        return self._applied(
            command,
            EventType.TASK_MOVED,
            f"Task '{task_id}' moved to '{destination_column_id}'",
            task_id,
        )

    def reorder_task(self, task_id: str, column_id: str, destination_index: int) -> CommandResult:
        """Move a task to a new position inside its own column.

        Args:
            task_id: The task to reposition
            column_id: Column holding the task
            destination_index: New position, clamped to [0, len(column) - 1]

        Returns:
            APPLIED, UNCHANGED if the position is unchanged, or NOT_FOUND
        """
        command = "reorder_task"
        column = self._find_column(column_id)
        if column is None:
            return self._not_found(command, f"Column '{column_id}' not found")

        index = column.index_of(task_id)
        if index == -1:
            return self._not_found(command, f"Task '{task_id}' not found in column '{column_id}'")

        position = _clamp_index(destination_index, len(column.tasks) - 1)
        if position == index:
            return CommandResult(
                status=CommandStatus.UNCHANGED,
                command=command,
                message=f"Task '{task_id}' already at position {index}",
                entity_id=task_id,
            )

        task = column.tasks.pop(index)
        column.tasks.insert(position, task)
        logger.info("Reordered task %s in %s: %d -> %d", task_id, column_id, index, position)
        return self._applied(
            command,
            EventType.TASK_REORDERED,
            f"Task '{task_id}' moved to position {position}",
            task_id,
        )

    def add_task(self, column_id: str, fields: TaskFields) -> CommandResult:
        """Append a new task to the end of a column.

        Args:
            column_id: Target column
            fields: All task fields except the id

        Returns:
            APPLIED with the new task id as entity_id, or NOT_FOUND
        """
        command = "add_task"
        column = self._find_column(column_id)
        if column is None:
            return self._not_found(command, f"Column '{column_id}' not found")

        task = fields.to_task(self._ids.allocate())
        column.tasks.append(task)
        logger.info(
            "Added task %s (%s) to %s", task.id, truncate_output(task.title), column_id
        )
        return self._applied(
            command, EventType.TASK_ADDED, f"Task '{task.id}' added to '{column_id}'", task.id
        )

    def edit_task(self, task: Task) -> CommandResult:
        """Replace a task's fields, keeping its id and position.

        Args:
            task: The edited task; matched against the board by id

        Returns:
            APPLIED, or NOT_FOUND if no task has that id
        """
        command = "edit_task"
        found = self._locate_task(task.id)
        if found is None:
            return self._not_found(command, f"Task '{task.id}' not found")

        column, index = found
        column.tasks[index] = task
        logger.info("Edited task %s in %s", task.id, column.id)
        return self._applied(command, EventType.TASK_EDITED, f"Task '{task.id}' updated", task.id)

    def delete_task(self, task_id: str) -> CommandResult:
        """Remove a task from whichever column holds it.

        Returns:
            APPLIED, or NOT_FOUND if no task has that id
        """
        command = "delete_task"
        found = self._locate_task(task_id)
        if found is None:
            return self._not_found(command, f"Task '{task_id}' not found")

        column, index = found
        del column.tasks[index]
        logger.info("Deleted task %s from %s", task_id, column.id)
        return self._applied(command, EventType.TASK_DELETED, f"Task '{task_id}' deleted", task_id)

    # --- Column Operations ---

    def add_column(self, title: str, color: ColumnColor = ColumnColor.GRAY) -> CommandResult:
        """Append a new, empty column to the end of the board.

        Returns:
            APPLIED with the new column id as entity_id
        """
        column = Column(id=self._ids.allocate(), title=title, color=color)
        self._board.columns.append(column)
        logger.info("Added column %s (%s)", column.id, truncate_output(title))
        return self._applied(
            "add_column", EventType.COLUMN_ADDED, f"Column '{column.id}' added", column.id
        )

    def edit_column(self, column: Column | ColumnSnapshot) -> CommandResult:
        """Replace a column's title and color.

        The stored task sequence is always kept; any tasks carried by the
        incoming column are ignored.

        Returns:
            APPLIED, or NOT_FOUND if no column has that id
        """
        command = "edit_column"
        existing = self._find_column(column.id)
        if existing is None:
            return self._not_found(command, f"Column '{column.id}' not found")

        edited = Column(
            id=existing.id, title=column.title, color=column.color, tasks=existing.tasks
        )
        columns = self._board.columns
        columns[columns.index(existing)] = edited
        logger.info("Edited column %s", column.id)
        return self._applied(
            command, EventType.COLUMN_EDITED, f"Column '{column.id}' updated", column.id
        )

    def delete_column(self, column_id: str) -> CommandResult:
        """Delete a column together with every task it holds.

        Returns:
            APPLIED, or NOT_FOUND if no column has that id
        """
        command = "delete_column"
        column = self._find_column(column_id)
        if column is None:
            return self._not_found(command, f"Column '{column_id}' not found")

        self._board.columns.remove(column)
        logger.info("Deleted column %s with %d tasks", column_id, len(column.tasks))
        return self._applied(
            command, EventType.COLUMN_DELETED, f"Column '{column_id}' deleted", column_id
        )

    # --- View Settings ---

    def set_search_term(self, search_term: str) -> CommandResult:
        """Set the board-wide search term. Empty disables searching."""
        self._board.settings.search_term = search_term
        return self._applied(
            "set_search_term", EventType.VIEW_CHANGED, f"Search term set to '{search_term}'"
        )

    def set_filter_label(self, filter_label: str) -> CommandResult:
        """Set the board-wide label/type filter. Empty disables filtering."""
        self._board.settings.filter_label = filter_label
        return self._applied(
            "set_filter_label", EventType.VIEW_CHANGED, f"Filter label set to '{filter_label}'"
        )

    def set_sort_by(self, sort_by: SortKey) -> CommandResult:
        """Set the board-wide sort key."""
        self._board.settings.sort_by = SortKey(sort_by)
        return self._applied("set_sort_by", EventType.VIEW_CHANGED, f"Sort set to '{sort_by}'")

    # --- Internals ---

    def _find_column(self, column_id: str) -> Column | None:
        for column in self._board.columns:
            if column.id == column_id:
                return column
        return None

    def _locate_task(self, task_id: str) -> tuple[Column, int] | None:
        for column in self._board.columns:
            index = column.index_of(task_id)
            if index != -1:
                return column, index
        return None

    @staticmethod
    def _column_snapshot(column: Column) -> ColumnSnapshot:
        return ColumnSnapshot(
            id=column.id,
            title=column.title,
            color=column.color,
            tasks=tuple(column.tasks),
        )

    def _applied(
        self,
        command: str,
        event_type: EventType,
        message: str,
        entity_id: str | None = None,
    ) -> CommandResult:
        self.events.emit(
            BoardEvent(
                event_type=event_type,
                command=command,
                snapshot=self.snapshot(),
                entity_id=entity_id,
            )
        )
        return CommandResult(
            status=CommandStatus.APPLIED,
            command=command,
            message=message,
            entity_id=entity_id,
        )

    @staticmethod
    def _not_found(command: str, message: str) -> CommandResult:
        logger.debug("%s ignored: %s", command, message)
        return CommandResult(status=CommandStatus.NOT_FOUND, command=command, message=message)
