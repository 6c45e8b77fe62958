"""Dispatcher - Validates external commands and routes them to the Board Store."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from vulnboard.board_store import Column, CommandResult, CommandStatus
from vulnboard.dispatcher.commands import (
    COMMAND_ADAPTER,
    COMMAND_NAMES,
    DEFAULT_MIN_TITLE_LENGTH,
    AddColumnCommand,
    AddTaskCommand,
    Command,
    DeleteColumnCommand,
    DeleteTaskCommand,
    DropTaskCommand,
    EditColumnCommand,
    EditTaskCommand,
    MoveTaskCommand,
    ReorderTaskCommand,
    SetFilterLabelCommand,
    SetSearchTermCommand,
    SetSortByCommand,
)
from vulnboard.dispatcher.exceptions import UnknownCommandError
from vulnboard.logging import get_logger

if TYPE_CHECKING:
    from vulnboard.board_store import BoardStore

logger = get_logger("dispatcher")


def _format_errors(exc: ValidationError) -> tuple[str, ...]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return tuple(messages)


class Dispatcher:
    """Stateless router from the command vocabulary to BoardStore operations.

    Plain mappings are validated first; a command that fails validation is
    answered with a REJECTED result and never reaches the store.
    """

    def __init__(
        self,
        store: BoardStore,
        min_title_length: int = DEFAULT_MIN_TITLE_LENGTH,
    ) -> None:
        """Initialize the Dispatcher.

        Args:
            store: The BoardStore that receives validated commands.
            min_title_length: Minimum task title length after stripping.
        """
        self.store = store
        self.min_title_length = min_title_length
        self._handlers: dict[type[BaseModel], Callable[[Any], CommandResult]] = {
            AddTaskCommand: self._add_task,
            EditTaskCommand: self._edit_task,
            MoveTaskCommand: self._move_task,
            ReorderTaskCommand: self._reorder_task,
            DropTaskCommand: self._drop_task,
            DeleteTaskCommand: self._delete_task,
            AddColumnCommand: self._add_column,
            EditColumnCommand: self._edit_column,
            DeleteColumnCommand: self._delete_column,
            SetSearchTermCommand: self._set_search_term,
            SetFilterLabelCommand: self._set_filter_label,
            SetSortByCommand: self._set_sort_by,
        }

    def parse(self, payload: Mapping[str, Any]) -> Command:
        """Validate a plain mapping into a typed command.

        Raises:
            ValidationError: If the payload is malformed or its command is unknown.
        """
        return COMMAND_ADAPTER.validate_python(
            dict(payload), context={"min_title_length": self.min_title_length}
        )

    def dispatch(self, command: Command | Mapping[str, Any]) -> CommandResult:
        """Validate a command if needed and apply it to the store.

        Args:
            command: A typed command model, or a mapping with a "command" key.

        Returns:
            The store's CommandResult, or a REJECTED result on validation failure.
        """
        if not isinstance(command, BaseModel):
            name = str(command.get("command", "unknown"))
            try:
                command = self.parse(command)
            except ValidationError as e:
                errors = _format_errors(e)
                logger.warning("Rejected %s: %s", name, "; ".join(errors))
                if name in COMMAND_NAMES:
                    message = f"Invalid {name} command"
                else:
                    message = f"Unknown command '{name}'"
                return CommandResult(
                    status=CommandStatus.REJECTED,
                    command=name,
                    message=message,
                    errors=errors,
                )
        return self.route(command)

    def route(self, command: Command) -> CommandResult:
        """Forward an already-validated command to the store.

        Raises:
            UnknownCommandError: If no handler exists for the command's type.
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise UnknownCommandError(f"No handler for {type(command).__name__}")
        return handler(command)

    def drop_task(self, task_id: str, over_id: str) -> CommandResult:
        """Translate a finished drag gesture into a move.

        ``over_id`` may name a column or a task inside the target column. The
        task is appended to the end of the destination column. Drops onto the
        task's own column are suppressed.
        """
        return self.dispatch(DropTaskCommand(task_id=task_id, over_id=over_id))

    # --- Handlers ---

    def _add_task(self, command: AddTaskCommand) -> CommandResult:
        column_id = command.column_id
        if column_id is None:
            columns = self.store.columns
            if not columns:
                return CommandResult(
                    status=CommandStatus.NOT_FOUND,
                    command=command.command,
                    message="Board has no columns",
                )
            column_id = columns[0].id
        return self.store.add_task(column_id, command.to_fields())

    def _edit_task(self, command: EditTaskCommand) -> CommandResult:
        return self.store.edit_task(command.to_task())

    def _move_task(self, command: MoveTaskCommand) -> CommandResult:
        return self.store.move_task(
            command.task_id,
            command.source_column_id,
            command.destination_column_id,
            command.destination_index,
        )

    def _reorder_task(self, command: ReorderTaskCommand) -> CommandResult:
        return self.store.reorder_task(
            command.task_id, command.column_id, command.destination_index
        )

    def _drop_task(self, command: DropTaskCommand) -> CommandResult:
        source = self.store.find_column_by_task_id(command.task_id)
        destination = None
        for column in self.store.columns:
            if column.id == command.over_id:
                destination = column
                break
        if destination is None:
            destination = self.store.find_column_by_task_id(command.over_id)

        if source is None or destination is None:
            return CommandResult(
                status=CommandStatus.NOT_FOUND,
                command=command.command,
                message=f"Cannot resolve drop of '{command.task_id}' over '{command.over_id}'",
            )
        if source.id == destination.id:
            return CommandResult(
                status=CommandStatus.UNCHANGED,
                command=command.command,
                message=f"Task '{command.task_id}' dropped on its own column",
                entity_id=command.task_id,
            )
        return self.store.move_task(
            command.task_id, source.id, destination.id, len(destination.tasks)
        )

    def _delete_task(self, command: DeleteTaskCommand) -> CommandResult:
        return self.store.delete_task(command.task_id)

    def _add_column(self, command: AddColumnCommand) -> CommandResult:
        return self.store.add_column(command.title, command.color)

    def _edit_column(self, command: EditColumnCommand) -> CommandResult:
        return self.store.edit_column(
            Column(id=command.id, title=command.title, color=command.color)
        )

    def _delete_column(self, command: DeleteColumnCommand) -> CommandResult:
        return self.store.delete_column(command.column_id)

    def _set_search_term(self, command: SetSearchTermCommand) -> CommandResult:
        return self.store.set_search_term(command.search_term)

    def _set_filter_label(self, command: SetFilterLabelCommand) -> CommandResult:
        return self.store.set_filter_label(command.filter_label)

    def _set_sort_by(self, command: SetSortByCommand) -> CommandResult:
        return self.store.set_sort_by(command.sort_by)
