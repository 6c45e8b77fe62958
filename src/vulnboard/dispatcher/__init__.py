"""Command Dispatcher - Validates and routes board commands."""

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
from vulnboard.dispatcher.dispatcher import Dispatcher
from vulnboard.dispatcher.exceptions import DispatchError, UnknownCommandError

__all__ = [
    "COMMAND_ADAPTER",
    "COMMAND_NAMES",
    "DEFAULT_MIN_TITLE_LENGTH",
    "AddColumnCommand",
    "AddTaskCommand",
    "Command",
    "DeleteColumnCommand",
    "DeleteTaskCommand",
    "DispatchError",
    "Dispatcher",
    "DropTaskCommand",
    "EditColumnCommand",
    "EditTaskCommand",
    "MoveTaskCommand",
    "ReorderTaskCommand",
    "SetFilterLabelCommand",
    "SetSearchTermCommand",
    "SetSortByCommand",
    "UnknownCommandError",
]
