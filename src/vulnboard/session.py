"""BoardSession - wires the store, dispatcher and projector for one process."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from vulnboard.board_store import BoardStore, ViewSettings
from vulnboard.config import BoardConfig
from vulnboard.dispatcher import Dispatcher
from vulnboard.logging import get_logger
from vulnboard.projector import BoardView, project_board

if TYPE_CHECKING:
    from vulnboard.board_store import BoardEvent, CommandResult
    from vulnboard.dispatcher import Command

logger = get_logger("session")

ViewListener = Callable[[BoardView], None]


class BoardSession:
    """One board for the lifetime of the process.

    Commands go in through dispatch(); rendering collaborators read view() or
    subscribe() to receive a fresh BoardView after every applied command.
    """

    def __init__(self, config: BoardConfig | None = None) -> None:
        """Initialize the session.

        Args:
            config: Session configuration. Defaults to BoardConfig.from_env().
        """
        self.config = config if config is not None else BoardConfig.from_env()
        settings = ViewSettings(sort_by=self.config.board.default_sort)
        if self.config.board.seed_default:
            self.store = BoardStore(settings=settings)
        else:
            self.store = BoardStore.empty(settings=settings)
        self.dispatcher = Dispatcher(
            self.store, min_title_length=self.config.validation.min_title_length
        )
        logger.info(
            "Board session started with %d columns and %d tasks",
            len(self.store.columns),
            self.store.task_count,
        )

    def dispatch(self, command: Command | Mapping[str, Any]) -> CommandResult:
        """Validate and apply one command."""
        return self.dispatcher.dispatch(command)

    def view(self) -> BoardView:
        """Project the current board for display."""
        return project_board(self.store.snapshot())

    def subscribe(self, listener: ViewListener) -> str:
        """Call ``listener`` with the projected board after every applied command.

        Returns:
            Subscriber id for unsubscribe().
        """

        def _on_event(event: BoardEvent) -> None:
            listener(project_board(event.snapshot))

        return self.store.subscribe(_on_event)

    def unsubscribe(self, subscriber_id: str) -> None:
        """Stop delivering views to a subscriber."""
        self.store.unsubscribe(subscriber_id)
