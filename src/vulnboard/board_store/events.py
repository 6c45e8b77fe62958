"""Snapshot events emitted by the Board Store after each applied command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

from vulnboard.board_store.models import BoardSnapshot  # noqa: TC001
from vulnboard.logging import get_logger

logger = get_logger("board_store.events")


class EventType(str, Enum):
    """Types of events that can be emitted."""

    TASK_ADDED = "task_added"
    TASK_EDITED = "task_edited"
    TASK_DELETED = "task_deleted"
    TASK_MOVED = "task_moved"
    TASK_REORDERED = "task_reordered"
    COLUMN_ADDED = "column_added"
    COLUMN_EDITED = "column_edited"
    COLUMN_DELETED = "column_deleted"
    VIEW_CHANGED = "view_changed"


@dataclass(frozen=True)
class BoardEvent:
    """A board change together with the snapshot taken right after it."""

    event_type: EventType
    command: str
    snapshot: BoardSnapshot
    entity_id: str | None = None


BoardListener = Callable[[BoardEvent], None]


@dataclass
class Subscriber:
    """A subscriber to board events."""

    id: str
    callback: BoardListener

    @classmethod
    def create(cls, callback: BoardListener) -> Subscriber:
        """Create a new subscriber."""
        return cls(id=str(uuid4()), callback=callback)


@dataclass
class EventManager:
    """Fans board events out to every subscriber, in subscription order."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)

    def subscribe(self, callback: BoardListener) -> Subscriber:
        """Subscribe a callback to board events.

        Args:
            callback: Called synchronously with each BoardEvent.

        Returns:
            Subscriber handle; pass its id to unsubscribe().
        """
        subscriber = Subscriber.create(callback)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Unsubscribe a callback. Unknown ids are ignored."""
        self._subscribers.pop(subscriber_id, None)

    def emit(self, event: BoardEvent) -> None:
        """Deliver an event to all subscribers.

        The command that produced the event has already been applied, so a
        failing callback is logged and the remaining subscribers still run.
        """
        for subscriber in list(self._subscribers.values()):
            try:
                subscriber.callback(event)
            except Exception:
                logger.exception(
                    "Subscriber %s failed on %s (%s)",
                    subscriber.id,
                    event.event_type.value,
                    event.command,
                )
