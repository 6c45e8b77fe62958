"""Id allocation for tasks and columns."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdAllocator:
    """Issues timestamp-based string ids that never repeat within a session.

    Ids are millisecond timestamps. When two ids are requested within the same
    millisecond (or the clock goes backwards) the counter is bumped past the
    last issued value, and ids already present on the board are skipped.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._last = 0
        self._reserved: set[str] = set()

    def reserve(self, ids: Iterable[str]) -> None:
        """Mark ids that are already in use (e.g. seeded data)."""
        self._reserved.update(ids)

    def allocate(self) -> str:
        """Return a fresh id."""
        candidate = max(self._clock(), self._last + 1)
        while str(candidate) in self._reserved:
            candidate += 1
        self._last = candidate
        new_id = str(candidate)
        self._reserved.add(new_id)
        return new_id
