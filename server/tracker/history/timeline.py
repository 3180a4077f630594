"""Bounded undo/redo timeline of match snapshots."""
from __future__ import annotations
import logging

from ..config import MAX_HISTORY
from .snapshot import StateSnapshot

logger = logging.getLogger(__name__)


class Timeline:
    """Fixed-capacity linear history with a movable cursor.

    Logical entries ``0..top`` are reachable; ``cursor`` is the current one.
    Appending after an undo discards everything past the cursor, and
    appending at capacity evicts the oldest entry. Slots are kept in a ring
    buffer, so eviction only moves ``_base`` and never shifts entries.

    Invariant: ``0 <= cursor <= top < capacity``.
    """

    def __init__(self, capacity: int = MAX_HISTORY, seed: StateSnapshot | None = None):
        if capacity < 2:
            raise ValueError(f"Timeline capacity must be at least 2, got {capacity}")
        self._capacity = capacity
        self._slots: list[StateSnapshot | None] = [None] * capacity
        self._base = 0
        self._top = -1
        self._cursor = -1
        if seed is not None:
            self.initialize(seed)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def top(self) -> int:
        return self._top

    @property
    def initialized(self) -> bool:
        return self._top >= 0

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < self._top

    def __len__(self) -> int:
        return self._top + 1

    def _slot(self, index: int) -> int:
        return (self._base + index) % self._capacity

    def _require_initialized(self):
        if not self.initialized:
            raise RuntimeError("Timeline used before initialize()")

    def initialize(self, seed: StateSnapshot):
        """Discard all history and start over from ``seed``."""
        self._slots = [None] * self._capacity
        self._base = 0
        self._slots[0] = seed
        self._top = 0
        self._cursor = 0

    def append(self, snapshot: StateSnapshot):
        """Commit ``snapshot`` as the new current entry.

        Truncates any redo branch first, then evicts the oldest entry if the
        window is full.
        """
        self._require_initialized()

        if self._cursor < self._top:
            logger.debug("Discarding %d redo entries", self._top - self._cursor)
            self._top = self._cursor

        if self._top + 1 >= self._capacity:
            logger.debug("History full (%d), evicting oldest entry", self._capacity)
            self._slots[self._base] = None
            self._base = (self._base + 1) % self._capacity
            self._top -= 1
            if self._cursor > 0:
                self._cursor -= 1

        self._top += 1
        self._cursor += 1
        self._slots[self._slot(self._cursor)] = snapshot

    def undo(self) -> bool:
        """Step back one entry. False if there is nothing to undo."""
        self._require_initialized()
        if self._cursor == 0:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        """Step forward one entry. False if there is nothing to redo."""
        self._require_initialized()
        if self._cursor == self._top:
            return False
        self._cursor += 1
        return True

    def current(self) -> StateSnapshot:
        self._require_initialized()
        return self._slots[self._slot(self._cursor)]

    def entries(self) -> list[StateSnapshot]:
        """Reachable entries, oldest first."""
        return [self._slots[self._slot(i)] for i in range(self._top + 1)]

    def to_dict(self) -> dict:
        return {
            "capacity": self._capacity,
            "cursor": self._cursor,
            "top": self._top,
            "entries": [s.to_dict() for s in self.entries()],
        }
