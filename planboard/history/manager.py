"""Bounded linear undo/redo history of snapshots."""

from __future__ import annotations

from typing import Callable

from planboard.config import resolve_history_cap
from planboard.logging import get_logger
from planboard.model.snapshot import Snapshot

_LOG = get_logger("history")

SnapshotListener = Callable[[Snapshot], None]


class HistoryManager:
    """Ordered, bounded sequence of snapshots with a cursor.

    Pushing while the cursor is behind the tip discards the redo branch for
    good: there is no history tree. When the bound is exceeded the oldest
    entry (index 0) is evicted and the cursor shifts so the visible snapshot
    does not change.
    """

    def __init__(self, seed: Snapshot, *, cap: int | None = None) -> None:
        self._cap = cap if cap is not None else resolve_history_cap()
        if self._cap < 1:
            raise ValueError("history cap must be at least 1")
        self._entries: list[Snapshot] = [seed]
        self._cursor = 0
        self._listeners: list[SnapshotListener] = []

    @property
    def cap(self) -> int:
        return self._cap

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def current(self) -> Snapshot:
        return self._entries[self._cursor]

    def push(self, snapshot: Snapshot) -> Snapshot:
        del self._entries[self._cursor + 1:]
        self._entries.append(snapshot)
        self._cursor = len(self._entries) - 1
        if len(self._entries) > self._cap:
            self._entries.pop(0)
            self._cursor -= 1
        _LOG.debug(f"push -> cursor={self._cursor} size={len(self._entries)}")
        self._notify()
        return snapshot

    def undo(self) -> Snapshot:
        if not self.can_undo:
            return self.current()
        self._cursor -= 1
        _LOG.debug(f"undo -> cursor={self._cursor}")
        self._notify()
        return self.current()

    def redo(self) -> Snapshot:
        if not self.can_redo:
            return self.current()
        self._cursor += 1
        _LOG.debug(f"redo -> cursor={self._cursor}")
        self._notify()
        return self.current()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot-changed listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        current = self.current()
        for listener in list(self._listeners):
            listener(current)
