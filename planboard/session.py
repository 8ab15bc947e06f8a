"""Command surface: every non-chart edit of the project goes through here."""

from __future__ import annotations

from typing import Callable, Iterable

from planboard.history.manager import HistoryManager
from planboard.logging import get_logger
from planboard.model.snapshot import BuildingRow, Snapshot, TaskGraph
from planboard.model.validate import find_integrity_issues

_LOG = get_logger("session")


class ProjectSession:
    """Owns the history and funnels title, table and outline edits into it."""

    def __init__(self, seed: Snapshot, *, cap: int | None = None) -> None:
        self._history = HistoryManager(seed, cap=cap)
        self._history.subscribe(self._log_integrity)

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def current(self) -> Snapshot:
        return self._history.current()

    def subscribe(self, listener: Callable[[Snapshot], None]) -> Callable[[], None]:
        return self._history.subscribe(listener)

    def push(self, snapshot: Snapshot) -> Snapshot:
        return self._history.push(snapshot)

    def push_title(self, title: str) -> Snapshot:
        return self.push(self.current().with_title(title))

    def push_building_rows(self, rows: Iterable[BuildingRow]) -> Snapshot:
        return self.push(self.current().with_building_rows(rows))

    def push_task_graph(self, graph: TaskGraph) -> Snapshot:
        return self.push(self.current().with_task_graph(graph))

    def undo(self) -> Snapshot:
        return self._history.undo()

    def redo(self) -> Snapshot:
        return self._history.redo()

    @staticmethod
    def _log_integrity(snapshot: Snapshot) -> None:
        issues = find_integrity_issues(snapshot)
        if issues:
            _LOG.warning("snapshot has integrity issues: " + "; ".join(issues[:5]))
