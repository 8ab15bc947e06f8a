"""Qt bridge over ProjectSession: re-emits history moves as signals."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from planboard.model.snapshot import Snapshot
from planboard.session import ProjectSession
from planboard.sync.guard import ReconciliationGuard
from qt_app.adapters.gantt_adapter import GanttWidgetAdapter


def defer_to_event_loop(fn) -> None:
    """Run fn on the next event-loop turn."""
    QTimer.singleShot(0, fn)


class ProjectService(QObject):
    """Own the session and the chart guard for one window."""

    snapshot_changed = Signal(object)
    history_state_changed = Signal(bool, bool)

    def __init__(self, seed: Snapshot, parent: QObject | None = None, *, zoom: str = "day") -> None:
        super().__init__(parent)
        self._session = ProjectSession(seed)
        self._adapter = GanttWidgetAdapter(zoom=zoom)
        self._guard = ReconciliationGuard(self._adapter, self._session.history, defer=defer_to_event_loop)
        self._unsubscribe_views = self._session.subscribe(self._on_snapshot)

    @property
    def session(self) -> ProjectSession:
        return self._session

    @property
    def guard(self) -> ReconciliationGuard:
        return self._guard

    def attach_chart(self, container) -> bool:
        # Views are notified after the guard, so they see the chart state of the same move.
        self._unsubscribe_views()
        attached = self._guard.attach(container)
        self._unsubscribe_views = self._session.subscribe(self._on_snapshot)
        return attached

    def chart(self):
        """Live chart widget, or None when the chart could not be created."""
        return self._guard.handle

    def shutdown(self) -> None:
        self._guard.detach()

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self.snapshot_changed.emit(snapshot)
        self.history_state_changed.emit(self._session.can_undo, self._session.can_redo)
