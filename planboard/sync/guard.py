"""Single-writer reconciliation between the chart widget and the history.

The chart widget keeps an autonomous, user-draggable copy of the task graph;
the history owns the authoritative snapshot. Every state change has exactly
one origin:

* external: the widget fired ``on_change``. The guard serializes the widget,
  pushes one snapshot and opens a suppression window so the resulting
  "snapshot changed" notification is not echoed back into the widget.
* internal: the snapshot changed for any other reason (undo, redo, title or
  table edit). The guard compares the widget's serialization with the new
  task graph and rebuilds the widget only when they differ, keeping the
  viewport offset across the rebuild.

The suppression window closes on a deferred reset scheduled through the
injected ``defer`` callable (Qt: ``QTimer.singleShot(0, fn)``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional

from planboard.history.manager import HistoryManager
from planboard.logging import get_logger
from planboard.model.equality import task_graphs_equal
from planboard.model.snapshot import Snapshot
from planboard.sync.adapter import WidgetAdapter

_LOG = get_logger("sync")

Deferrer = Callable[[Callable[[], None]], None]


class GuardState(str, Enum):
    IDLE = "idle"
    APPLYING_EXTERNAL = "applying_external"
    APPLYING_INTERNAL = "applying_internal"


def _run_now(fn: Callable[[], None]) -> None:
    fn()


class ReconciliationGuard:
    def __init__(
        self,
        adapter: WidgetAdapter,
        history: HistoryManager,
        *,
        defer: Optional[Deferrer] = None,
    ) -> None:
        self._adapter = adapter
        self._history = history
        self._defer = defer or _run_now
        self._state = GuardState.IDLE
        self._container: Any = None
        self._handle: Any = None
        self._pending_resets = 0
        self._rebuild_count = 0
        self._suppressed_count = 0
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def handle(self) -> Any:
        return self._handle

    @property
    def is_attached(self) -> bool:
        return self._handle is not None

    @property
    def in_suppression_window(self) -> bool:
        return self._state is GuardState.APPLYING_EXTERNAL

    @property
    def rebuild_count(self) -> int:
        return self._rebuild_count

    @property
    def suppressed_count(self) -> int:
        return self._suppressed_count

    def attach(self, container: Any) -> bool:
        """Initialize the widget from the current snapshot and start listening.

        Returns False when the widget could not be created; the history keeps
        working and the chart view stays inert.
        """
        self._container = container
        if self._unsubscribe is None:
            self._unsubscribe = self._history.subscribe(self.on_snapshot_changed)
        self._handle = self._initialize(self._history.current())
        return self._handle is not None

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            self._adapter.teardown(handle)
        except Exception as exc:
            _LOG.error(f"chart teardown failed: {exc}")

    def _initialize(self, snapshot: Snapshot) -> Any:
        try:
            handle = self._adapter.initialize(self._container, snapshot.task_graph)
            self._adapter.on_change(handle, self._on_adapter_change)
        except Exception as exc:
            _LOG.error(f"chart initialization failed, view left inert: {exc}")
            return None
        return handle

    def _on_adapter_change(self) -> None:
        if self._state is GuardState.APPLYING_INTERNAL:
            # Echo of our own rebuild.
            return
        if self._handle is None:
            return
        try:
            graph = self._adapter.serialize(self._handle)
        except Exception as exc:
            _LOG.error(f"chart serialization failed, change dropped: {exc}")
            return
        self._state = GuardState.APPLYING_EXTERNAL
        self._pending_resets += 1
        try:
            self._history.push(self._history.current().with_task_graph(graph))
        finally:
            self._defer(self._end_external_window)

    def _end_external_window(self) -> None:
        self._pending_resets = max(0, self._pending_resets - 1)
        if self._pending_resets == 0 and self._state is GuardState.APPLYING_EXTERNAL:
            self._state = GuardState.IDLE

    def on_snapshot_changed(self, snapshot: Snapshot) -> None:
        """Generic snapshot-changed channel; fires for every history move."""
        if self._state is GuardState.APPLYING_EXTERNAL:
            self._suppressed_count += 1
            return
        if self._state is GuardState.APPLYING_INTERNAL or self._handle is None:
            return
        self._state = GuardState.APPLYING_INTERNAL
        try:
            self._reconcile(snapshot)
        finally:
            self._state = GuardState.IDLE

    def _reconcile(self, snapshot: Snapshot) -> None:
        handle = self._handle
        try:
            current = self._adapter.serialize(handle)
        except Exception as exc:
            _LOG.error(f"chart serialization failed, forcing rebuild: {exc}")
            current = None
        if current is not None and task_graphs_equal(current, snapshot.task_graph):
            _LOG.debug("task graph unchanged, chart rebuild skipped")
            return
        offset = None
        try:
            offset = self._adapter.get_viewport_position(handle)
        except Exception as exc:
            _LOG.warning(f"could not read chart viewport: {exc}")
        try:
            self._adapter.teardown(handle)
        except Exception as exc:
            _LOG.error(f"chart teardown failed: {exc}")
        self._handle = self._initialize(snapshot)
        if self._handle is None:
            return
        self._rebuild_count += 1
        _LOG.debug(f"chart rebuilt (#{self._rebuild_count})")
        if offset is None:
            return
        try:
            self._adapter.set_viewport_position(self._handle, offset)
        except Exception as exc:
            _LOG.warning(f"could not restore chart viewport: {exc}")
