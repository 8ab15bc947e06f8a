"""Boundary contract of the interactive chart widget.

The widget owns its own mutable copy of the task graph. Only the
ReconciliationGuard talks to it, and only through these calls.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from planboard.model.snapshot import TaskGraph

ChangeCallback = Callable[[], None]


class WidgetAdapter(Protocol):
    def initialize(self, container: Any, graph: TaskGraph) -> Any:
        """Create the widget inside container, load graph, return a handle."""

    def serialize(self, handle: Any) -> TaskGraph:
        """Current state of the widget's private graph."""

    def teardown(self, handle: Any) -> None:
        """Destroy the widget instance behind handle."""

    def on_change(self, handle: Any, callback: ChangeCallback) -> None:
        """Invoke callback after every user-driven structural mutation."""

    def get_viewport_position(self, handle: Any) -> Any:
        """Opaque scroll/viewport offset."""

    def set_viewport_position(self, handle: Any, offset: Any) -> None:
        """Restore an offset previously returned by get_viewport_position."""
