"""Widget adapter over GanttChartWidget for the reconciliation guard."""

from __future__ import annotations

from typing import Any, Callable

from PySide6.QtWidgets import QWidget

from planboard.errors import AdapterUnavailable
from planboard.model.snapshot import TaskGraph
from qt_app.ui.widgets.gantt_chart import ZOOM_LEVELS, GanttChartWidget


class GanttWidgetAdapter:
    """Creates chart instances inside a container widget; the handle is the chart itself.

    The viewport offset carries the zoom level too, so a rebuild keeps both the
    scroll position and the time scale.
    """

    def __init__(self, *, zoom: str = "day") -> None:
        self._zoom = zoom if zoom in ZOOM_LEVELS else "day"
        self._callbacks: dict[int, Callable[[], None]] = {}

    def initialize(self, container: Any, graph: TaskGraph) -> GanttChartWidget:
        if not isinstance(container, QWidget) or container.layout() is None:
            raise AdapterUnavailable("chart container is missing or has no layout")
        chart = GanttChartWidget(container)
        chart.set_zoom(self._zoom)
        chart.load_graph(graph)
        container.layout().addWidget(chart)
        if container.isVisible():
            chart.show()
        return chart

    def serialize(self, handle: GanttChartWidget) -> TaskGraph:
        return handle.graph()

    def teardown(self, handle: GanttChartWidget) -> None:
        self._zoom = handle.zoom_level
        callback = self._callbacks.pop(id(handle), None)
        if callback is not None:
            handle.graph_changed.disconnect(callback)
        handle.hide()
        handle.setParent(None)
        handle.deleteLater()

    def on_change(self, handle: GanttChartWidget, callback: Callable[[], None]) -> None:
        self._callbacks[id(handle)] = callback
        handle.graph_changed.connect(callback)

    def get_viewport_position(self, handle: GanttChartWidget) -> dict[str, Any]:
        x, y = handle.viewport_position()
        return {"zoom": handle.zoom_level, "x": x, "y": y}

    def set_viewport_position(self, handle: GanttChartWidget, offset: dict[str, Any]) -> None:
        handle.set_zoom(str(offset.get("zoom") or handle.zoom_level))
        handle.set_viewport_position((int(offset.get("x", 0)), int(offset.get("y", 0))))
