"""Interactive Gantt chart widget: editable task grid plus draggable timeline bars.

The widget keeps its own private copy of the task graph. Every user-driven
structural change (add/delete/edit task, link, move, bar drag) updates that
copy and emits ``graph_changed``. ``load_graph`` replaces the copy without
emitting.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QBrush, QColor, QPen, QShowEvent
from PySide6.QtWidgets import (
    QAbstractItemView,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QGraphicsView,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QPushButton,
    QSplitter,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from planboard.model import edits
from planboard.model.codec import parse_date
from planboard.model.edits import effective_parents, wbs_codes
from planboard.model.snapshot import LinkKind, TaskGraph

ROW_HEIGHT = 28
BAR_HEIGHT = 18
DEFAULT_COLOR = "#3b82f6"
# Pixels per day for each zoom level, widest first.
ZOOM_LEVELS: dict[str, float] = {
    "day": 40.0,
    "week": 14.0,
    "month": 4.0,
    "quarter": 1.6,
    "year": 0.5,
}
ZOOM_ORDER = ["year", "quarter", "month", "week", "day"]

COL_WBS, COL_TEXT, COL_START, COL_DURATION = range(4)
_ID_ROLE = Qt.ItemDataRole.UserRole


class _BarItem(QGraphicsRectItem):
    """Task bar that can be dragged horizontally; release snaps to whole days."""

    def __init__(self, chart: "GanttChartWidget", task_id: Any, rect: QRectF) -> None:
        super().__init__(rect)
        self._chart = chart
        self._task_id = task_id
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemSendsGeometryChanges, True)
        self.setCursor(Qt.CursorShape.SizeHorCursor)

    @property
    def task_id(self) -> Any:
        return self._task_id

    def itemChange(self, change: QGraphicsItem.GraphicsItemChange, value: Any) -> Any:
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionChange:
            return QPointF(value.x(), 0.0)
        return super().itemChange(change, value)

    def mouseReleaseEvent(self, event: Any) -> None:
        super().mouseReleaseEvent(event)
        days = round(self.pos().x() / self._chart.pixels_per_day)
        self.setPos(0.0, 0.0)
        if not days:
            return
        chart, task_id = self._chart, self._task_id
        # The scene is rebuilt on commit; leave this item's event handler first.
        QTimer.singleShot(0, lambda: chart.shift_task(task_id, days))


class GanttChartWidget(QWidget):
    graph_changed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._graph = TaskGraph()
        self._loading = False
        self._zoom = "day"
        self._origin = date.today()
        # Scroll offset waiting for the layout to give the scrollbars their ranges.
        self._pending_offset: tuple[int, int] | None = None
        self._offset_timer = QTimer(self)
        self._offset_timer.setSingleShot(True)
        self._offset_timer.setInterval(0)
        self._build_ui()
        self._wire_events()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        row = QHBoxLayout()
        self.add_btn = QPushButton("Add task")
        self.add_child_btn = QPushButton("Add subtask")
        self.delete_btn = QPushButton("Delete")
        self.up_btn = QPushButton("Up")
        self.down_btn = QPushButton("Down")
        self.link_btn = QPushButton("Link to…")
        self.unlink_btn = QPushButton("Unlink")
        self.zoom_in_btn = QPushButton("Zoom in")
        self.zoom_out_btn = QPushButton("Zoom out")
        self.zoom_label = QLabel(self._zoom)
        for btn in (
            self.add_btn,
            self.add_child_btn,
            self.delete_btn,
            self.up_btn,
            self.down_btn,
            self.link_btn,
            self.unlink_btn,
        ):
            row.addWidget(btn)
        row.addStretch(1)
        row.addWidget(self.zoom_out_btn)
        row.addWidget(self.zoom_label)
        row.addWidget(self.zoom_in_btn)
        layout.addLayout(row)

        self.grid = QTreeWidget()
        self.grid.setColumnCount(4)
        self.grid.setHeaderLabels(["WBS", "Task", "Start", "Days"])
        self.grid.setColumnWidth(COL_WBS, 60)
        self.grid.setColumnWidth(COL_TEXT, 220)
        self.grid.setUniformRowHeights(True)
        self.grid.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.grid.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.grid.setEditTriggers(
            QAbstractItemView.EditTrigger.DoubleClicked | QAbstractItemView.EditTrigger.EditKeyPressed
        )
        self.grid.setStyleSheet(f"QTreeWidget::item {{ height: {ROW_HEIGHT}px; }}")

        self.scene = QGraphicsScene(self)
        self.timeline = QGraphicsView(self.scene)
        self.timeline.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.timeline.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.timeline.setResizeAnchor(QGraphicsView.ViewportAnchor.NoAnchor)

        split = QSplitter(Qt.Orientation.Horizontal)
        split.addWidget(self.grid)
        split.addWidget(self.timeline)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 3)
        layout.addWidget(split, 1)

    def _wire_events(self) -> None:
        self.add_btn.clicked.connect(lambda: self.add_task(as_child=False))
        self.add_child_btn.clicked.connect(lambda: self.add_task(as_child=True))
        self.delete_btn.clicked.connect(self.delete_selected)
        self.up_btn.clicked.connect(lambda: self.move_selected(-1))
        self.down_btn.clicked.connect(lambda: self.move_selected(1))
        self.link_btn.clicked.connect(self._prompt_link)
        self.unlink_btn.clicked.connect(self.unlink_selected)
        self.zoom_in_btn.clicked.connect(self.zoom_in)
        self.zoom_out_btn.clicked.connect(self.zoom_out)
        self.grid.itemChanged.connect(self._on_item_changed)
        self.grid.itemExpanded.connect(lambda item: self._on_item_toggled(item, True))
        self.grid.itemCollapsed.connect(lambda item: self._on_item_toggled(item, False))
        self._offset_timer.timeout.connect(self._apply_settled_offset)
        self.grid.verticalScrollBar().valueChanged.connect(self.timeline.verticalScrollBar().setValue)
        self.timeline.verticalScrollBar().valueChanged.connect(self.grid.verticalScrollBar().setValue)

    # --- state -------------------------------------------------------------

    @property
    def pixels_per_day(self) -> float:
        return ZOOM_LEVELS[self._zoom]

    @property
    def zoom_level(self) -> str:
        return self._zoom

    def graph(self) -> TaskGraph:
        return self._graph

    def load_graph(self, graph: TaskGraph) -> None:
        self._graph = graph
        self._render()

    def viewport_position(self) -> tuple[int, int]:
        if self._pending_offset is not None:
            return self._pending_offset
        return (
            self.timeline.horizontalScrollBar().value(),
            self.grid.verticalScrollBar().value(),
        )

    def set_viewport_position(self, offset: tuple[int, int]) -> None:
        """Scroll to ``offset`` now if laid out, and again once pending layout events ran.

        A freshly built chart has empty scrollbar ranges until it is shown and
        laid out, so the offset is kept until it can be applied.
        """
        x, y = offset
        self._pending_offset = (int(x), int(y))
        self._apply_pending_offset()
        self._offset_timer.start()

    def _settle_layout(self) -> None:
        parent = self.parentWidget()
        if parent is not None and parent.layout() is not None:
            parent.layout().activate()
        self.layout().activate()
        self.grid.doItemsLayout()

    def _apply_pending_offset(self) -> bool:
        if self._pending_offset is None or not self.isVisible():
            return False
        self._settle_layout()
        x, y = self._pending_offset
        self.timeline.horizontalScrollBar().setValue(x)
        self.grid.verticalScrollBar().setValue(y)
        return True

    def _apply_settled_offset(self) -> None:
        if self._apply_pending_offset():
            self._pending_offset = None

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        if self._pending_offset is not None:
            self._offset_timer.start()

    def set_zoom(self, level: str) -> None:
        if level not in ZOOM_LEVELS:
            return
        self._zoom = level
        self.zoom_label.setText(level)
        self._render_timeline()

    def zoom_in(self) -> None:
        idx = ZOOM_ORDER.index(self._zoom)
        if idx < len(ZOOM_ORDER) - 1:
            self.set_zoom(ZOOM_ORDER[idx + 1])

    def zoom_out(self) -> None:
        idx = ZOOM_ORDER.index(self._zoom)
        if idx > 0:
            self.set_zoom(ZOOM_ORDER[idx - 1])

    def selected_task_id(self) -> Any:
        items = self.grid.selectedItems()
        return items[0].data(COL_WBS, _ID_ROLE) if items else None

    def _commit(self, graph: TaskGraph) -> None:
        selected = self.selected_task_id()
        offset = self.viewport_position()
        self._graph = graph
        self._render()
        self.set_viewport_position(offset)
        if selected is not None:
            self._select(selected)
        self.graph_changed.emit()

    # --- user operations ---------------------------------------------------

    def add_task(self, *, as_child: bool) -> None:
        selected = self.selected_task_id()
        parent = selected if as_child else None
        anchor = self._graph.task(selected) if selected is not None else None
        start = anchor.start_date if anchor is not None else date.today()
        graph, task = edits.add_task(
            self._graph, text="New task", start_date=start, duration=1, parent_id=parent
        )
        self._commit(graph)
        self._select(task.id)

    def delete_selected(self) -> None:
        selected = self.selected_task_id()
        if selected is None:
            return
        self._commit(edits.remove_task(self._graph, selected))

    def move_selected(self, step: int) -> None:
        selected = self.selected_task_id()
        if selected is None:
            return
        moved = edits.move_task(self._graph, selected, step)
        if moved is not self._graph:
            self._commit(moved)

    def shift_task(self, task_id: Any, days: int) -> None:
        self._commit(edits.shift_task(self._graph, task_id, days))

    def link_tasks(self, source_id: Any, target_id: Any, kind: LinkKind = LinkKind.FINISH_TO_START) -> None:
        graph, _link = edits.add_link(self._graph, source_id, target_id, kind)
        self._commit(graph)

    def unlink_selected(self) -> None:
        selected = self.selected_task_id()
        if selected is None:
            return
        graph = self._graph
        for link in self._graph.links:
            if selected in (link.source_task_id, link.target_task_id):
                graph = edits.remove_link(graph, link.id)
        if graph is not self._graph:
            self._commit(graph)

    def _prompt_link(self) -> None:
        source = self.selected_task_id()
        if source is None:
            return
        others = [t for t in self._graph.tasks if t.id != source]
        if not others:
            return
        labels = [f"{t.id}: {t.text}" for t in others]
        choice, ok = QInputDialog.getItem(self, "Link to", "Successor task:", labels, 0, False)
        if ok and choice in labels:
            self.link_tasks(source, others[labels.index(choice)].id)

    def _on_item_changed(self, item: QTreeWidgetItem, column: int) -> None:
        if self._loading:
            return
        task_id = item.data(COL_WBS, _ID_ROLE)
        task = self._graph.task(task_id)
        if task is None:
            return
        value = item.text(column).strip()
        try:
            if column == COL_TEXT:
                changes = {"text": value}
            elif column == COL_START:
                changes = {"start_date": parse_date(value)}
            elif column == COL_DURATION:
                changes = {"duration": max(0, int(value))}
            else:
                return
        except ValueError:
            # Unparseable input: redraw the row from the private graph.
            self._render()
            return
        graph = edits.update_task(self._graph, task_id, **changes)
        # The grid is rebuilt on commit; let the item editor close first.
        QTimer.singleShot(0, lambda: self._commit(graph))

    def _on_item_toggled(self, item: QTreeWidgetItem, expanded: bool) -> None:
        self._render_timeline()
        if self._loading:
            return
        task_id = item.data(COL_WBS, _ID_ROLE)
        task = self._graph.task(task_id)
        if task is None or task.open == expanded:
            return
        # The grid already shows the new state; only the private graph changes.
        self._graph = edits.update_task(self._graph, task_id, open=expanded)
        self.graph_changed.emit()

    # --- rendering ---------------------------------------------------------

    def _select(self, task_id: Any) -> None:
        it = self._find_item(task_id)
        if it is not None:
            self.grid.setCurrentItem(it)

    def _find_item(self, task_id: Any) -> Optional[QTreeWidgetItem]:
        stack = [self.grid.topLevelItem(i) for i in range(self.grid.topLevelItemCount())]
        while stack:
            it = stack.pop()
            if it.data(COL_WBS, _ID_ROLE) == task_id:
                return it
            stack.extend(it.child(i) for i in range(it.childCount()))
        return None

    def _render(self) -> None:
        self._loading = True
        try:
            self._render_grid()
        finally:
            self._loading = False
        self._render_timeline()

    def _render_grid(self) -> None:
        self.grid.clear()
        codes = wbs_codes(self._graph)
        items: dict = {}
        parents = effective_parents(self._graph)
        for task in self._graph.tasks:
            item = QTreeWidgetItem(
                [codes.get(task.id, ""), task.text, task.start_date.isoformat(), str(task.duration)]
            )
            item.setData(COL_WBS, _ID_ROLE, task.id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsEditable)
            items[task.id] = item
        for task in self._graph.tasks:
            parent = items.get(parents.get(task.id))
            if parent is not None:
                parent.addChild(items[task.id])
            else:
                self.grid.addTopLevelItem(items[task.id])
        for task in self._graph.tasks:
            items[task.id].setExpanded(task.open)

    def _visible_rows(self) -> list[Any]:
        rows: list[Any] = []

        def _walk(item: QTreeWidgetItem) -> None:
            rows.append(item.data(COL_WBS, _ID_ROLE))
            if item.isExpanded():
                for i in range(item.childCount()):
                    _walk(item.child(i))

        for i in range(self.grid.topLevelItemCount()):
            _walk(self.grid.topLevelItem(i))
        return rows

    def _render_timeline(self) -> None:
        self.scene.clear()
        tasks = self._graph.tasks
        if tasks:
            self._origin = min(t.start_date for t in tasks) - timedelta(days=2)
        ppd = self.pixels_per_day
        rows = self._visible_rows()
        row_of = {task_id: index for index, task_id in enumerate(rows)}
        span_days = 30
        for task in tasks:
            span_days = max(span_days, (task.end_date - self._origin).days + 7)
        for index, task_id in enumerate(rows):
            task = self._graph.task(task_id)
            if task is None:
                continue
            x = (task.start_date - self._origin).days * ppd
            y = index * ROW_HEIGHT + (ROW_HEIGHT - BAR_HEIGHT) / 2
            width = max(task.duration * ppd, 3.0)
            bar = _BarItem(self, task.id, QRectF(x, y, width, BAR_HEIGHT))
            color = QColor(task.color or DEFAULT_COLOR)
            if not color.isValid():
                color = QColor(DEFAULT_COLOR)
            bar.setBrush(QBrush(color))
            bar.setPen(QPen(color.darker(130)))
            bar.setToolTip(
                f"{task.text}\n{task.start_date.isoformat()} → {task.end_date.isoformat()}"
                f" ({task.duration} d)" + (f"\n{task.details}" if task.details else "")
            )
            self.scene.addItem(bar)
            label = QGraphicsSimpleTextItem(task.text, bar)
            label.setPos(x + width + 4, y)
        for link in self._graph.links:
            source = self._graph.task(link.source_task_id)
            target = self._graph.task(link.target_task_id)
            # Links to missing or collapsed tasks are not drawn.
            if source is None or target is None:
                continue
            if source.id not in row_of or target.id not in row_of:
                continue
            x1 = (source.end_date - self._origin).days * ppd
            y1 = row_of[source.id] * ROW_HEIGHT + ROW_HEIGHT / 2
            x2 = (target.start_date - self._origin).days * ppd
            y2 = row_of[target.id] * ROW_HEIGHT + ROW_HEIGHT / 2
            line = QGraphicsLineItem(x1, y1, x2, y2)
            line.setPen(QPen(QColor("#94a3b8"), 1.5))
            self.scene.addItem(line)
        today_x = (date.today() - self._origin).days * ppd
        height = max(len(rows), 1) * ROW_HEIGHT
        marker = QGraphicsLineItem(today_x, 0, today_x, height)
        marker.setPen(QPen(QColor("#ef4444"), 1, Qt.PenStyle.DashLine))
        marker.setToolTip(f"Today: {date.today().isoformat()}")
        self.scene.addItem(marker)
        self.scene.setSceneRect(0, 0, span_days * ppd, height)
