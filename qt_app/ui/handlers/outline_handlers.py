"""Outline tree: internal edits of the task graph through the session."""
from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QMessageBox, QTreeWidgetItem

from planboard.model import edits
from planboard.model.codec import parse_date
from planboard.model.edits import effective_parents, wbs_codes
from planboard.model.equality import task_graphs_equal
from planboard.model.snapshot import TaskGraph

if TYPE_CHECKING:
    from ..main_window import MainWindow

COL_WBS, COL_TEXT, COL_START, COL_DAYS, COL_PROGRESS, COL_COLOR, COL_DETAILS = range(7)
_ID_ROLE = Qt.ItemDataRole.UserRole


def render_outline(main: MainWindow, graph: TaskGraph) -> None:
    if task_graphs_equal(graph, main._rendered_outline_graph):
        return
    main._rendered_outline_graph = graph
    selected = selected_outline_task(main)
    main._outline_loading = True
    try:
        main.outline_tree.clear()
        codes = wbs_codes(graph)
        parents = effective_parents(graph)
        items: dict = {}
        for task in graph.tasks:
            item = QTreeWidgetItem(
                [
                    codes.get(task.id, ""),
                    task.text,
                    task.start_date.isoformat(),
                    str(task.duration),
                    str(round(task.progress * 100)),
                    task.color or "",
                    task.details or "",
                ]
            )
            item.setData(COL_WBS, _ID_ROLE, task.id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsEditable)
            items[task.id] = item
        for task in graph.tasks:
            parent = items.get(parents.get(task.id))
            if parent is not None:
                parent.addChild(items[task.id])
            else:
                main.outline_tree.addTopLevelItem(items[task.id])
        main.outline_tree.expandAll()
        if selected in items:
            main.outline_tree.setCurrentItem(items[selected])
    finally:
        main._outline_loading = False


def selected_outline_task(main: MainWindow) -> Any:
    items = main.outline_tree.selectedItems()
    return items[0].data(COL_WBS, _ID_ROLE) if items else None


def _changes_for(column: int, value: str) -> dict[str, Any] | None:
    if column == COL_TEXT:
        return {"text": value}
    if column == COL_START:
        return {"start_date": parse_date(value)}
    if column == COL_DAYS:
        return {"duration": max(0, int(value))}
    if column == COL_PROGRESS:
        return {"progress": min(100, max(0, int(value))) / 100}
    if column == COL_COLOR:
        return {"color": value or None}
    if column == COL_DETAILS:
        return {"details": value or None}
    return None


def on_outline_item_changed(main: MainWindow, item: QTreeWidgetItem, column: int) -> None:
    if main._outline_loading:
        return
    task_id = item.data(COL_WBS, _ID_ROLE)
    graph = main.project.session.current().task_graph
    if graph.task(task_id) is None:
        return
    value = item.text(column).strip()
    try:
        changes = _changes_for(column, value)
    except ValueError:
        main.status_label.setText(f"Invalid value: {value!r}")
        main._rendered_outline_graph = None
        # Redraw after the item editor has closed.
        QTimer.singleShot(0, lambda: render_outline(main, graph))
        return
    if changes is None:
        return
    updated = edits.update_task(graph, task_id, **changes)
    if task_graphs_equal(updated, graph):
        return
    # The tree already shows the edited value; skip re-rendering it.
    main._rendered_outline_graph = updated
    main.project.session.push_task_graph(updated)


def add_outline_task(main: MainWindow) -> None:
    graph = main.project.session.current().task_graph
    selected = graph.task(selected_outline_task(main))
    parent = selected.parent_id if selected is not None else None
    start = selected.start_date if selected is not None else date.today()
    updated, _task = edits.add_task(graph, text="New task", start_date=start, parent_id=parent)
    main.project.session.push_task_graph(updated)


def delete_outline_task(main: MainWindow) -> None:
    task_id = selected_outline_task(main)
    if task_id is None:
        return
    graph = main.project.session.current().task_graph
    main.project.session.push_task_graph(edits.remove_task(graph, task_id))


def indent_outline_task(main: MainWindow) -> None:
    """Make the selected task a child of the sibling above it."""
    task_id = selected_outline_task(main)
    graph = main.project.session.current().task_graph
    task = graph.task(task_id)
    if task is None:
        return
    siblings = [t.id for t in graph.tasks if t.parent_id == task.parent_id]
    index = siblings.index(task_id)
    if index == 0:
        return
    main.project.session.push_task_graph(
        edits.update_task(graph, task_id, parent_id=siblings[index - 1])
    )


def outdent_outline_task(main: MainWindow) -> None:
    """Move the selected task up one level, next to its former parent."""
    task_id = selected_outline_task(main)
    graph = main.project.session.current().task_graph
    task = graph.task(task_id)
    if task is None or task.parent_id is None:
        return
    parent = graph.task(task.parent_id)
    try:
        updated = edits.update_task(graph, task_id, parent_id=parent.parent_id if parent else None)
    except ValueError as exc:
        QMessageBox.warning(main, "Outline", str(exc))
        return
    main.project.session.push_task_graph(updated)
