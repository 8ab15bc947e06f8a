"""Outline tab: editable task tree that edits the project through the session."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTreeWidget,
    QVBoxLayout,
    QWidget,
)

if TYPE_CHECKING:
    from ..main_window import MainWindow

OUTLINE_COLUMNS = ["WBS", "Task", "Start", "Days", "Progress %", "Color", "Details"]


def build_outline_tab(main: MainWindow) -> None:
    """Build Outline tab: task tree with add/delete/indent/outdent controls."""
    tab = QWidget()
    layout = QVBoxLayout(tab)
    hint = QLabel("Double-click a cell to edit. Changes go straight into the undo history.")
    hint.setStyleSheet("color: gray; font-size: 11px;")
    layout.addWidget(hint)
    row = QHBoxLayout()
    main.outline_add_btn = QPushButton("Add task")
    main.outline_delete_btn = QPushButton("Delete")
    main.outline_indent_btn = QPushButton("Indent")
    main.outline_outdent_btn = QPushButton("Outdent")
    for btn in (main.outline_add_btn, main.outline_delete_btn, main.outline_indent_btn, main.outline_outdent_btn):
        row.addWidget(btn)
    row.addStretch(1)
    layout.addLayout(row)
    main.outline_tree = QTreeWidget()
    main.outline_tree.setColumnCount(len(OUTLINE_COLUMNS))
    main.outline_tree.setHeaderLabels(OUTLINE_COLUMNS)
    main.outline_tree.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
    main.outline_tree.setEditTriggers(
        QAbstractItemView.EditTrigger.DoubleClicked | QAbstractItemView.EditTrigger.EditKeyPressed
    )
    main.outline_tree.header().setSectionResizeMode(1, QHeaderView.Stretch)
    layout.addWidget(main.outline_tree, 1)
    main.outline_tab_index = main.tabs.addTab(tab, "Outline")
