"""Buildings tab: per-building detail table."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

if TYPE_CHECKING:
    from ..main_window import MainWindow

BUILDING_COLUMNS = ["No.", "Depot", "Name", "Size / capacity", "Note"]


def build_building_tab(main: MainWindow) -> None:
    """Build Buildings tab: add button and editable table (row number column is read-only)."""
    tab = QWidget()
    layout = QVBoxLayout(tab)
    top = QHBoxLayout()
    title = QLabel("Building list")
    title.setStyleSheet("font-weight: bold;")
    top.addWidget(title)
    top.addStretch(1)
    main.building_add_btn = QPushButton("Add")
    main.building_delete_btn = QPushButton("Delete row")
    top.addWidget(main.building_add_btn)
    top.addWidget(main.building_delete_btn)
    layout.addLayout(top)
    main.building_table = QTableWidget(0, len(BUILDING_COLUMNS))
    main.building_table.setHorizontalHeaderLabels(BUILDING_COLUMNS)
    header = main.building_table.horizontalHeader()
    header.setSectionResizeMode(0, QHeaderView.ResizeToContents)
    header.setSectionResizeMode(2, QHeaderView.Stretch)
    header.setSectionResizeMode(4, QHeaderView.Stretch)
    layout.addWidget(main.building_table, 1)
    main.building_empty_label = QLabel("No data")
    main.building_empty_label.setStyleSheet("color: gray;")
    layout.addWidget(main.building_empty_label)
    main.building_tab_index = main.tabs.addTab(tab, "Buildings")
