"""Building table rendering and edits. Every edit pushes a new snapshot."""
from __future__ import annotations

import time
from dataclasses import replace
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMessageBox, QTableWidgetItem

from planboard.model.snapshot import BuildingRow

if TYPE_CHECKING:
    from ..main_window import MainWindow

_FIELDS = {1: "depot", 2: "name", 3: "size", 4: "note"}


def render_building_table(main: MainWindow, rows: tuple[BuildingRow, ...]) -> None:
    if rows == main._rendered_building_rows:
        return
    main._rendered_building_rows = rows
    main._building_loading = True
    try:
        main.building_table.setRowCount(len(rows))
        for index, row in enumerate(rows):
            number = QTableWidgetItem(str(index + 1))
            number.setFlags(number.flags() & ~Qt.ItemFlag.ItemIsEditable)
            main.building_table.setItem(index, 0, number)
            for column, field in _FIELDS.items():
                main.building_table.setItem(index, column, QTableWidgetItem(getattr(row, field)))
    finally:
        main._building_loading = False
    main.building_empty_label.setVisible(not rows)


def on_building_cell_changed(main: MainWindow, row: int, column: int) -> None:
    if main._building_loading or column not in _FIELDS:
        return
    rows = list(main.project.session.current().building_rows)
    if row < 0 or row >= len(rows):
        return
    item = main.building_table.item(row, column)
    value = item.text() if item is not None else ""
    field = _FIELDS[column]
    if getattr(rows[row], field) == value:
        return
    rows[row] = replace(rows[row], **{field: value})
    # The table already shows this value; skip re-rendering it.
    main._rendered_building_rows = tuple(rows)
    main.project.session.push_building_rows(rows)


def add_building_row(main: MainWindow) -> None:
    rows = list(main.project.session.current().building_rows)
    rows.append(BuildingRow(id=int(time.time() * 1000), depot="New depot", name="Building"))
    main.project.session.push_building_rows(rows)


def delete_building_row(main: MainWindow) -> None:
    index = main.building_table.currentRow()
    rows = list(main.project.session.current().building_rows)
    if index < 0 or index >= len(rows):
        return
    answer = QMessageBox.question(main, "Buildings", "Delete this row?")
    if answer != QMessageBox.StandardButton.Yes:
        return
    del rows[index]
    main.project.session.push_building_rows(rows)
