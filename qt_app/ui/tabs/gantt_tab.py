"""Gantt tab: container the chart adapter builds the interactive chart into."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

if TYPE_CHECKING:
    from ..main_window import MainWindow


def build_gantt_tab(main: MainWindow) -> None:
    """Build Gantt tab: empty container plus a hint shown when the chart is unavailable."""
    tab = QWidget()
    layout = QVBoxLayout(tab)
    layout.setContentsMargins(6, 6, 6, 6)
    main.gantt_unavailable_label = QLabel("Chart unavailable: see log output. Other views keep working.")
    main.gantt_unavailable_label.setStyleSheet("color: #c00;")
    main.gantt_unavailable_label.setVisible(False)
    layout.addWidget(main.gantt_unavailable_label)
    main.gantt_container = QWidget()
    container_layout = QVBoxLayout(main.gantt_container)
    container_layout.setContentsMargins(0, 0, 0, 0)
    layout.addWidget(main.gantt_container, 1)
    main.gantt_tab_index = main.tabs.addTab(tab, "Gantt")
