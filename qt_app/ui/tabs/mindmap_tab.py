"""Mind map tab: read-only breakdown tree rooted at the project title."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtWidgets import QTreeWidget, QVBoxLayout, QWidget

if TYPE_CHECKING:
    from ..main_window import MainWindow


def build_mindmap_tab(main: MainWindow) -> None:
    tab = QWidget()
    layout = QVBoxLayout(tab)
    main.mindmap_tree = QTreeWidget()
    main.mindmap_tree.setHeaderHidden(True)
    main.mindmap_tree.setIndentation(28)
    layout.addWidget(main.mindmap_tree, 1)
    main.mindmap_tab_index = main.tabs.addTab(tab, "Mind map")
