"""Mind map rendering."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import QTreeWidgetItem

from planboard.mindmap import MindNode, build_mind_tree
from planboard.model.snapshot import Snapshot

if TYPE_CHECKING:
    from ..main_window import MainWindow


def render_mind_map(main: MainWindow, snapshot: Snapshot) -> None:
    main.mindmap_tree.clear()
    root = build_mind_tree(snapshot)

    def _add(parent: QTreeWidgetItem | None, node: MindNode) -> QTreeWidgetItem:
        item = QTreeWidgetItem([node.topic])
        color = QColor(node.color) if node.color else None
        if color is not None and color.isValid():
            item.setBackground(0, QBrush(color))
        if parent is None:
            main.mindmap_tree.addTopLevelItem(item)
        else:
            parent.addChild(item)
        for child in node.children:
            _add(item, child)
        return item

    top = _add(None, root)
    font = top.font(0)
    font.setBold(True)
    top.setFont(0, font)
    main.mindmap_tree.expandAll()
