"""Mind-map tree derived from a snapshot (read-only view model)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from planboard.model.snapshot import Snapshot

ROOT_ID = "root"


@dataclass
class MindNode:
    id: str
    topic: str
    color: Optional[str] = None
    children: list["MindNode"] = field(default_factory=list)

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()


def build_mind_tree(snapshot: Snapshot) -> MindNode:
    """Root node titled after the project; tasks nested by parent.

    Tasks whose parent is missing, or that sit in a parent cycle, hang off the
    root so every task appears exactly once.
    """
    root = MindNode(id=ROOT_ID, topic=snapshot.project_title)
    tasks = snapshot.task_graph.tasks
    nodes = {t.id: MindNode(id=str(t.id), topic=t.text, color=t.color or None) for t in tasks}
    children: dict = {}
    for t in tasks:
        children.setdefault(t.parent_id, []).append(t.id)

    placed: set = set()

    def _attach(parent: MindNode, task_id) -> None:
        if task_id in placed:
            return
        placed.add(task_id)
        node = nodes[task_id]
        parent.children.append(node)
        for child_id in children.get(task_id, []):
            _attach(node, child_id)

    for t in tasks:
        if t.parent_id is None or t.parent_id not in nodes:
            _attach(root, t.id)
    for t in tasks:
        if t.id not in placed:
            _attach(root, t.id)
    return root
