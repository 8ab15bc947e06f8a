from datetime import date
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planboard.defaults import initial_snapshot
from planboard.mindmap import ROOT_ID, build_mind_tree
from planboard.model.snapshot import Snapshot, Task, TaskGraph

D = date(2025, 6, 2)


def test_tree_is_rooted_at_project_title() -> None:
    tree = build_mind_tree(initial_snapshot(D))
    assert tree.id == ROOT_ID
    assert tree.topic == "New project"
    assert [c.topic for c in tree.children] == ["Preparation", "Construction", "Acceptance"]
    prep = tree.children[0]
    assert [c.topic for c in prep.children] == ["Site survey", "Design review"]
    assert prep.children[0].color == "#3b82f6"


def test_orphans_and_cycles_attach_to_root_exactly_once() -> None:
    snapshot = Snapshot(
        project_title="Broken",
        task_graph=TaskGraph.of(
            [
                Task(id=1, text="orphan", start_date=D, parent_id=404),
                Task(id=2, text="loop-a", start_date=D, parent_id=3),
                Task(id=3, text="loop-b", start_date=D, parent_id=2),
                Task(id=4, text="child", start_date=D, parent_id=1, color=""),
            ]
        ),
    )
    tree = build_mind_tree(snapshot)
    topics = [n.topic for n in tree.walk()]
    assert sorted(topics) == sorted(["Broken", "orphan", "loop-a", "loop-b", "child"])
    assert tree.children[0].topic == "orphan"
    assert tree.children[0].children[0].color is None
