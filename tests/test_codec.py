"""Tests for snapshot JSON encoding and legacy layout decoding."""

from datetime import date
import json
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planboard.defaults import initial_snapshot
from planboard.errors import MalformedSnapshot
from planboard.model.codec import dumps, loads, snapshot_to_dict
from planboard.model.snapshot import LinkKind, Task, TaskGraph


def test_snapshot_json_layout() -> None:
    data = snapshot_to_dict(initial_snapshot(date(2025, 1, 6)))
    assert set(data) == {"projectTitle", "taskGraph", "buildingRows"}
    task = data["taskGraph"]["tasks"][1]
    assert task == {
        "id": 2,
        "text": "Site survey",
        "startDate": "2025-01-06",
        "duration": 3,
        "parentId": 1,
        "color": "#3b82f6",
        "details": None,
        "progress": 0.0,
        "open": True,
    }
    assert data["taskGraph"]["links"][0] == {"id": 1, "sourceTaskId": 2, "targetTaskId": 3, "kind": "0"}
    assert data["buildingRows"][1]["note"] == "two floors"


def test_loads_restores_equal_snapshot() -> None:
    snapshot = initial_snapshot(date(2025, 1, 6))
    assert loads(dumps(snapshot)) == snapshot


def test_zero_task_id_survives_round_trip() -> None:
    graph = TaskGraph.of(
        [
            Task(id=0, text="Root", start_date=date(2025, 1, 6)),
            Task(id=1, text="Child", start_date=date(2025, 1, 7), parent_id=0),
        ]
    )
    snapshot = initial_snapshot(date(2025, 1, 6)).with_task_graph(graph)
    restored = loads(dumps(snapshot))
    assert restored == snapshot
    assert restored.task_graph.task(1).parent_id == 0


def test_parent_id_zero_is_kept_but_legacy_parent_zero_is_root() -> None:
    tasks = [
        {"id": 0, "text": "Root", "startDate": "2025-01-06", "parentId": None},
        {"id": 1, "text": "Child", "startDate": "2025-01-06", "parentId": 0},
        {"id": 2, "text": "Legacy", "start_date": "2025-01-06", "parent": 0},
    ]
    snapshot = loads(json.dumps({"projectTitle": "P", "taskGraph": {"tasks": tasks, "links": []}}))
    assert [t.parent_id for t in snapshot.task_graph.tasks] == [None, 0, None]


def test_loads_accepts_legacy_layout() -> None:
    legacy = {
        "projectTitle": "Depot upgrade",
        "ganttData": {
            "data": [
                {"id": 1, "text": "Phase", "start_date": "2025-02-03 00:00", "duration": 5, "parent": 0},
                {"id": 2, "text": "Step", "start_date": "03-02-2025", "duration": 2, "parent": 1, "progress": 1.7},
            ],
            "links": [{"id": 9, "source": 1, "target": 2, "type": "1"}],
        },
        "buildingData": [{"id": 5, "depot": "North", "name": "Shed", "size": "10x4", "note": None}],
    }
    snapshot = loads(json.dumps(legacy))
    first, second = snapshot.task_graph.tasks
    assert first.parent_id is None
    assert first.start_date == date(2025, 2, 3)
    assert second.parent_id == 1
    assert second.start_date == date(2025, 2, 3)
    assert second.progress == 1.0
    assert snapshot.task_graph.links[0].kind is LinkKind.START_TO_START
    assert snapshot.building_rows[0].note == ""


def test_dangling_references_are_loaded_not_rejected() -> None:
    raw = {
        "projectTitle": "P",
        "taskGraph": {
            "tasks": [{"id": "a", "text": "A", "startDate": "2025-01-01", "parentId": "ghost"}],
            "links": [{"id": 1, "sourceTaskId": "a", "targetTaskId": "missing", "kind": "finish_to_start"}],
        },
    }
    snapshot = loads(json.dumps(raw))
    assert snapshot.task_graph.tasks[0].parent_id == "ghost"
    assert snapshot.task_graph.links[0].target_task_id == "missing"


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[]",
        json.dumps({"taskGraph": {"tasks": [{"id": 1, "text": "x", "startDate": "someday"}]}}),
        json.dumps({"taskGraph": {"tasks": [{"id": 1.5, "text": "x", "startDate": "2025-01-01"}]}}),
        json.dumps({"taskGraph": {"tasks": [{"id": 1, "startDate": "2025-01-01", "duration": -2}]}}),
        json.dumps({"taskGraph": {"tasks": {"a": 1}, "links": []}}),
        json.dumps({"taskGraph": {"links": [{"id": 1, "sourceTaskId": 1, "targetTaskId": 2, "kind": "9"}]}}),
        json.dumps({"buildingRows": {"id": 1}}),
    ],
)
def test_undecodable_input_raises_malformed_snapshot(text: str) -> None:
    with pytest.raises(MalformedSnapshot):
        loads(text)


def test_malformed_snapshot_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        loads("null")
