"""JSON encoding of snapshots.

Keys follow the snapshot field names (projectTitle, taskGraph, buildingRows).
Decoding also accepts the legacy export layout (ganttData/buildingData with
start_date/parent/source/target/type keys).
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from planboard.errors import MalformedSnapshot
from planboard.model.snapshot import BuildingRow, Link, LinkKind, Snapshot, Task, TaskGraph

DATE_FORMAT = "%Y-%m-%d"


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "startDate": task.start_date.strftime(DATE_FORMAT),
        "duration": task.duration,
        "parentId": task.parent_id,
        "color": task.color,
        "details": task.details,
        "progress": task.progress,
        "open": task.open,
    }


def link_to_dict(link: Link) -> dict[str, Any]:
    return {
        "id": link.id,
        "sourceTaskId": link.source_task_id,
        "targetTaskId": link.target_task_id,
        "kind": link.kind.value,
    }


def building_row_to_dict(row: BuildingRow) -> dict[str, Any]:
    return {"id": row.id, "depot": row.depot, "name": row.name, "size": row.size, "note": row.note}


def task_graph_to_dict(graph: TaskGraph) -> dict[str, Any]:
    return {
        "tasks": [task_to_dict(t) for t in graph.tasks],
        "links": [link_to_dict(link) for link in graph.links],
    }


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "projectTitle": snapshot.project_title,
        "taskGraph": task_graph_to_dict(snapshot.task_graph),
        "buildingRows": [building_row_to_dict(r) for r in snapshot.building_rows],
    }


def dumps(snapshot: Snapshot) -> str:
    return json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False, indent=2)


def _parse_id(raw: Any, what: str) -> Any:
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise MalformedSnapshot(f"{what}: id must be a string or integer, got {raw!r}")
    return raw


def _parse_optional_id(raw: Any, what: str, *, legacy: bool = False) -> Any:
    if raw is None:
        return None
    # Legacy exports use 0 / "" for "no parent"; 0 is a real id otherwise.
    if legacy and raw in ("", 0, "0"):
        return None
    return _parse_id(raw, what)


def parse_date(raw: Any) -> date:
    if isinstance(raw, date):
        return raw
    text = str(raw or "").strip()
    # Legacy layouts may carry a time part ("2025-01-02 00:00").
    for fmt in (DATE_FORMAT, "%Y-%m-%d %H:%M", "%d-%m-%Y %H:%M", "%d-%m-%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise MalformedSnapshot(f"Invalid date: {raw!r}")


def _optional_text(raw: Any) -> str | None:
    return None if raw is None else str(raw)


def task_from_dict(data: dict[str, Any]) -> Task:
    if not isinstance(data, dict):
        raise MalformedSnapshot(f"Task must be an object, got {type(data).__name__}")
    task_id = _parse_id(data.get("id"), "task")
    start = data.get("startDate", data.get("start_date"))
    legacy_parent = "parentId" not in data
    parent = data.get("parent") if legacy_parent else data["parentId"]
    try:
        duration = int(data.get("duration", 1) or 0)
        progress = float(data.get("progress", 0) or 0)
        return Task(
            id=task_id,
            text=str(data.get("text", "")),
            start_date=parse_date(start),
            duration=duration,
            parent_id=_parse_optional_id(parent, f"task {task_id!r} parent", legacy=legacy_parent),
            color=_optional_text(data.get("color")),
            details=_optional_text(data.get("details")),
            progress=min(1.0, max(0.0, progress)),
            open=bool(data.get("open", True)),
        )
    except MalformedSnapshot:
        raise
    except (TypeError, ValueError) as exc:
        raise MalformedSnapshot(f"Task {task_id!r}: {exc}") from exc


def link_from_dict(data: dict[str, Any]) -> Link:
    if not isinstance(data, dict):
        raise MalformedSnapshot(f"Link must be an object, got {type(data).__name__}")
    link_id = _parse_id(data.get("id"), "link")
    try:
        kind = LinkKind.parse(data.get("kind", data.get("type", LinkKind.FINISH_TO_START.value)))
    except ValueError as exc:
        raise MalformedSnapshot(f"Link {link_id!r}: {exc}") from exc
    return Link(
        id=link_id,
        source_task_id=_parse_id(data.get("sourceTaskId", data.get("source")), f"link {link_id!r} source"),
        target_task_id=_parse_id(data.get("targetTaskId", data.get("target")), f"link {link_id!r} target"),
        kind=kind,
    )


def building_row_from_dict(data: dict[str, Any]) -> BuildingRow:
    if not isinstance(data, dict):
        raise MalformedSnapshot(f"Building row must be an object, got {type(data).__name__}")
    return BuildingRow(
        id=_parse_id(data.get("id"), "building row"),
        depot=str(data.get("depot", "") or ""),
        name=str(data.get("name", "") or ""),
        size=str(data.get("size", "") or ""),
        note=str(data.get("note", "") or ""),
    )


def task_graph_from_dict(data: dict[str, Any]) -> TaskGraph:
    if not isinstance(data, dict):
        raise MalformedSnapshot("taskGraph must be an object")
    tasks = data.get("tasks", data.get("data")) or []
    links = data.get("links") or []
    if not isinstance(tasks, list) or not isinstance(links, list):
        raise MalformedSnapshot("tasks and links must be arrays")
    return TaskGraph.of(
        tasks=[task_from_dict(t) for t in tasks],
        links=[link_from_dict(link) for link in links],
    )


def snapshot_from_dict(data: dict[str, Any]) -> Snapshot:
    if not isinstance(data, dict):
        raise MalformedSnapshot("Snapshot must be a JSON object")
    graph_raw = data.get("taskGraph", data.get("ganttData")) or {}
    rows_raw = data.get("buildingRows", data.get("buildingData")) or []
    if not isinstance(rows_raw, list):
        raise MalformedSnapshot("buildingRows must be an array")
    return Snapshot(
        project_title=str(data.get("projectTitle", "") or ""),
        task_graph=task_graph_from_dict(graph_raw),
        building_rows=tuple(building_row_from_dict(r) for r in rows_raw),
    )


def loads(text: str) -> Snapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedSnapshot(f"Invalid JSON: {exc}") from exc
    return snapshot_from_dict(data)
