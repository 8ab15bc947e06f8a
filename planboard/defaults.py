"""Seed snapshot shown on first launch."""

from __future__ import annotations

from datetime import date, timedelta

from planboard.model.snapshot import BuildingRow, Link, LinkKind, Snapshot, Task, TaskGraph


def initial_snapshot(today: date | None = None) -> Snapshot:
    start = today or date.today()
    tasks = (
        Task(id=1, text="Preparation", start_date=start, duration=10, open=True),
        Task(id=2, text="Site survey", start_date=start, duration=3, parent_id=1, color="#3b82f6"),
        Task(id=3, text="Design review", start_date=start + timedelta(days=3), duration=5, parent_id=1),
        Task(id=4, text="Construction", start_date=start + timedelta(days=10), duration=30),
        Task(id=5, text="Foundations", start_date=start + timedelta(days=10), duration=12, parent_id=4, color="#34d399"),
        Task(id=6, text="Structure", start_date=start + timedelta(days=22), duration=18, parent_id=4),
        Task(id=7, text="Acceptance", start_date=start + timedelta(days=40), duration=2, color="#fbbf24"),
    )
    links = (
        Link(id=1, source_task_id=2, target_task_id=3, kind=LinkKind.FINISH_TO_START),
        Link(id=2, source_task_id=5, target_task_id=6, kind=LinkKind.FINISH_TO_START),
        Link(id=3, source_task_id=4, target_task_id=7, kind=LinkKind.FINISH_TO_START),
    )
    rows = (
        BuildingRow(id=1, depot="Central depot", name="Warehouse 1", size="60m x 24m", note=""),
        BuildingRow(id=2, depot="Central depot", name="Office block", size="30m x 12m", note="two floors"),
    )
    return Snapshot(project_title="New project", task_graph=TaskGraph.of(tasks, links), building_rows=rows)
