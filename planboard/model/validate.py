"""Structural integrity report for snapshots.

Nothing here rejects a snapshot: the chart may hold transiently inconsistent
graphs, and consumers must tolerate dangling references. The report is used
for diagnostics (session logging, `planboard check`).
"""

from __future__ import annotations

from planboard.model.snapshot import Snapshot, TaskGraph


def find_graph_issues(graph: TaskGraph) -> list[str]:
    issues: list[str] = []
    seen: set = set()
    for task in graph.tasks:
        if task.id in seen:
            issues.append(f"duplicate task id {task.id!r}")
        seen.add(task.id)

    parents = {task.id: task.parent_id for task in graph.tasks}
    for task in graph.tasks:
        if task.parent_id is not None and task.parent_id not in parents:
            issues.append(f"task {task.id!r} references missing parent {task.parent_id!r}")
        if task.parent_id == task.id:
            issues.append(f"task {task.id!r} is its own parent")

    reported: set = set()
    for start in parents:
        path: list = []
        node = start
        while node is not None and node in parents and node not in path:
            path.append(node)
            node = parents[node]
        if node is None or node not in path:
            continue
        cycle = path[path.index(node):]
        key = frozenset(cycle)
        # Single-node loops are reported as self-parents above.
        if len(cycle) > 1 and key not in reported:
            reported.add(key)
            issues.append("parent cycle: " + " -> ".join(repr(i) for i in cycle))

    link_ids: set = set()
    for link in graph.links:
        if link.id in link_ids:
            issues.append(f"duplicate link id {link.id!r}")
        link_ids.add(link.id)
        if link.source_task_id not in parents:
            issues.append(f"link {link.id!r} references missing source {link.source_task_id!r}")
        if link.target_task_id not in parents:
            issues.append(f"link {link.id!r} references missing target {link.target_task_id!r}")
    return issues


def find_integrity_issues(snapshot: Snapshot) -> list[str]:
    issues = find_graph_issues(snapshot.task_graph)
    row_ids: set = set()
    for row in snapshot.building_rows:
        if row.id in row_ids:
            issues.append(f"duplicate building row id {row.id!r}")
        row_ids.add(row.id)
    return issues
