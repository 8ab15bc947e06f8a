"""Pure task-graph edit operations shared by the chart widget and the outline view.

Each function returns a new TaskGraph; inputs are never modified.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Iterable, Optional

from planboard.model.snapshot import Link, LinkKind, Task, TaskGraph, TaskId


def next_id(existing: Iterable[TaskId]) -> int:
    """Smallest integer id greater than every integer-like id in use."""
    highest = 0
    for raw in existing:
        try:
            highest = max(highest, int(raw))
        except (TypeError, ValueError):
            continue
    return highest + 1


def descendants_of(graph: TaskGraph, task_id: TaskId) -> set:
    found: set = set()
    frontier = [task_id]
    while frontier:
        parent = frontier.pop()
        for task in graph.tasks:
            if task.parent_id == parent and task.id not in found and task.id != task_id:
                found.add(task.id)
                frontier.append(task.id)
    return found


def add_task(
    graph: TaskGraph,
    *,
    text: str,
    start_date: date,
    duration: int = 1,
    parent_id: Optional[TaskId] = None,
    task_id: Optional[TaskId] = None,
) -> tuple[TaskGraph, Task]:
    """Append a task after the last task of its subtree (or at the end for roots)."""
    new_task = Task(
        id=task_id if task_id is not None else next_id(graph.task_ids()),
        text=text,
        start_date=start_date,
        duration=duration,
        parent_id=parent_id,
    )
    tasks = list(graph.tasks)
    insert_at = len(tasks)
    if parent_id is not None:
        subtree = descendants_of(graph, parent_id) | {parent_id}
        positions = [i for i, t in enumerate(tasks) if t.id in subtree]
        if positions:
            insert_at = positions[-1] + 1
    tasks.insert(insert_at, new_task)
    return TaskGraph.of(tasks, graph.links), new_task


def remove_task(graph: TaskGraph, task_id: TaskId) -> TaskGraph:
    """Remove a task, its whole subtree and every link touching them."""
    doomed = descendants_of(graph, task_id) | {task_id}
    tasks = [t for t in graph.tasks if t.id not in doomed]
    links = [
        link
        for link in graph.links
        if link.source_task_id not in doomed and link.target_task_id not in doomed
    ]
    return TaskGraph.of(tasks, links)


def update_task(graph: TaskGraph, task_id: TaskId, **changes: Any) -> TaskGraph:
    if "parent_id" in changes:
        new_parent = changes["parent_id"]
        if new_parent is not None and (
            new_parent == task_id or new_parent in descendants_of(graph, task_id)
        ):
            raise ValueError(f"Task {task_id!r} cannot be moved under its own subtree")
    tasks = tuple(replace(t, **changes) if t.id == task_id else t for t in graph.tasks)
    return TaskGraph(tasks=tasks, links=graph.links)


def shift_task(graph: TaskGraph, task_id: TaskId, days: int) -> TaskGraph:
    task = graph.task(task_id)
    if task is None or days == 0:
        return graph
    return update_task(graph, task_id, start_date=date.fromordinal(task.start_date.toordinal() + days))


def move_task(graph: TaskGraph, task_id: TaskId, step: int) -> TaskGraph:
    """Swap a task's subtree with the neighbouring sibling subtree (step -1 up, +1 down)."""
    task = graph.task(task_id)
    if task is None or step == 0:
        return graph
    siblings = [t.id for t in graph.tasks if t.parent_id == task.parent_id]
    index = siblings.index(task_id)
    target = index + (1 if step > 0 else -1)
    if target < 0 or target >= len(siblings):
        return graph
    first, second = sorted((task_id, siblings[target]), key=siblings.index)

    def _block(root: TaskId) -> list[Task]:
        members = descendants_of(graph, root) | {root}
        return [t for t in graph.tasks if t.id in members]

    block_a, block_b = _block(first), _block(second)
    moved = {t.id for t in block_a} | {t.id for t in block_b}
    result: list[Task] = []
    emitted = False
    for t in graph.tasks:
        if t.id in moved:
            if not emitted:
                result.extend(block_b)
                result.extend(block_a)
                emitted = True
            continue
        result.append(t)
    return TaskGraph.of(result, graph.links)


def add_link(
    graph: TaskGraph,
    source_task_id: TaskId,
    target_task_id: TaskId,
    kind: LinkKind = LinkKind.FINISH_TO_START,
) -> tuple[TaskGraph, Link]:
    link = Link(
        id=next_id(link.id for link in graph.links),
        source_task_id=source_task_id,
        target_task_id=target_task_id,
        kind=kind,
    )
    return TaskGraph(tasks=graph.tasks, links=graph.links + (link,)), link


def remove_link(graph: TaskGraph, link_id: TaskId) -> TaskGraph:
    return TaskGraph(tasks=graph.tasks, links=tuple(l for l in graph.links if l.id != link_id))


def wbs_codes(graph: TaskGraph) -> dict:
    """Outline numbers ("1", "1.2", "1.2.1") by task id; orphans number as roots."""
    known = graph.task_ids()
    codes: dict = {}
    counters: dict = {}
    pending = list(graph.tasks)
    # Parents may appear after their children in display order; iterate until stable.
    while pending:
        progressed = False
        rest: list[Task] = []
        for task in pending:
            parent = task.parent_id if task.parent_id in known and task.parent_id != task.id else None
            if parent is not None and parent not in codes:
                rest.append(task)
                continue
            counters[parent] = counters.get(parent, 0) + 1
            prefix = f"{codes[parent]}." if parent is not None else ""
            codes[task.id] = f"{prefix}{counters[parent]}"
            progressed = True
        if not progressed:
            # Parent cycle: number the remaining tasks as roots.
            for task in rest:
                counters[None] = counters.get(None, 0) + 1
                codes[task.id] = str(counters[None])
            break
        pending = rest
    return codes


def effective_parents(graph: TaskGraph) -> dict:
    """Parent by task id, with dangling or cyclic parents replaced by None."""
    parents = {t.id: t.parent_id for t in graph.tasks}
    result: dict = {}
    for task_id, parent in parents.items():
        seen = {task_id}
        node = parent
        while node is not None and node in parents and node not in seen:
            seen.add(node)
            node = parents[node]
        # A chain ending in a dangling id still anchors; only a cycle does not.
        anchored = parent in parents and (node is None or node not in parents)
        result[task_id] = parent if anchored else None
    return result
