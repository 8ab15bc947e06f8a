"""Canonical task-graph comparison used to decide whether the chart needs a rebuild."""

from __future__ import annotations

from typing import Any, Optional

from planboard.model.snapshot import Link, Task, TaskGraph

_PROGRESS_DIGITS = 4


def _absent_if_blank(value: Optional[str]) -> Optional[str]:
    # The chart fills optional text fields with "" by default; treat that as absent.
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def canonical_task(task: Task) -> tuple[Any, ...]:
    return (
        task.id,
        task.text,
        task.start_date.isoformat(),
        int(task.duration),
        task.parent_id,
        _absent_if_blank(task.color),
        _absent_if_blank(task.details),
        round(float(task.progress), _PROGRESS_DIGITS),
        bool(task.open),
    )


def canonical_link(link: Link) -> tuple[Any, ...]:
    return (link.id, link.source_task_id, link.target_task_id, link.kind.value)


def canonical_task_graph(graph: TaskGraph) -> tuple[tuple[Any, ...], tuple[Any, ...]]:
    """Order-sensitive canonical form: position in tasks/links is display order."""
    return (
        tuple(canonical_task(task) for task in graph.tasks),
        tuple(canonical_link(link) for link in graph.links),
    )


def task_graphs_equal(left: TaskGraph | None, right: TaskGraph | None) -> bool:
    if left is None or right is None:
        return left is right
    if left is right:
        return True
    return canonical_task_graph(left) == canonical_task_graph(right)
