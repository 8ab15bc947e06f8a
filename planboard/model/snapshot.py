"""Immutable project snapshot model.

A Snapshot is the whole project at one instant: title, task graph and the
building table. Every edit produces a new Snapshot; nothing here is mutated
after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

TaskId = Union[str, int]


class LinkKind(str, Enum):
    """Dependency type between two tasks (wire value is the legacy numeric code)."""

    FINISH_TO_START = "0"
    START_TO_START = "1"
    FINISH_TO_FINISH = "2"
    START_TO_FINISH = "3"

    @classmethod
    def parse(cls, raw: object) -> "LinkKind":
        text = str(raw).strip().lower()
        for kind in cls:
            if text in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown link kind: {raw!r}")


@dataclass(frozen=True)
class Task:
    id: TaskId
    text: str
    start_date: date
    duration: int = 1
    parent_id: Optional[TaskId] = None
    color: Optional[str] = None
    details: Optional[str] = None
    progress: float = 0.0
    open: bool = True

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Task {self.id!r}: duration must be non-negative")

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=self.duration)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class Link:
    id: TaskId
    source_task_id: TaskId
    target_task_id: TaskId
    kind: LinkKind = LinkKind.FINISH_TO_START


@dataclass(frozen=True)
class TaskGraph:
    """Ordered tasks (position is display order) plus dependency links."""

    tasks: Tuple[Task, ...] = ()
    links: Tuple[Link, ...] = ()

    @classmethod
    def of(cls, tasks: Iterable[Task] = (), links: Iterable[Link] = ()) -> "TaskGraph":
        return cls(tasks=tuple(tasks), links=tuple(links))

    def task(self, task_id: TaskId) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def task_ids(self) -> set:
        return {task.id for task in self.tasks}

    def children_of(self, parent_id: Optional[TaskId]) -> Tuple[Task, ...]:
        return tuple(task for task in self.tasks if task.parent_id == parent_id)


@dataclass(frozen=True)
class BuildingRow:
    id: TaskId
    depot: str = ""
    name: str = ""
    size: str = ""
    note: str = ""


@dataclass(frozen=True)
class Snapshot:
    project_title: str
    task_graph: TaskGraph = field(default_factory=TaskGraph)
    building_rows: Tuple[BuildingRow, ...] = ()

    def with_title(self, title: str) -> "Snapshot":
        return replace(self, project_title=title)

    def with_task_graph(self, graph: TaskGraph) -> "Snapshot":
        return replace(self, task_graph=graph)

    def with_building_rows(self, rows: Iterable[BuildingRow]) -> "Snapshot":
        return replace(self, building_rows=tuple(rows))
