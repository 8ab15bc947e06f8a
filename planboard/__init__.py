"""Planboard: schedule editing core (snapshots, undo history, widget reconciliation)."""

from planboard.history.manager import HistoryManager
from planboard.model.snapshot import BuildingRow, Link, LinkKind, Snapshot, Task, TaskGraph
from planboard.session import ProjectSession
from planboard.sync.guard import GuardState, ReconciliationGuard

__version__ = "1.0.0"

__all__ = [
    "BuildingRow",
    "GuardState",
    "HistoryManager",
    "Link",
    "LinkKind",
    "ProjectSession",
    "ReconciliationGuard",
    "Snapshot",
    "Task",
    "TaskGraph",
    "__version__",
]
