"""Reconciliation between the interactive chart widget and the project history."""

from planboard.sync.adapter import WidgetAdapter
from planboard.sync.guard import GuardState, ReconciliationGuard

__all__ = ["GuardState", "ReconciliationGuard", "WidgetAdapter"]
