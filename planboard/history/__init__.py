"""Undo/redo history."""

from planboard.history.manager import HistoryManager

__all__ = ["HistoryManager"]
