"""Error taxonomy for planboard."""

from __future__ import annotations


class PlanboardError(Exception):
    """Base class for planboard errors."""


class AdapterUnavailable(PlanboardError):
    """The interactive chart widget is missing or failed to initialize."""


class MalformedSnapshot(PlanboardError, ValueError):
    """Input could not be decoded into a Snapshot at all."""
