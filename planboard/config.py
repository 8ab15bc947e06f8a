"""Runtime configuration resolved from environment variables."""

from __future__ import annotations

import os

HISTORY_CAP = 50


def resolve_history_cap() -> int:
    """History bound: PLANBOARD_HISTORY_CAP when it is a positive integer, else 50."""
    raw = os.environ.get("PLANBOARD_HISTORY_CAP", "").strip()
    if not raw:
        return HISTORY_CAP
    try:
        value = int(raw)
    except ValueError:
        return HISTORY_CAP
    return value if value > 0 else HISTORY_CAP
