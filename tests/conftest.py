"""Pytest configuration. Ensures project root is in sys.path for top-level modules (planboard_cli, qt_app)."""
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def _add_project_root_to_path():
    root = Path(__file__).resolve().parent.parent
    import sys
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def _default_history_cap(monkeypatch):
    monkeypatch.delenv("PLANBOARD_HISTORY_CAP", raising=False)
