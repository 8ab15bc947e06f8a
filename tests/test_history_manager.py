"""Tests for the bounded undo/redo history."""

from datetime import date
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planboard.history.manager import HistoryManager
from planboard.model.snapshot import Snapshot, Task, TaskGraph


def _snap(title: str) -> Snapshot:
    return Snapshot(project_title=title)


def test_seed_is_current_and_nothing_to_undo() -> None:
    seed = _snap("A")
    history = HistoryManager(seed)
    assert history.current() is seed
    assert history.can_undo is False
    assert history.can_redo is False
    assert len(history) == 1


def test_push_becomes_current_and_clears_redo() -> None:
    history = HistoryManager(_snap("A"))
    b = _snap("B")
    history.push(b)
    assert history.current() is b
    assert history.can_undo is True
    assert history.can_redo is False


def test_undo_k_steps_then_redo_k_steps_round_trips() -> None:
    snaps = [_snap(str(i)) for i in range(6)]
    history = HistoryManager(snaps[0])
    for s in snaps[1:]:
        history.push(s)
    for k in range(1, 6):
        assert history.undo() is snaps[5 - k]
    assert history.can_undo is False
    for k in range(1, 6):
        assert history.redo() is snaps[k]
    assert history.current() is snaps[5]
    assert history.can_redo is False


def test_push_after_undo_discards_redo_branch() -> None:
    a, b, c, d = (_snap(t) for t in "ABCD")
    history = HistoryManager(a)
    history.push(b)
    history.push(c)
    history.undo()
    assert history.cursor == 1
    history.push(d)
    assert history.entries == (a, b, d)
    assert history.cursor == 2
    assert history.can_redo is False


def test_cap_evicts_oldest_and_keeps_cursor_on_current() -> None:
    history = HistoryManager(_snap("seed"))
    pushed = [_snap(f"s{i}") for i in range(60)]
    for s in pushed:
        history.push(s)
    assert len(history) == 50
    assert history.cursor == 49
    assert history.current() is pushed[-1]
    assert history.entries[0] is pushed[10]
    for _ in range(49):
        history.undo()
    assert history.current() is pushed[10]
    assert history.can_undo is False


def test_undo_and_redo_at_boundaries_are_noops_without_notification() -> None:
    seed = _snap("A")
    history = HistoryManager(seed)
    seen = []
    history.subscribe(seen.append)
    assert history.undo() is seed
    assert history.redo() is seed
    assert seen == []


def test_listeners_receive_every_move_until_unsubscribed() -> None:
    history = HistoryManager(_snap("A"))
    seen = []
    unsubscribe = history.subscribe(lambda s: seen.append(s.project_title))
    history.push(_snap("B"))
    history.undo()
    history.redo()
    unsubscribe()
    history.push(_snap("C"))
    assert seen == ["B", "A", "B"]


def test_listener_may_unsubscribe_while_notified() -> None:
    history = HistoryManager(_snap("A"))
    calls = []
    holder = {}

    def _once(snapshot: Snapshot) -> None:
        calls.append(snapshot.project_title)
        holder["unsub"]()

    holder["unsub"] = history.subscribe(_once)
    history.push(_snap("B"))
    history.push(_snap("C"))
    assert calls == ["B"]


def test_cap_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PLANBOARD_HISTORY_CAP", "3")
    history = HistoryManager(_snap("A"))
    for t in "BCDE":
        history.push(_snap(t))
    assert history.cap == 3
    assert [s.project_title for s in history.entries] == ["C", "D", "E"]


@pytest.mark.parametrize("raw", ["", "zero", "0", "-4"])
def test_invalid_env_cap_falls_back_to_default(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("PLANBOARD_HISTORY_CAP", raw)
    assert HistoryManager(_snap("A")).cap == 50


def test_explicit_cap_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HistoryManager(_snap("A"), cap=0)


def test_snapshots_are_stored_by_reference_and_immutable() -> None:
    graph = TaskGraph.of([Task(id=1, text="t", start_date=date(2025, 1, 1))])
    seed = Snapshot(project_title="A", task_graph=graph)
    history = HistoryManager(seed)
    history.push(seed.with_title("B"))
    assert history.entries[0].project_title == "A"
    assert history.entries[1].task_graph is graph
