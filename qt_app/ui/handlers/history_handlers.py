"""Undo/redo and project title handlers."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..main_window import MainWindow


def undo(main: MainWindow) -> None:
    main.project.session.undo()


def redo(main: MainWindow) -> None:
    main.project.session.redo()


def sync_history_buttons(main: MainWindow, can_undo: bool, can_redo: bool) -> None:
    main.undo_btn.setEnabled(can_undo)
    main.redo_btn.setEnabled(can_redo)


def on_title_edited(main: MainWindow) -> None:
    title = main.title_edit.text().strip()
    session = main.project.session
    if not title:
        main.title_edit.setText(session.current().project_title)
        return
    if title != session.current().project_title:
        session.push_title(title)


def render_title(main: MainWindow, title: str) -> None:
    if main.title_edit.text() != title:
        main.title_edit.setText(title)
    main.setWindowTitle(f"{title} — Planboard" if title else "Planboard")
