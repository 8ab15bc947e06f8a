"""Export (JSON, HTML snapshot, print) and JSON open handlers."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtGui import QTextDocument
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import QFileDialog, QMessageBox

from planboard import export
from planboard.errors import MalformedSnapshot
from planboard.logging import get_logger
from planboard.model import codec

if TYPE_CHECKING:
    from ..main_window import MainWindow

_LOG = get_logger("qt")


def _start_dir(main: MainWindow) -> Path:
    saved = main.settings.get_export_dir()
    return Path(saved) if saved and Path(saved).is_dir() else Path.home()


def _save_text(main: MainWindow, *, suffix: str, caption: str, filter_: str, content: str) -> None:
    name = export.default_export_name() + suffix
    selected, _ = QFileDialog.getSaveFileName(main, caption, str(_start_dir(main) / name), filter_)
    if not selected:
        return
    path = Path(selected)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        _LOG.error(f"export to {path} failed: {exc}")
        QMessageBox.warning(main, caption, f"Could not write {path}: {exc}")
        return
    main.settings.set_export_dir(str(path.parent))
    main.status_label.setText(f"Exported {path.name}")


def export_json(main: MainWindow) -> None:
    snapshot = main.project.session.current()
    _save_text(main, suffix=".json", caption="Export JSON", filter_="JSON (*.json)", content=export.to_json(snapshot))


def export_html(main: MainWindow) -> None:
    snapshot = main.project.session.current()
    _save_text(
        main,
        suffix="_snapshot.html",
        caption="Export HTML",
        filter_="HTML (*.html)",
        content=export.to_html(snapshot),
    )


def print_snapshot(main: MainWindow) -> None:
    printer = QPrinter()
    dialog = QPrintDialog(printer, main)
    if dialog.exec() != QPrintDialog.DialogCode.Accepted:
        return
    document = QTextDocument()
    document.setHtml(export.to_print_html(main.project.session.current()))
    document.print_(printer)


def open_project_json(main: MainWindow) -> None:
    selected, _ = QFileDialog.getOpenFileName(main, "Open project", str(_start_dir(main)), "JSON (*.json)")
    if not selected:
        return
    path = Path(selected)
    try:
        snapshot = codec.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, MalformedSnapshot) as exc:
        _LOG.error(f"could not open {path}: {exc}")
        QMessageBox.warning(main, "Open project", f"Could not open {path.name}: {exc}")
        return
    main.project.session.push(snapshot)
    main.status_label.setText(f"Opened {path.name}")
