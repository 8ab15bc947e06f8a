"""Entrypoint for the Planboard Qt desktop shell."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from planboard.logging import configure_logging
from qt_app.ui.main_window import MainWindow


def main() -> int:
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Planboard")
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
