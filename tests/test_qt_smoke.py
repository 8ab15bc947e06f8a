from pathlib import Path
import os
import subprocess
import sys
import textwrap

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

pytest.importorskip("PySide6")


def test_qt_main_window_smoke(tmp_path: Path) -> None:
    python_bin = os.environ.get("PLANBOARD_QT_SMOKE_PYTHON", "").strip() or sys.executable
    smoke_script = textwrap.dedent(
        """
        import sys
        from pathlib import Path

        from PySide6.QtWidgets import QApplication
        from planboard.errors import AdapterUnavailable
        from planboard.model.snapshot import TaskGraph
        from qt_app.adapters.gantt_adapter import GanttWidgetAdapter
        from qt_app.services.settings_service import SettingsService
        from qt_app.ui.main_window import MainWindow

        app = QApplication.instance() or QApplication([])
        settings = SettingsService(settings_path=Path(sys.argv[1]))
        settings.set_last_view("outline")
        window = MainWindow(settings=settings)
        window.show()
        assert window.windowTitle() == "New project — Planboard"
        assert window.title_edit.text() == "New project"
        assert window.project.chart() is not None
        assert window.gantt_unavailable_label.isHidden()
        assert window.undo_btn.isEnabled() is False
        tab_names = [window.tabs.tabText(i) for i in range(window.tabs.count())]
        assert tab_names == ["Gantt", "Outline", "Mind map", "Buildings"]
        assert window.tabs.currentIndex() == 1
        assert window.outline_tree.topLevelItemCount() == 3
        assert window.mindmap_tree.topLevelItem(0).text(0) == "New project"
        assert window.building_table.rowCount() == 2

        window.title_edit.setText("Depot upgrade")
        window.title_edit.editingFinished.emit()
        assert window.windowTitle() == "Depot upgrade — Planboard"
        assert window.undo_btn.isEnabled() is True
        assert window.project.guard.rebuild_count == 0

        window.undo_btn.click()
        assert window.title_edit.text() == "New project"
        assert window.redo_btn.isEnabled() is True

        def _unavailable(self, container, graph):
            raise AdapterUnavailable("display gone")

        GanttWidgetAdapter.initialize = _unavailable
        window.project.session.push_task_graph(TaskGraph())
        assert window.project.chart() is None
        assert not window.gantt_unavailable_label.isHidden()
        assert window.outline_tree.topLevelItemCount() == 0

        window.tabs.setCurrentIndex(2)
        window.close()
        assert settings.get_last_view() == "mindmap"
        assert window.project.chart() is None
        app.quit()
        print("SMOKE_OK")
        """
    )
    env = os.environ.copy()
    env.setdefault("QT_QPA_PLATFORM", "offscreen")
    result = subprocess.run(
        [python_bin, "-c", smoke_script, str(tmp_path / "qt_settings.json")],
        cwd=str(ROOT),
        capture_output=True,
        text=True,
        timeout=45,
        env=env,
    )
    combined = ((result.stdout or "") + "\n" + (result.stderr or "")).lower()
    if result.returncode == 0 and "smoke_ok" in combined:
        return
    if "smoke_ok" in combined and (
        "bus error" in combined
        or "signal: 7" in combined
        or "destroyqcoreapplication" in combined
    ):
        pytest.skip("Qt smoke completed, child process crashed on teardown (known environment issue).")
    raise AssertionError(
        "Qt smoke subprocess failed:\n"
        f"python={python_bin}\n"
        f"exit={result.returncode}\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
