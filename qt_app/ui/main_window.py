"""Main window for the Planboard desktop shell."""
from __future__ import annotations

from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from planboard.defaults import initial_snapshot
from planboard.model.snapshot import BuildingRow, Snapshot, TaskGraph
from qt_app.services.project_service import ProjectService
from qt_app.services.settings_service import VIEWS, SettingsService
from qt_app.ui.handlers import building_handlers, export_handlers, history_handlers, mindmap_handlers, outline_handlers
from qt_app.ui.tabs.building_tab import build_building_tab
from qt_app.ui.tabs.gantt_tab import build_gantt_tab
from qt_app.ui.tabs.mindmap_tab import build_mindmap_tab
from qt_app.ui.tabs.outline_tab import build_outline_tab


class MainWindow(QMainWindow):
    """Title bar with history controls over four views of one project."""

    VIEW_NAMES = VIEWS

    def __init__(self, seed: Snapshot | None = None, settings: SettingsService | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Planboard")
        self.resize(1200, 780)
        self.settings = settings or SettingsService()
        self.project = ProjectService(
            seed or initial_snapshot(), self, zoom=self.settings.get_zoom_level()
        )
        self._rendered_outline_graph: TaskGraph | None = None
        self._rendered_building_rows: tuple[BuildingRow, ...] | None = None
        self._outline_loading = False
        self._building_loading = False
        self._build_ui()
        self._wire_events()
        self.project.attach_chart(self.gantt_container)
        self._render_snapshot(self.project.session.current())
        history_handlers.sync_history_buttons(self, False, False)
        self.tabs.setCurrentIndex(self.VIEW_NAMES.index(self.settings.get_last_view()))

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        top_row = QHBoxLayout()
        top_row.addWidget(QLabel("Project:"))
        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Project title")
        top_row.addWidget(self.title_edit, 1)
        self.undo_btn = QPushButton("Undo")
        self.undo_btn.setToolTip("Undo (Ctrl+Z)")
        self.redo_btn = QPushButton("Redo")
        self.redo_btn.setToolTip("Redo (Ctrl+Shift+Z)")
        self.open_btn = QPushButton("Open JSON")
        self.export_json_btn = QPushButton("Export JSON")
        self.export_html_btn = QPushButton("Export HTML")
        self.print_btn = QPushButton("Print")
        for btn in (
            self.undo_btn,
            self.redo_btn,
            self.open_btn,
            self.export_json_btn,
            self.export_html_btn,
            self.print_btn,
        ):
            top_row.addWidget(btn)
        root_layout.addLayout(top_row)
        self.tabs = QTabWidget()
        root_layout.addWidget(self.tabs, 1)
        build_gantt_tab(self)
        build_outline_tab(self)
        build_mindmap_tab(self)
        build_building_tab(self)
        self.status_label = QLabel("Ready")
        root_layout.addWidget(self.status_label)

    def _wire_events(self) -> None:
        self.title_edit.editingFinished.connect(lambda: history_handlers.on_title_edited(self))
        self.undo_btn.clicked.connect(lambda: history_handlers.undo(self))
        self.redo_btn.clicked.connect(lambda: history_handlers.redo(self))
        self.open_btn.clicked.connect(lambda: export_handlers.open_project_json(self))
        self.export_json_btn.clicked.connect(lambda: export_handlers.export_json(self))
        self.export_html_btn.clicked.connect(lambda: export_handlers.export_html(self))
        self.print_btn.clicked.connect(lambda: export_handlers.print_snapshot(self))
        self.outline_tree.itemChanged.connect(
            lambda item, column: outline_handlers.on_outline_item_changed(self, item, column)
        )
        self.outline_add_btn.clicked.connect(lambda: outline_handlers.add_outline_task(self))
        self.outline_delete_btn.clicked.connect(lambda: outline_handlers.delete_outline_task(self))
        self.outline_indent_btn.clicked.connect(lambda: outline_handlers.indent_outline_task(self))
        self.outline_outdent_btn.clicked.connect(lambda: outline_handlers.outdent_outline_task(self))
        self.building_table.cellChanged.connect(
            lambda row, column: building_handlers.on_building_cell_changed(self, row, column)
        )
        self.building_add_btn.clicked.connect(lambda: building_handlers.add_building_row(self))
        self.building_delete_btn.clicked.connect(lambda: building_handlers.delete_building_row(self))
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.project.snapshot_changed.connect(self._render_snapshot)
        self.project.history_state_changed.connect(
            lambda can_undo, can_redo: history_handlers.sync_history_buttons(self, can_undo, can_redo)
        )
        QShortcut(QKeySequence.StandardKey.Undo, self, activated=lambda: history_handlers.undo(self))
        QShortcut(QKeySequence("Ctrl+Shift+Z"), self, activated=lambda: history_handlers.redo(self))
        QShortcut(QKeySequence("Ctrl+Y"), self, activated=lambda: history_handlers.redo(self))

    def _render_snapshot(self, snapshot: Snapshot) -> None:
        # A failed rebuild leaves the chart detached.
        self.gantt_unavailable_label.setVisible(self.project.chart() is None)
        history_handlers.render_title(self, snapshot.project_title)
        outline_handlers.render_outline(self, snapshot.task_graph)
        mindmap_handlers.render_mind_map(self, snapshot)
        building_handlers.render_building_table(self, snapshot.building_rows)

    def _on_tab_changed(self, index: int) -> None:
        if 0 <= index < len(self.VIEW_NAMES):
            self.settings.set_last_view(self.VIEW_NAMES[index])

    def closeEvent(self, event: QCloseEvent) -> None:
        """Remember the chart zoom and tear the chart down before the window closes."""
        chart = self.project.chart()
        if chart is not None:
            self.settings.set_zoom_level(chart.zoom_level)
        self.project.shutdown()
        super().closeEvent(event)
