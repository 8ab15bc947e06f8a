from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from qt_app.services.settings_service import SettingsService


def test_settings_service_roundtrip_preferences(tmp_path: Path) -> None:
    settings_path = tmp_path / "qt_settings.json"
    svc = SettingsService(settings_path=settings_path)

    assert svc.get_last_view() == "gantt"
    assert svc.get_zoom_level() == "day"
    assert svc.get_export_dir() == ""

    svc.set_last_view("mindmap")
    svc.set_zoom_level("week")
    svc.set_export_dir("/tmp/exports")
    assert settings_path.exists()
    assert svc.get_last_view() == "mindmap"
    assert svc.get_zoom_level() == "week"
    assert svc.get_export_dir() == "/tmp/exports"


def test_settings_service_ignores_unknown_view(tmp_path: Path) -> None:
    svc = SettingsService(settings_path=tmp_path / "qt_settings.json")
    svc.set_last_view("calendar")
    assert svc.get_last_view() == "gantt"


def test_settings_service_handles_invalid_json(tmp_path: Path) -> None:
    settings_path = tmp_path / "qt_settings.json"
    settings_path.write_text("{bad json", encoding="utf-8")
    svc = SettingsService(settings_path=settings_path)

    assert svc.load() == {}
    assert svc.get_last_view() == "gantt"
