"""Persist Qt shell preferences outside project data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

VIEWS = ("gantt", "outline", "mindmap", "building")


class SettingsService:
    """Store user preferences in ~/.planboard/qt_settings.json by default."""

    def __init__(self, settings_path: Path | None = None) -> None:
        default_path = Path.home() / ".planboard" / "qt_settings.json"
        self._path = settings_path or default_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, payload: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, ensure_ascii=True, indent=2),
                encoding="utf-8",
            )
        except OSError:
            # Preferences are best-effort and must not break editing.
            return

    def _get_str(self, key: str) -> str:
        value = self.load().get(key)
        return str(value) if isinstance(value, str) else ""

    def _set(self, key: str, value: Any) -> None:
        data = self.load()
        data[key] = value
        self.save(data)

    def get_last_view(self) -> str:
        view = self._get_str("last_view")
        return view if view in VIEWS else "gantt"

    def set_last_view(self, view: str) -> None:
        if view in VIEWS:
            self._set("last_view", view)

    def get_zoom_level(self) -> str:
        return self._get_str("zoom_level") or "day"

    def set_zoom_level(self, level: str) -> None:
        self._set("zoom_level", level)

    def get_export_dir(self) -> str:
        return self._get_str("export_dir")

    def set_export_dir(self, directory: str) -> None:
        self._set("export_dir", directory)
