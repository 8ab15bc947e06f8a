"""Tests for the planboard CLI (export/check on saved JSON projects)."""

from datetime import date
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planboard.defaults import initial_snapshot
from planboard.model.codec import dumps, loads
import planboard_cli


def _saved(tmp_path: Path) -> Path:
    path = tmp_path / "project.json"
    path.write_text(dumps(initial_snapshot(date(2025, 1, 6))), encoding="utf-8")
    return path


def test_check_clean_project(tmp_path: Path, capsys) -> None:
    code = planboard_cli.main(["--quiet", "check", str(_saved(tmp_path))])
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("ok: 7 tasks, 3 links, 2 building rows")


def test_check_reports_issues_with_exit_code(tmp_path: Path, capsys) -> None:
    path = tmp_path / "broken.json"
    path.write_text(
        json.dumps(
            {
                "projectTitle": "Broken",
                "taskGraph": {
                    "tasks": [{"id": 1, "text": "a", "startDate": "2025-01-01", "parentId": 5}],
                    "links": [],
                },
            }
        ),
        encoding="utf-8",
    )
    code = planboard_cli.main(["--quiet", "check", str(path)])
    assert code == 1
    assert "task 1 references missing parent 5" in capsys.readouterr().out


def test_export_html_to_file(tmp_path: Path) -> None:
    out = tmp_path / "out" / "project.html"
    code = planboard_cli.main(["--quiet", "export", str(_saved(tmp_path)), "--format", "html", "--out", str(out)])
    assert code == 0
    assert 'id="planboard-data"' in out.read_text(encoding="utf-8")


def test_export_json_to_stdout(tmp_path: Path, capsys) -> None:
    code = planboard_cli.main(["--quiet", "export", str(_saved(tmp_path))])
    assert code == 0
    assert loads(capsys.readouterr().out) == initial_snapshot(date(2025, 1, 6))


def test_missing_or_malformed_input_fails(tmp_path: Path) -> None:
    assert planboard_cli.main(["--quiet", "check", str(tmp_path / "nope.json")]) == 1
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    assert planboard_cli.main(["--quiet", "export", str(bad)]) == 1


def test_no_command_prints_help(capsys) -> None:
    assert planboard_cli.main([]) == 0
    assert "usage: planboard" in capsys.readouterr().out
