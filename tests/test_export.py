"""Tests for JSON, HTML and printable exports."""

from datetime import date
import json
from pathlib import Path
import re
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planboard.defaults import initial_snapshot
from planboard.export import default_export_name, to_html, to_json, to_print_html
from planboard.model.codec import loads


def test_default_export_name_uses_date() -> None:
    assert default_export_name(date(2025, 9, 30)) == "project_2025-09-30"


def test_json_export_loads_back() -> None:
    snapshot = initial_snapshot(date(2025, 1, 6))
    assert loads(to_json(snapshot)) == snapshot


def test_html_export_embeds_snapshot_and_escapes_title() -> None:
    snapshot = initial_snapshot(date(2025, 1, 6)).with_title("Depot <A&B> </script>")
    page = to_html(snapshot)
    assert "<title>Depot &lt;A&amp;B&gt; &lt;/script&gt;</title>" in page
    match = re.search(
        r'<script id="planboard-data" type="application/json">(.*?)</script>', page, re.S
    )
    assert match is not None
    data = json.loads(match.group(1).replace("<\\/", "</"))
    assert data["projectTitle"] == "Depot <A&B> </script>"
    assert len(data["taskGraph"]["tasks"]) == 7


def test_print_report_lists_tasks_with_wbs_and_buildings() -> None:
    report = to_print_html(initial_snapshot(date(2025, 1, 6)))
    assert "<td>1.2</td>" in report
    assert "Design review" in report
    assert "2025-01-14" in report
    assert "Office block" in report
