"""Export of the current snapshot: JSON text, standalone HTML, printable report."""

from __future__ import annotations

import html
import json
from datetime import date

from planboard.model.codec import dumps, snapshot_to_dict
from planboard.model.edits import wbs_codes
from planboard.model.snapshot import Snapshot

_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <script src="https://cdn.jsdelivr.net/npm/dhtmlx-gantt@7.1.13/codebase/dhtmlxgantt.min.js"></script>
    <link href="https://cdn.jsdelivr.net/npm/dhtmlx-gantt@7.1.13/codebase/dhtmlxgantt.css" rel="stylesheet">
    <style>body{{font-family:sans-serif;padding:20px;}} #gantt_here{{width:100%;height:600px;}}</style>
</head>
<body>
    <h1>{title}</h1>
    <div id="gantt_here"></div>
    <script id="planboard-data" type="application/json">{payload}</script>
    <script>
        const snapshot = JSON.parse(document.getElementById("planboard-data").textContent);
        const graph = snapshot.taskGraph;
        gantt.config.date_format = "%Y-%m-%d";
        gantt.init("gantt_here");
        gantt.parse({{
            data: graph.tasks.map(t => ({{
                id: t.id, text: t.text, start_date: t.startDate, duration: t.duration,
                parent: t.parentId || 0, color: t.color || undefined, progress: t.progress, open: t.open
            }})),
            links: graph.links.map(l => ({{id: l.id, source: l.sourceTaskId, target: l.targetTaskId, type: l.kind}}))
        }});
    </script>
</body>
</html>
"""


def default_export_name(today: date | None = None) -> str:
    return f"project_{(today or date.today()).isoformat()}"


def to_json(snapshot: Snapshot) -> str:
    return dumps(snapshot)


def _embed_json(data: object) -> str:
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def to_html(snapshot: Snapshot) -> str:
    """Standalone page that re-renders the chart from the embedded snapshot."""
    return _HTML_TEMPLATE.format(
        title=html.escape(snapshot.project_title),
        payload=_embed_json(snapshot_to_dict(snapshot)),
    )


def to_print_html(snapshot: Snapshot) -> str:
    """Plain report (schedule, work breakdown, building table) for the print dialog."""
    esc = html.escape
    codes = wbs_codes(snapshot.task_graph)
    parts = [f"<h1>{esc(snapshot.project_title)}</h1>", "<h2>1. Schedule</h2>"]
    parts.append("<table border='1' cellspacing='0' cellpadding='4'>")
    parts.append("<tr><th>WBS</th><th>Task</th><th>Start</th><th>End</th><th>Days</th></tr>")
    for task in snapshot.task_graph.tasks:
        indent = "&nbsp;&nbsp;" * codes.get(task.id, "").count(".")
        parts.append(
            "<tr>"
            f"<td>{esc(codes.get(task.id, ''))}</td>"
            f"<td>{indent}{esc(task.text)}</td>"
            f"<td>{task.start_date.isoformat()}</td>"
            f"<td>{task.end_date.isoformat()}</td>"
            f"<td>{task.duration}</td>"
            "</tr>"
        )
    parts.append("</table>")
    parts.append("<h2>2. Buildings</h2>")
    parts.append("<table border='1' cellspacing='0' cellpadding='4'>")
    parts.append("<tr><th>No.</th><th>Depot</th><th>Name</th><th>Size</th><th>Note</th></tr>")
    for index, row in enumerate(snapshot.building_rows, start=1):
        parts.append(
            f"<tr><td>{index}</td><td>{esc(row.depot)}</td><td>{esc(row.name)}</td>"
            f"<td>{esc(row.size)}</td><td>{esc(row.note)}</td></tr>"
        )
    parts.append("</table>")
    return "<html><body>" + "\n".join(parts) + "</body></html>"
