"""
Planboard CLI

Entry point: argument parsing and dispatch. Launches the desktop shell or
works on saved JSON projects without a display.
"""

import argparse
import sys
from pathlib import Path

from planboard import __version__
from planboard.errors import MalformedSnapshot
from planboard.export import to_html, to_json, to_print_html
from planboard.logging import configure_logging, get_logger
from planboard.model.codec import loads
from planboard.model.validate import find_integrity_issues

_EXPORTERS = {
    "json": to_json,
    "html": to_html,
    "print": to_print_html,
}


def _err(msg: str) -> None:
    get_logger("cli").error(msg)


def _build_parser() -> argparse.ArgumentParser:
    """Configure top-level CLI parser and subcommands."""
    parser = argparse.ArgumentParser(
        prog="planboard",
        description="Planboard: project schedule, outline, mind map and building table",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only warnings and errors")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("gui", help="Launch the desktop shell")

    export_parser = subparsers.add_parser("export", help="Convert a saved JSON project")
    export_parser.add_argument("path", type=Path, help="Saved project (.json)")
    export_parser.add_argument(
        "--format", "-f",
        choices=sorted(_EXPORTERS),
        default="json",
        help="Output format (default: json)",
    )
    export_parser.add_argument(
        "--out", "-o",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )

    check_parser = subparsers.add_parser("check", help="Report integrity issues of a saved project")
    check_parser.add_argument("path", type=Path, help="Saved project (.json)")
    return parser


def _load(path: Path):
    if not path.exists():
        _err(f"path does not exist: {path}")
        return None
    try:
        return loads(path.read_text(encoding="utf-8"))
    except (OSError, MalformedSnapshot) as exc:
        _err(f"cannot load {path}: {exc}")
        return None


def handle_gui(args: argparse.Namespace) -> int:
    from qt_app.main import main as run_gui

    return run_gui()


def handle_export(args: argparse.Namespace) -> int:
    snapshot = _load(args.path)
    if snapshot is None:
        return 1
    text = _EXPORTERS[args.format](snapshot)
    if args.out is None:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return 0
    try:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(text, encoding="utf-8")
    except OSError as exc:
        _err(f"cannot write {args.out}: {exc}")
        return 1
    get_logger("export").info(f"wrote {args.format} to {args.out}")
    return 0


def handle_check(args: argparse.Namespace) -> int:
    snapshot = _load(args.path)
    if snapshot is None:
        return 1
    issues = find_integrity_issues(snapshot)
    for issue in issues:
        print(issue)
    if issues:
        return 1
    print(f"ok: {len(snapshot.task_graph.tasks)} tasks, {len(snapshot.task_graph.links)} links, "
          f"{len(snapshot.building_rows)} building rows")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(quiet=args.quiet, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    dispatch = {
        "gui": handle_gui,
        "export": handle_export,
        "check": handle_check,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
