"""Logging for planboard core, CLI and Qt shell.

All loggers hang below the ``planboard`` logger, which owns the only stderr
handler. Children carry no level of their own, so one call to
``configure_logging`` reaches every module, including ones that ask for a
logger later.
"""

from __future__ import annotations

import logging
import os
import sys

ROOT_NAME = "planboard"
LOG_FORMAT = "%(levelname)-7s %(name)s: %(message)s"


def _env_level() -> int:
    raw = os.environ.get("PLANBOARD_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(_env_level())
    return root


def configure_logging(*, quiet: bool = False, verbose: bool = False) -> None:
    """--verbose means DEBUG, --quiet means WARNING, otherwise PLANBOARD_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = _env_level()
    _root().setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Logger ``planboard.<name>``; inherits level and handler from ``planboard``."""
    _root()
    return logging.getLogger(f"{ROOT_NAME}.{name}")
