"""Logging setup for the CLI.

Modules log through `logging.getLogger(__name__)`; this is the one place that
decides where records go (stderr, via Rich) and at which level.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "useridmap-rich"


def verbosity_to_level(verbosity: int, default: int = logging.WARNING) -> int:
    """Map repeated `-v` flags onto a log level (-v INFO, -vv DEBUG)."""

    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return min(default, logging.INFO)
    return default


def configure_logging(level: int = logging.WARNING, *, console: Console | None = None) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=level <= logging.DEBUG,
        rich_tracebacks=False,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO; keep it for -vv only.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
