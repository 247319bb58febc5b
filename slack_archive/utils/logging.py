"""Logging setup for the command line entry point.

Library code only calls logging.getLogger(); handlers are installed once by
setup_logging() so importing slack_archive never touches logging config.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Shared by RichHandler and the pipeline loggers so their output interleaves
console = Console()

FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Chatty below WARNING and never interesting while reading an export
_QUIET_LOGGERS = ("pydantic",)


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
    debug_third_party: bool = False,
) -> None:
    """Route log records to the shared console and optionally to a file.

    Args:
        level: Root logger level.
        log_file: Also append plain-text records here.
        debug_third_party: Keep library loggers at ``level`` instead of WARNING.
    """
    handlers: list[logging.Handler] = [
        RichHandler(console=console, show_path=False, rich_tracebacks=True)
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if debug_third_party else logging.WARNING)
