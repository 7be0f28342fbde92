# Logging setup using Rich for readable console output.
# Created: 2026-10-12

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Configure the root logger with a RichHandler.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        console: Optional console to log to. Defaults to stderr.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
