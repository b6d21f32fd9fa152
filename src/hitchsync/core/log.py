"""Logging setup for the command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: str | int = "INFO",
    fmt: str = "rich",
    console: Console | None = None,
) -> None:
    """Configure the root logger once per process.

    Args:
        level: Logging level name or number.
        fmt: ``"rich"`` for a RichHandler, ``"plain"`` for timestamped lines.
        console: Console the rich handler writes to (stderr by default).
    """
    if isinstance(level, str):
        level = level.upper()

    handler: logging.Handler
    if fmt == "rich":
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
