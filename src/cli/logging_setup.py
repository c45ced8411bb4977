"""Logging de la CLI (stdlib logging + RichHandler en stderr)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING") -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx loguea cada request a INFO; solo interesa en modo verbose.
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
