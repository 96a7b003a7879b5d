"""Shared CLI utilities for dsdialect."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Single console instance reused across CLI modules
console = Console()


def setup_logging(verbose: bool = False, level: Optional[str] = None) -> None:
    """Configure root logging for CLI runs.

    Args:
        verbose: Force DEBUG level.
        level: Level name used when not verbose, e.g. ``"INFO"``.
    """
    resolved = logging.DEBUG if verbose else getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
