"""Centralized logging configuration."""

from __future__ import annotations

import logging
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)


def _resolve_level(level_name: str) -> int:
    """Return the numeric logging level, falling back to INFO for unknown names."""

    level = getattr(logging, level_name.upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str = _DEFAULT_LEVEL_NAME) -> None:
    """Configure logging once with a Rich handler.

    The level usually comes from ``ArchivesConfig.log_level``, which already
    folds in the ``ARCHIVE_PAGES_LOG_LEVEL`` environment variable.
    """

    root_logger = logging.getLogger()
    level = _resolve_level(level_name)

    handler = next(
        (h for h in root_logger.handlers if getattr(h, "_archive_pages_managed", False)),
        None,
    )
    if handler is None:
        root_logger.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._archive_pages_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    handler.setLevel(level)
    root_logger.setLevel(level)

    logging.captureWarnings(True)
