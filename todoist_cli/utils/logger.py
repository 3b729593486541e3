"""Shared logger initialization for the CLI.

Usage:
    from todoist_cli.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"  # rich handler already adds time & level
_ROOT = "todoist_cli"

_handler: Optional[RichHandler] = None


def configure_logging(level: int = logging.WARNING) -> None:
    """Idempotently attach a stderr RichHandler to the package logger.

    Calling it again only changes the level.
    """
    global _handler
    logger = logging.getLogger(_ROOT)
    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_path=False,
        )
        _handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(_handler)
        logger.propagate = False
    logger.setLevel(level)
    _handler.setLevel(level)


def get_logger(name: str = _ROOT, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger."""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
