"""Shared exception policy helpers."""

from __future__ import annotations

import logging


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Log a tolerated collaborator failure with its traceback."""
    logger.log(level, message, exc_info=True)
