"""
Logging configuration for host applications.

The engine logs through loguru's global ``logger`` and never touches sinks on
import. Applications embedding it call ``configure_logging()`` once.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {name}:{line} | {message}"


def configure_logging(level: str | None = None, sink=sys.stderr) -> int:
    """
    Replace loguru's default handler with a single leveled sink.

    Args:
        level: Minimum level (defaults to settings.log_level)
        sink: Destination accepted by loguru (stream, path, callable)

    Returns:
        The loguru handler id
    """
    if level is None:
        from config import get_settings

        level = get_settings().log_level

    logger.remove()
    return logger.add(sink, level=level, format=LOG_FORMAT)
