"""Logger module for calcengine

This module provides a flexible logging interface that allows users to
drop in their own logger implementations.

Usage:
    from calcengine.logger import session_logger as logger

    logger.info("Expression evaluated", result=4.0)

    # Or implement your own
    class MyCustomLogger(Logger):
        def info(self, message: str, **kwargs):
            ...
"""

from calcengine.config import get_settings
from .interface import Logger
from .structured_logger import StructuredLogger

_settings = get_settings()

# Shared logger instance
session_logger: Logger = StructuredLogger(
    level=_settings.log_level,
    log_file=_settings.log_file,
    json_format=_settings.log_json,
)

__all__ = [
    "Logger",
    "StructuredLogger",
    "session_logger",
]
