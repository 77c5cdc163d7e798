"""LiteCache Logging - Per-Instance Logger Configuration.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Optional, Union

LOGGER_NAME = "litecache_core.cache"


@dataclass
class LogConfig:
    """Instance logging configuration.

    Attributes:
        prefix: Label rendered as ``[prefix]`` before each message
        timestamp: Include a timestamp
        level: Minimum level emitted
    """

    prefix: Optional[str] = None
    timestamp: bool = True
    level: int = logging.DEBUG

    def format(self) -> str:
        """Build the ``logging.Formatter`` format string."""
        parts = []
        if self.timestamp:
            parts.append("[%(asctime)s] ")
        if self.prefix:
            parts.append(f"[{self.prefix}] ")
        parts.append("[%(levelname)s]: %(message)s")
        return "".join(parts)


def configure_logger(log: Union[bool, LogConfig, None] = False) -> logging.Logger:
    """Create the logger for one cache instance.

    The logger is built directly rather than through ``logging.getLogger``,
    so it is owned by its cache and never enters the global logger
    registry. Two caches never share handlers, and a closed cache leaves
    nothing behind.

    DEBUG and INFO go to stdout; WARNING and above go to stderr.

    Args:
        log: False for silence, True for defaults, or a LogConfig

    Returns:
        Configured logger
    """
    logger = logging.Logger(LOGGER_NAME)
    logger.propagate = False

    if not log:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    config = log if isinstance(log, LogConfig) else LogConfig()
    formatter = logging.Formatter(config.format(), datefmt="%m/%d/%Y, %I:%M:%S %p")

    stdout = logging.StreamHandler(sys.stdout)
    stdout.addFilter(lambda record: record.levelno < logging.WARNING)
    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(logging.WARNING)

    for handler in (stdout, stderr):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(config.level)
    return logger


def release_logger(logger: logging.Logger) -> None:
    """Detach and close the handlers of an instance logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


__all__ = ["LogConfig", "configure_logger", "release_logger", "LOGGER_NAME"]
