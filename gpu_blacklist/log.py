"""Logger factory for the gpu_blacklist package.

Library modules only ask for a logger; the CLI decides where records go.
The level comes from ``GPU_BLACKLIST_LOG_LEVEL`` unless set explicitly.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from gpu_blacklist.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

PACKAGE_LOGGER = "gpu_blacklist"

_handler: logging.Handler | None = None


def level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Route package logs to stderr through rich, once per process."""
    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if level is None:
        resolved = level_from_env()
    elif isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    else:
        resolved = level
    logger.setLevel(resolved)
    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        logger.addHandler(_handler)
    return logger
