"""Logging setup — rich console output plus an optional rotating log file."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "structscan"
LOG_LEVEL_ENV = "STRUCTSCAN_LOG_LEVEL"
FILE_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# Rotate at 5MB, keep 3 backups
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def resolve_level(level: str | None = None) -> int:
    """Level from STRUCTSCAN_LOG_LEVEL, then ``level``, then WARNING."""
    name = os.environ.get(LOG_LEVEL_ENV) or level or "WARNING"
    return logging.getLevelNamesMapping().get(name.upper(), logging.WARNING)


def setup_logging(level: str | None = None, log_file: Path | None = None) -> logging.Logger:
    """Configure the package logger.

    Console messages go to stderr through rich so they never mix with JSON
    written to stdout. When ``log_file`` is given, timestamped lines are also
    appended to it.

    Args:
        level: Level name (overridden by STRUCTSCAN_LOG_LEVEL)
        log_file: Optional log file path

    Returns:
        The "structscan" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    logger.handlers.clear()
    logger.propagate = False

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
