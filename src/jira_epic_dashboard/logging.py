"""Logging configuration for the Jira epic dashboard.

Every component logs under the ``jira_epic_dashboard`` namespace so a single
call to :func:`setup_logging` controls all of them.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "jira_epic_dashboard"
LEVEL_ENV_VAR = "JIRA_EPIC_DASHBOARD_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    console: bool = True,
) -> logging.Logger:
    """Configure the dashboard logger.

    Args:
        level: Log level name. Defaults to INFO, or the value of the
               JIRA_EPIC_DASHBOARD_LOG_LEVEL environment variable.
        log_file: Optional path of a rotating log file.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated files to keep.
        console: Whether to log to stderr.

    Returns:
        The root dashboard logger.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.debug("Logging initialized (level=%s, file=%s)", level, log_file)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component, prefixed with the dashboard namespace."""
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
