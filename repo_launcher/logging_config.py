"""Centralized logging configuration for the repository launcher.

Logs go to a rotating file under ~/.get/logs; console output is opt-in so
the interactive prompts stay readable.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

from .config import CONFIG_DIR, CONFIG_DIR_MODE

PACKAGE_LOGGER = "repo_launcher"

# Default configuration
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
DEFAULT_BACKUP_COUNT = 3

# Log directory
LOG_DIR = CONFIG_DIR / "logs"


def get_log_file_path() -> Path:
    """Get the path to the log file, creating directory if needed."""
    LOG_DIR.parent.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)
    LOG_DIR.mkdir(exist_ok=True)
    return LOG_DIR / "get.log"


def setup_logging(
    *,
    level: int | str = DEFAULT_LOG_LEVEL,
    log_to_file: bool = True,
    log_to_console: bool = False,
    console_stream: TextIO | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Configure logging for the launcher package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_to_file: Whether to log to file.
        log_to_console: Whether to log to console (stderr).
        console_stream: Stream for console output (defaults to stderr).
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of backup log files to keep.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), DEFAULT_LOG_LEVEL)

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)

    if log_to_file:
        try:
            file_handler = RotatingFileHandler(
                get_log_file_path(),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Warning: file logging disabled: {e}", file=sys.stderr)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(console_stream or sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())


def log_exception(
    logger: logging.Logger,
    exc: Exception,
    message: str = "An error occurred",
    *,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log an exception with consistent formatting.

    Args:
        logger: Logger to use.
        exc: Exception to log.
        message: Human-readable message prefix.
        level: Log level (default ERROR).
        include_traceback: Whether to include full traceback.
    """
    if include_traceback:
        logger.log(level, "%s: %s", message, exc, exc_info=exc)
    else:
        logger.log(level, "%s: %s (%s)", message, exc, type(exc).__name__)
