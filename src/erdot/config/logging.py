"""Logging configuration for erdot."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union
from .settings import get_settings

PACKAGE_LOGGER = "erdot"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(message)s"
)


def parse_level(level: Union[str, int]) -> int:
    """
    Convert a level name (case-insensitive) or number to a logging level.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(
            f"unknown log level {level!r}; "
            "expected DEBUG, INFO, WARNING, ERROR or CRITICAL"
        )
    return value


def setup_logging(
    level: Optional[Union[str, int]] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure the ``erdot`` logger.

    Console output goes to stderr so that DOT written to stdout stays clean.
    A file handler is added when ``log_file`` (or ``ERDOT_LOG_FILE``) is set;
    it always uses the detailed format with timestamps.

    Args:
        level: Logging level name or number (defaults to settings.log_level)
        log_file: Optional file path for file logging
        format_string: Optional custom format for the console handler

    Raises:
        ValueError: If ``level`` is not a known logging level
    """
    settings = get_settings()
    log_level = parse_level(level or settings.log_level)
    log_file_path = log_file or settings.log_file

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)

    # Calling setup again replaces the handlers instead of stacking them
    package_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        package_logger.addHandler(file_handler)

    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``erdot`` namespace.

    Library code never configures handlers itself; until ``setup_logging``
    runs, records follow the standard ``logging`` defaults.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
