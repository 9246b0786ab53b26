"""Settings and logging for erdot."""

from .settings import DIRECTIVES, Settings, get_settings
from .logging import get_logger, parse_level, setup_logging

__all__ = [
    "DIRECTIVES",
    "Settings",
    "get_settings",
    "get_logger",
    "parse_level",
    "setup_logging",
]
