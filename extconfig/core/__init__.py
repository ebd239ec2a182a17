"""Core package - errors, logging and the extension configuration."""

from .errors import ConfigError, ExtConfigError, MissingExtensions
from .logging import get_logger, setup_logging

__all__ = [
    "ConfigError",
    "ExtConfigError",
    "MissingExtensions",
    "get_logger",
    "setup_logging",
]
