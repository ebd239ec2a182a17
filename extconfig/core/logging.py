"""Structured logging for extconfig.

Provides JSON-formatted logs with file and console output.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from logging.handlers import RotatingFileHandler


# Record attributes promoted from keyword arguments
KNOWN_FIELDS = ("component", "extension", "path", "source", "count")


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in KNOWN_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for human-readable output."""

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")

        timestamp = datetime.now().strftime("%H:%M:%S")
        prefix = f"{color}[{timestamp}] {record.levelname:8}{self.RESET}"

        if hasattr(record, "component"):
            prefix += f" [{record.component}]"

        message = record.getMessage()

        # Add extra context on same line if brief
        extras = []
        if hasattr(record, "extension"):
            extras.append(f"ext={record.extension}")
        if hasattr(record, "source"):
            extras.append(f"source={record.source}")
        if hasattr(record, "path"):
            extras.append(f"path={record.path}")

        if extras:
            message += f" ({', '.join(extras)})"

        return f"{prefix} {message}"


class ExtLogger:
    """Logger wrapper with convenience methods for extension configuration events."""

    def __init__(self, name: str, logger: logging.Logger):
        self._name = name
        self._logger = logger

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs):
        self._log(logging.CRITICAL, message, **kwargs)

    def _log(self, level: int, message: str, **kwargs):
        """Log with extra context fields."""
        extra = {}

        for key in KNOWN_FIELDS:
            if key in kwargs:
                extra[key] = kwargs.pop(key)

        # Remaining fields go into extra_data
        if kwargs:
            extra["extra_data"] = kwargs

        self._logger.log(level, message, extra=extra)

    def extension_discovered(self, name: str, path: Path, source: str):
        self.debug(
            f"Extension discovered: {name}",
            component="discovery",
            extension=name,
            path=str(path),
            source=source
        )

    def extensions_resolved(self, enabled: list[str], ignored: list[str]):
        self.info(
            f"Resolved {len(enabled)} enabled extensions",
            component="configuration",
            count=len(enabled),
            enabled=list(enabled),
            ignored=list(ignored)
        )


# Global logger registry
_loggers: dict[str, ExtLogger] = {}
_initialized = False


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    log_dir: Optional[Path] = None,
    file_enabled: bool = False,
    console_enabled: bool = True
) -> None:
    """Initialize the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text"
        log_dir: Directory for log files
        file_enabled: Write logs to file
        console_enabled: Write logs to console (stderr)
    """
    global _initialized

    if _initialized:
        return

    root = logging.getLogger("extconfig")
    root.setLevel(getattr(logging, level.upper()))
    root.handlers.clear()

    if console_enabled:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.DEBUG)

        if format_type == "json":
            console.setFormatter(JSONFormatter())
        else:
            console.setFormatter(ColoredFormatter())

        root.addHandler(console)

    if file_enabled and log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "extconfig.log"

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    _initialized = True


def reset_logging() -> None:
    """Drop handlers and allow setup_logging to run again (useful for testing)."""
    global _initialized
    root = logging.getLogger("extconfig")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    _initialized = False


def get_logger(name: str = "extconfig") -> ExtLogger:
    """Get an extconfig logger instance."""
    if name not in _loggers:
        logger = logging.getLogger(f"extconfig.{name}")
        _loggers[name] = ExtLogger(name, logger)
    return _loggers[name]
