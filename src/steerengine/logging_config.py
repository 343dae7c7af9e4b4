"""Structured logging configuration for SteerEngine.

Configurable via environment variables:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
- LOG_FORMAT: Set format ('text' or 'json'). Default: text

Usage:
    from steerengine.logging_config import configure_logging
    configure_logging()  # Call once at application startup
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, ClassVar

ROOT_LOGGER_NAME = "steerengine"

# Attributes every LogRecord carries; anything else was passed via extra=
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "taskName"}

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_SOURCE_LEVELS = (logging.DEBUG, logging.ERROR, logging.CRITICAL)


def _short_name(name: str) -> str:
    """Strip the package prefix from a logger name."""
    prefix = f"{ROOT_LOGGER_NAME}."
    return name[len(prefix) :] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """JSON lines formatter. One object per record, stable key order."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON string with log data.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno in _SOURCE_LEVELS:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter.

    Format: TIMESTAMP LEVEL [LOGGER] MESSAGE
    DEBUG and ERROR lines also carry file:line.
    """

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold red
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize formatter.

        Args:
            use_colors: Whether to use ANSI colors (only honoured on a TTY).
        """
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single text line."""
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = f"{record.levelname:8s}"
        if self.use_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"

        line = f"{timestamp} {level} [{_short_name(record.name)}] {record.getMessage()}"

        if record.levelno in _SOURCE_LEVELS:
            line += f" ({record.filename}:{record.lineno})"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def get_log_level() -> int:
    """Get log level from the LOG_LEVEL environment variable (default INFO)."""
    return _LEVELS.get(os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)


def get_log_format() -> str:
    """Get log format from the LOG_FORMAT environment variable ('text' or 'json')."""
    format_name = os.environ.get("LOG_FORMAT", "text").lower()
    return format_name if format_name in ("text", "json") else "text"


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    use_colors: bool = True,
) -> None:
    """Configure logging for the steerengine namespace.

    Should be called once at application startup.

    Args:
        level: Log level. If None, reads LOG_LEVEL.
        format_type: 'text' or 'json'. If None, reads LOG_FORMAT.
        use_colors: Whether to use colors in text format.
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()

    handler = logging.StreamHandler(sys.stderr)
    formatter: logging.Formatter
    if format_type == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter(use_colors=use_colors)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False

    # HTTP access lines go through the same handler
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers.clear()
    uvicorn_access.addHandler(handler)
    uvicorn_access.setLevel(level)
    uvicorn_access.propagate = False

    root_logger.debug(
        "Logging configured: level=%s, format=%s",
        logging.getLevelName(level),
        format_type,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the steerengine namespace.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
