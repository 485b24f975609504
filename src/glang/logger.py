"""Logging configuration for glang.

All glang modules log through children of the ``glang`` package logger,
which is configured once with either a human-readable or a JSON formatter.
Rate gate events travel as a ``gate`` record attribute so the JSON output
keeps them machine-readable.

Environment Variables:
    GLANG_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                     Default: INFO
    GLANG_LOG_FORMAT: Output format ("standard" or "json").
                      Default: standard
"""

import json
import logging
import os
import sys
from typing import Any

ROOT_LOGGER_NAME = "glang"

LOG_FORMAT_STANDARD = "%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - %(message)s"

LOG_FORMAT_DEBUG = (
    "%(asctime)s.%(msecs)03d - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(name)s:%(funcName)s - %(message)s"
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_log_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv("GLANG_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        resolved = getattr(logging, level.upper(), logging.INFO)
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


class JSONFormatter(logging.Formatter):
    """Format logs as newline-delimited JSON.

    Records carrying a ``gate`` attribute (a dict of rate gate event
    fields) have it embedded verbatim under the ``gate`` key.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Convert log record to single-line JSON string."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
        }

        gate = getattr(record, "gate", None)
        if gate is not None:
            log_data["gate"] = gate

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def _build_formatter(level: int, format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter(datefmt=DATE_FORMAT)
    if level == logging.DEBUG:
        return logging.Formatter(LOG_FORMAT_DEBUG, datefmt=DATE_FORMAT)
    return logging.Formatter(LOG_FORMAT_STANDARD, datefmt=DATE_FORMAT)


def configure_logger(
    level: int | str | None = None,
    format_type: str | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Configure the ``glang`` package logger.

    Repeated calls replace the previous handler, so the CLI can reconfigure
    output after the package has been imported.

    Args:
        level: Override default level from environment.
        format_type: Either "standard" or "json".
        handler: Custom handler; defaults to StreamHandler on stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    resolved = _resolve_log_level(level)

    if format_type is None:
        format_type = os.getenv("GLANG_LOG_FORMAT", "standard").lower()

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setLevel(resolved)
    handler.setFormatter(_build_formatter(resolved, format_type))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the ``glang`` hierarchy.

    The package logger is configured from the environment on first use.

    Args:
        name: Typically __name__ of the calling module.

    Returns:
        Logger instance.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        configure_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Update log level for all glang loggers dynamically.

    Args:
        level: New log level as int constant or string name.
    """
    resolved = _resolve_log_level(level)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolved)

    for handler in logger.handlers:
        handler.setLevel(resolved)
        # JSON output stays JSON regardless of level
        if not isinstance(handler.formatter, JSONFormatter):
            handler.setFormatter(_build_formatter(resolved, "standard"))


def mask_sensitive(value: str, prefix_len: int = 4, suffix_len: int = 4) -> str:
    """Mask an API key or access token for safe logging.

    Args:
        value: Sensitive string to mask.
        prefix_len: Characters preserved at start.
        suffix_len: Characters preserved at end.

    Returns:
        Masked string with middle replaced by asterisks.
    """
    if len(value) <= prefix_len + suffix_len:
        return "***"
    return f"{value[:prefix_len]}***{value[-suffix_len:]}"
