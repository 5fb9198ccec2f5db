"""
Structured logging configuration with Loki integration.

This module provides logging with support for:
- Per-connection context (connection_id, role, identity_id)
- JSON-formatted output for files and log aggregation
- Loki integration for centralized log aggregation
- Multiple log handlers (console, file, Loki)
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any

from care_relay.constants import (
    CONNECTION_ID_LOG_LENGTH,
    LOKI_MAX_LOG_SIZE_BYTES,
)
from care_relay.settings import app_settings

# Context variables for storing connection-specific logging context
log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# LogRecord attributes that are never copied into the JSON payload
_RESERVED_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
        "connection_tag",
    }
)


def set_log_context(**kwargs: Any) -> None:
    """
    Set contextual fields for structured logging.

    Every socket handler runs in its own task, so fields set here are
    attached to all log messages emitted while handling that connection.

    Args:
        **kwargs: Key-value pairs to add to log context.

    Example:
        >>> set_log_context(connection_id="8f0c2d1e-...")
        >>> logger.info("Login received")  # Will include connection_id
    """
    current = dict(log_context.get())
    current.update(kwargs)
    log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """
    Get current log context.

    Returns:
        Dictionary of contextual log fields.
    """
    return log_context.get()


def clear_log_context() -> None:
    """Clear the log context (useful when a connection closes)."""
    log_context.set({})


def get_connection_tag() -> str:
    """
    Short connection identifier for human-readable log lines.

    Returns:
        First characters of the current connection id, or "-".
    """
    connection_id = get_log_context().get("connection_id")
    if not connection_id:
        return "-"
    return str(connection_id)[:CONNECTION_ID_LOG_LENGTH]


class StructuredJSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    This formatter outputs logs in JSON format with:
    - Standard fields: timestamp, level, logger, message
    - Contextual fields from log_context (connection_id, ...)
    - Exception information when present
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON string with structured log data.
        """
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = get_log_context()
        if context:
            log_data.update(context)

        log_data["environment"] = app_settings.ENVIRONMENT.value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields from record
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                log_data[key] = value

        # Truncate message if too long (for Loki compatibility)
        json_str = json.dumps(log_data, default=str)
        if len(json_str) > LOKI_MAX_LOG_SIZE_BYTES:
            log_data["message"] = (
                log_data["message"][: LOKI_MAX_LOG_SIZE_BYTES - 1000]
                + "... [TRUNCATED]"
            )
            json_str = json.dumps(log_data, default=str)

        return json_str


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for console output (non-JSON).

    Uses different format strings based on log level for better readability
    during development.
    """

    INFO_FMT = "%(asctime)s - [%(connection_tag)s] %(levelname)s: %(message)s"
    ERROR_FMT = "%(asctime)s - [%(connection_tag)s] %(levelname)s: %(module)s.%(funcName)s:%(lineno)d - %(message)s"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._formatters = {
            logging.INFO: logging.Formatter(
                self.INFO_FMT, datefmt="%Y-%m-%d %H:%M:%S"
            ),
            logging.WARNING: logging.Formatter(
                self.ERROR_FMT, datefmt="%Y-%m-%d %H:%M:%S"
            ),
            logging.ERROR: logging.Formatter(
                self.ERROR_FMT, datefmt="%Y-%m-%d %H:%M:%S"
            ),
            logging.DEBUG: logging.Formatter(
                self.ERROR_FMT, datefmt="%Y-%m-%d %H:%M:%S"
            ),
        }

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with the current connection tag.

        Args:
            record: The log record to format.

        Returns:
            Formatted log string.
        """
        record.connection_tag = get_connection_tag()

        formatter = self._formatters.get(
            record.levelno, self._formatters[logging.INFO]
        )
        return formatter.format(record)


def setup_logging() -> logging.Logger:
    """
    Configure logging with console, file and optional Loki handlers.

    This function sets up:
    - Console handler (human-readable or JSON, see LOG_CONSOLE_FORMAT)
    - File handler for errors (JSON format)
    - Loki handler for centralized logging (if enabled)

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, app_settings.LOG_LEVEL.upper()))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    if app_settings.LOG_CONSOLE_FORMAT == "json":
        console_handler.setFormatter(StructuredJSONFormatter())
    else:
        console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    try:
        file_handler = logging.FileHandler(app_settings.LOG_FILE_PATH)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(StructuredJSONFormatter())
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Could not create file handler: {e}")

    if app_settings.LOKI_ENABLED:
        try:
            from logging_loki import LokiHandler

            loki_handler = LokiHandler(
                url=f"{app_settings.LOKI_URL}/loki/api/v{app_settings.LOKI_VERSION}/push",
                tags={
                    "application": "care-relay",
                    "environment": app_settings.ENVIRONMENT.value,
                },
                version=app_settings.LOKI_VERSION,
            )
            loki_handler.setLevel(logging.INFO)
            loki_handler.setFormatter(StructuredJSONFormatter())
            logger.addHandler(loki_handler)
            logger.info("Loki handler configured successfully")
        except Exception as e:
            logger.warning(f"Could not configure Loki handler: {e}")

    # Disable logging during pytest runs
    if sys.argv[0].split("/")[-1] in ["pytest"]:
        logging.disable(logging.ERROR)

    return logger


# Create default logger instance
logger = setup_logging()
