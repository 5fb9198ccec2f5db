"""Tests for structured logging functionality."""

import json
import logging
from unittest.mock import patch

from care_relay.logging import (
    HumanReadableFormatter,
    StructuredJSONFormatter,
    clear_log_context,
    get_connection_tag,
    get_log_context,
    logger,
    set_log_context,
    setup_logging,
)


def make_record(msg: str = "Test message", level: int = logging.INFO):
    return logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="/test/test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestLogContext:
    """Test log context management."""

    def test_set_log_context_adds_fields(self):
        """Test that set_log_context adds fields to log context."""
        clear_log_context()
        set_log_context(connection_id="c1", role="seeker")

        context = get_log_context()

        assert context["connection_id"] == "c1"
        assert context["role"] == "seeker"

        clear_log_context()

    def test_set_log_context_updates_existing_fields(self):
        """Test that set_log_context merges with existing context."""
        clear_log_context()
        set_log_context(connection_id="c1")
        set_log_context(identity_id="s1")

        context = get_log_context()

        assert context == {"connection_id": "c1", "identity_id": "s1"}

        clear_log_context()

    def test_set_log_context_does_not_mutate_default(self):
        """Test the shared default dict is never written to."""
        clear_log_context()
        before = get_log_context()

        set_log_context(connection_id="c1")

        assert before == {}
        clear_log_context()

    def test_clear_log_context_removes_fields(self):
        """Test that clear_log_context removes all fields."""
        set_log_context(connection_id="c1")
        clear_log_context()

        assert get_log_context() == {}


class TestConnectionTag:
    """Test short connection tags for console output."""

    def test_tag_is_truncated_connection_id(self):
        """Test the tag is the first characters of the connection id."""
        set_log_context(connection_id="8f0c2d1e-aaaa-bbbb-cccc-dddddddddddd")

        assert get_connection_tag() == "8f0c2d1e"

        clear_log_context()

    def test_dash_without_connection(self):
        """Test '-' outside of a connection."""
        clear_log_context()

        assert get_connection_tag() == "-"


class TestStructuredJSONFormatter:
    """Test JSON formatter for structured logging."""

    def test_format_includes_standard_fields(self):
        """Test that JSON formatter includes standard fields."""
        formatter = StructuredJSONFormatter()

        log_data = json.loads(formatter.format(make_record()))

        assert "timestamp" in log_data
        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "test_logger"
        assert log_data["message"] == "Test message"
        assert log_data["line"] == 10
        assert log_data["environment"] == "development"

    def test_format_includes_log_context(self):
        """Test that log context fields are included."""
        formatter = StructuredJSONFormatter()
        set_log_context(connection_id="c1")

        log_data = json.loads(formatter.format(make_record()))

        assert log_data["connection_id"] == "c1"

        clear_log_context()

    def test_format_includes_extra_fields(self):
        """Test fields passed via `extra` are included."""
        formatter = StructuredJSONFormatter()
        record = make_record()
        record.identity_id = "s1"

        log_data = json.loads(formatter.format(record))

        assert log_data["identity_id"] == "s1"

    def test_format_includes_exception_info(self):
        """Test that exception information is included."""
        formatter = StructuredJSONFormatter()

        try:
            raise ValueError("Test error")
        except ValueError:
            import sys

            exc_info = sys.exc_info()

        record = make_record("Error occurred", logging.ERROR)
        record.exc_info = exc_info

        log_data = json.loads(formatter.format(record))

        assert "exception" in log_data
        assert "ValueError: Test error" in log_data["exception"]

    def test_format_truncates_long_messages(self):
        """Test that very long messages are truncated for Loki."""
        formatter = StructuredJSONFormatter()

        formatted = formatter.format(make_record("x" * 300000))
        log_data = json.loads(formatted)

        assert "[TRUNCATED]" in log_data["message"]
        assert len(formatted) < 300000


class TestHumanReadableFormatter:
    """Test human-readable formatter for console output."""

    def test_format_includes_connection_tag(self):
        """Test that the connection tag is included."""
        formatter = HumanReadableFormatter()
        set_log_context(connection_id="8f0c2d1e-aaaa")

        formatted = formatter.format(make_record())

        assert "[8f0c2d1e]" in formatted
        assert "Test message" in formatted
        clear_log_context()

    def test_format_uses_dash_without_connection(self):
        """Test that '-' is used outside of a connection."""
        formatter = HumanReadableFormatter()
        clear_log_context()

        formatted = formatter.format(make_record())

        assert "[-]" in formatted

    def test_warning_includes_location(self):
        """Test warnings include module, function and line."""
        formatter = HumanReadableFormatter()

        formatted = formatter.format(make_record("careful", logging.WARNING))

        assert ":10 - careful" in formatted


class TestSetupLogging:
    """Test logging setup function."""

    def test_setup_logging_creates_logger(self):
        """Test that setup_logging creates and configures logger."""
        test_logger = setup_logging()

        assert isinstance(test_logger, logging.Logger)
        assert len(test_logger.handlers) > 0

    def test_setup_logging_json_console(self):
        """Test the console handler can emit JSON."""
        with patch(
            "care_relay.logging.app_settings.LOG_CONSOLE_FORMAT", "json"
        ):
            test_logger = setup_logging()

        assert isinstance(
            test_logger.handlers[0].formatter, StructuredJSONFormatter
        )
        setup_logging()

    def test_setup_logging_handles_file_handler_errors(self):
        """Test that file handler errors are handled gracefully."""
        with patch(
            "care_relay.logging.logging.FileHandler",
            side_effect=PermissionError("No write permission"),
        ):
            test_logger = setup_logging()

        assert not any(
            isinstance(h, logging.FileHandler) for h in test_logger.handlers
        )
        setup_logging()

    def test_setup_logging_loki_failure_is_tolerated(self):
        """Test a broken Loki configuration does not break startup."""
        with (
            patch("care_relay.logging.app_settings.LOKI_ENABLED", True),
            patch(
                "logging_loki.LokiHandler",
                side_effect=ValueError("bad url"),
            ),
        ):
            test_logger = setup_logging()

        assert isinstance(test_logger, logging.Logger)
        setup_logging()


class TestLoggerIntegration:
    """Integration tests for logger usage."""

    def test_logger_instance_exists(self):
        """Test that logger instance is created."""
        assert isinstance(logger, logging.Logger)
