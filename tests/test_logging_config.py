"""Tests for logging configuration module."""

from __future__ import annotations

import json
import logging
import os
from io import StringIO
from unittest.mock import patch

import pytest

from steerengine.logging_config import (
    ROOT_LOGGER_NAME,
    JSONFormatter,
    TextFormatter,
    configure_logging,
    get_log_format,
    get_log_level,
    get_logger,
)


def make_record(
    name: str = "steerengine.engine.steering",
    level: int = logging.INFO,
    msg: str = "Test message",
    args: tuple = (),
    pathname: str = "/path/to/steering.py",
    lineno: int = 42,
) -> logging.LogRecord:
    """Create a log record for formatter tests."""
    return logging.LogRecord(
        name=name,
        level=level,
        pathname=pathname,
        lineno=lineno,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestGetLogLevel:
    """Tests for get_log_level function."""

    def test_default_is_info(self) -> None:
        """Default log level should be INFO."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_level() == logging.INFO

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("WARN", logging.WARNING),
            ("Error", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_known_levels(self, value: str, expected: int) -> None:
        """LOG_LEVEL should map case-insensitively to logging constants."""
        with patch.dict(os.environ, {"LOG_LEVEL": value}):
            assert get_log_level() == expected

    def test_invalid_level_defaults_to_info(self) -> None:
        """Invalid log level should default to INFO."""
        with patch.dict(os.environ, {"LOG_LEVEL": "VERBOSE"}):
            assert get_log_level() == logging.INFO


class TestGetLogFormat:
    """Tests for get_log_format function."""

    def test_default_is_text(self) -> None:
        """Default log format should be text."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_format() == "text"

    def test_json_case_insensitive(self) -> None:
        """LOG_FORMAT=JSON should return json."""
        with patch.dict(os.environ, {"LOG_FORMAT": "JSON"}):
            assert get_log_format() == "json"

    def test_invalid_format_defaults_to_text(self) -> None:
        """Invalid log format should default to text."""
        with patch.dict(os.environ, {"LOG_FORMAT": "xml"}):
            assert get_log_format() == "text"


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_formats_as_valid_json(self) -> None:
        """Output should be valid JSON with the core fields."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["message"] == "Test message"
        assert data["level"] == "INFO"
        assert data["logger"] == "steerengine.engine.steering"
        assert "timestamp" in data

    def test_source_only_for_debug_and_error(self) -> None:
        """Source location is attached to DEBUG/ERROR records only."""
        formatter = JSONFormatter()

        debug = json.loads(formatter.format(make_record(level=logging.DEBUG, lineno=100)))
        error = json.loads(formatter.format(make_record(level=logging.ERROR)))
        info = json.loads(formatter.format(make_record(level=logging.INFO)))

        assert debug["source"]["line"] == 100
        assert debug["source"]["file"] == "/path/to/steering.py"
        assert "source" in error
        assert "source" not in info

    def test_formats_message_with_args(self) -> None:
        """Message arguments should be interpolated."""
        record = make_record(msg="Agent '%s' state %s", args=("seeker", "ARRIVE"))

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Agent 'seeker' state ARRIVE"

    def test_includes_extra_fields(self) -> None:
        """Fields passed via extra= should land under 'extra'."""
        record = make_record()
        record.agent_id = "seeker"

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"] == {"agent_id": "seeker"}

    def test_no_extra_key_without_extras(self) -> None:
        """Plain records should not carry an 'extra' key."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert "extra" not in data


class TestTextFormatter:
    """Tests for text log formatter."""

    def test_shortens_logger_name(self) -> None:
        """Logger names under steerengine should lose the package prefix."""
        output = TextFormatter(use_colors=False).format(make_record(name="steerengine.server.app"))

        assert "[server.app]" in output
        assert "steerengine.server.app" not in output
        assert "INFO" in output

    def test_keeps_foreign_logger_name(self) -> None:
        """Loggers outside the package keep their full name."""
        output = TextFormatter(use_colors=False).format(make_record(name="uvicorn.access"))

        assert "[uvicorn.access]" in output

    def test_includes_source_for_debug(self) -> None:
        """Debug logs should include file:line."""
        record = make_record(level=logging.DEBUG, lineno=99)
        record.filename = "steering.py"

        output = TextFormatter(use_colors=False).format(record)

        assert "steering.py:99" in output

    def test_no_colors_when_disabled(self) -> None:
        """Disabled colors should leave no ANSI escapes."""
        output = TextFormatter(use_colors=False).format(make_record())

        assert "\033[" not in output


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configures_package_logger(self) -> None:
        """Should configure the steerengine logger with one handler."""
        configure_logging(level=logging.DEBUG, format_type="text")

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)

    def test_repeated_calls_do_not_duplicate_handlers(self) -> None:
        """Calling twice should still leave a single handler."""
        configure_logging(level=logging.INFO, format_type="text")
        configure_logging(level=logging.INFO, format_type="text")

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_reads_from_environment(self) -> None:
        """Should read level and format from environment."""
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING", "LOG_FORMAT": "json"}):
            configure_logging()

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)


class TestGetLogger:
    """Tests for get_logger convenience function."""

    def test_prefixes_package_name(self) -> None:
        """Should prefix foreign names with steerengine."""
        assert get_logger("my_module").name == "steerengine.my_module"

    def test_preserves_package_prefix(self) -> None:
        """Should not double-prefix steerengine names."""
        assert get_logger("steerengine.engine").name == "steerengine.engine"


class TestIntegration:
    """Integration tests for logging."""

    def test_json_logging_to_stream(self) -> None:
        """A child logger's records should reach a JSON stream handler."""
        buffer = StringIO()
        handler = logging.StreamHandler(buffer)
        handler.setFormatter(JSONFormatter())

        logger = logging.getLogger("steerengine.test_json_integration")
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False

        logger.warning("Speed clamped for %s", "seeker")

        data = json.loads(buffer.getvalue().strip())
        assert data["message"] == "Speed clamped for seeker"
        assert data["level"] == "WARNING"
