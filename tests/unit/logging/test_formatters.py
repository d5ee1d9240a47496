"""Tests for log formatters."""

import json
import logging
import sys

from lambda_runtime_client.logging.context import clear_context, set_extra_context, set_request_id
from lambda_runtime_client.logging.formatters import TextFormatter, JSONFormatter


def _make_record(message="test message", level=logging.INFO):
    """Create a test log record."""
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestJSONFormatter:
    def setup_method(self):
        clear_context()

    def test_outputs_valid_json(self):
        output = JSONFormatter().format(_make_record())
        assert isinstance(json.loads(output), dict)

    def test_includes_message_and_level(self):
        output = JSONFormatter().format(_make_record("hello", level=logging.ERROR))
        parsed = json.loads(output)
        assert parsed["message"] == "hello"
        assert parsed["level"] == "ERROR"

    def test_includes_timestamp_and_logger(self):
        parsed = json.loads(JSONFormatter().format(_make_record()))
        assert parsed["timestamp"].endswith("+00:00")
        assert parsed["logger"] == "test.logger"

    def test_location_off_by_default(self):
        output = JSONFormatter().format(_make_record())
        assert "line" not in json.loads(output)

    def test_includes_location_when_enabled(self):
        output = JSONFormatter(include_location=True).format(_make_record())
        assert json.loads(output)["line"] == 42

    def test_includes_request_id(self):
        set_request_id("req-123")
        output = JSONFormatter().format(_make_record())
        assert json.loads(output)["requestId"] == "req-123"
        clear_context()

    def test_no_request_id_between_invocations(self):
        output = JSONFormatter().format(_make_record())
        assert "requestId" not in json.loads(output)

    def test_includes_extra_context(self):
        set_extra_context(function_name="orders")
        output = JSONFormatter().format(_make_record())
        assert json.loads(output)["function_name"] == "orders"
        clear_context()

    def test_includes_record_extras(self):
        record = _make_record()
        record.response_kind = "standard"
        output = JSONFormatter().format(record)
        assert json.loads(output)["response_kind"] == "standard"

    def test_includes_exception_info(self):
        record = _make_record()
        try:
            raise ValueError("test error")  # noqa: TRY301
        except ValueError:
            record.exc_info = sys.exc_info()
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["exception"]["type"] == "ValueError"
        assert parsed["exception"]["message"] == "test error"


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def test_outputs_pipe_separated(self):
        assert "|" in TextFormatter(use_colors=False).format(_make_record())

    def test_includes_message(self):
        assert "hello world" in TextFormatter(use_colors=False).format(_make_record("hello world"))

    def test_colors_enabled(self):
        assert "\033[" in TextFormatter(use_colors=True).format(_make_record())

    def test_colors_disabled(self):
        assert "\033[" not in TextFormatter(use_colors=False).format(_make_record())

    def test_truncates_long_logger_name(self):
        record = _make_record()
        record.name = "very.long.module.name.that.exceeds.the.maximum.length"
        assert "..." in TextFormatter(use_colors=False).format(record)

    def test_includes_request_id(self):
        set_request_id("req-abc")
        output = TextFormatter(use_colors=False).format(_make_record())
        assert "request_id=req-abc" in output
        clear_context()

    def test_includes_exception_traceback(self):
        record = _make_record()
        try:
            raise RuntimeError("kaboom")  # noqa: TRY301
        except RuntimeError:
            record.exc_info = sys.exc_info()
        output = TextFormatter(use_colors=False).format(record)
        assert "Traceback" in output
        assert "kaboom" in output
