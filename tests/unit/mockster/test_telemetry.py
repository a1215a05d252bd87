"""Tests for logging and tracing helpers."""

import json
import logging

import pytest
from opentelemetry.sdk.trace import TracerProvider

from mockster.telemetry import JsonFormatter, log_query, setup_telemetry


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("mockster.test", logging.INFO, __file__, 1, msg, None, None)


class TestJsonFormatter:
    def test_basic_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(_record("hello")))
        assert payload["message"] == "hello"
        assert payload["severity"] == "INFO"
        assert payload["logger"] == "mockster.test"
        assert "trace_id" not in payload

    def test_includes_active_span(self) -> None:
        tracer = TracerProvider().get_tracer("test")
        with tracer.start_as_current_span("span") as span:
            payload = json.loads(JsonFormatter().format(_record("inside")))
            ctx = span.get_span_context()
        assert payload["trace_id"] == format(ctx.trace_id, "032x")
        assert payload["span_id"] == format(ctx.span_id, "016x")


class TestLogQuery:
    def test_truncates_long_values(self, caplog) -> None:
        logger = logging.getLogger("mockster.test")
        with caplog.at_level(logging.DEBUG, logger="mockster.test"):
            log_query(logger, "range", query="q{" + "a" * 500 + "}")
        assert "Query: range" in caplog.text
        assert "(truncated)" in caplog.text


class TestSetupTelemetry:
    def test_json_format(self, restore_root_logger) -> None:
        setup_telemetry(logging.DEBUG, "JSON")
        root = restore_root_logger
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG

    def test_text_format(self, restore_root_logger) -> None:
        setup_telemetry("WARNING", "TEXT")
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
