"""Logging and tracing setup for mockster."""

import json
import logging
import sys
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

_SERVICE_NAME = "mockster"

_NOISY_LOGGERS = ["asyncio", "httpx", "httpcore", "multipart"]


class JsonFormatter(logging.Formatter):
    """Single-line JSON log formatter with OTel correlation."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "func": record.funcName,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_obj["trace_id"] = format(span_context.trace_id, "032x")
            log_obj["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def get_tracer(name: str) -> trace.Tracer:
    """Returns a tracer for the given module name."""
    return trace.get_tracer(name)


def set_span_attribute(key: str, value: Any) -> None:
    """Sets an attribute on the current OTel span. Safe to call if no span active."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attribute(key, value)


def log_query(logger: logging.Logger, kind: str, **kwargs: Any) -> None:
    """Logs an incoming query with its arguments, truncating long values."""
    safe_args = {}
    for k, v in kwargs.items():
        val_str = str(v)
        if len(val_str) > 200:
            safe_args[k] = val_str[:200] + "... (truncated)"
        else:
            safe_args[k] = val_str

    logger.debug(f"Query: {kind} | Args: {safe_args}")


def setup_telemetry(level: int | str = logging.INFO, log_format: str = "TEXT") -> None:
    """Configures tracing and logging for the server process.

    A local ``TracerProvider`` is installed unless one is already set, so
    spans carry real ids for log correlation. Logging goes to stdout as text
    or, with ``log_format="JSON"``, one JSON object per line.
    """
    if not isinstance(trace.get_tracer_provider(), TracerProvider):
        trace.set_tracer_provider(
            TracerProvider(resource=Resource.create({"service.name": _SERVICE_NAME}))
        )

    _configure_logging_handlers(level, log_format)


def _configure_logging_handlers(level: int | str, log_format: str) -> None:
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.INFO)

    if log_format.upper() == "JSON":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logging.getLogger().handlers = [handler]
        logging.getLogger().setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stdout,
            force=True,
        )
