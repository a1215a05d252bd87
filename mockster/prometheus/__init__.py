"""Synthetic backend for metrics queries.

Entry points used by the HTTP layer (and directly by tests):

- ``get_time_series_data(query, start, end, step)`` -> ``(body, status_code)``
- ``get_instant_data(query, instant)`` -> ``(body, status_code)``
- ``render_range`` / ``render_instant`` -> ``AssembledResponse`` (adds delay)

Errors are raised, never returned: ``ParseError`` for malformed queries and
``RangeError`` for impossible bounds or time ranges.
"""

from datetime import timedelta

from mockster.config import DEFAULT_MAX_POINTS, DEFAULT_MAX_SAMPLES
from mockster.schema import AssembledResponse, QueryKind

from .assembler import INVALID_RESPONSE_BODY, assemble
from .directives import DIRECTIVE_KEYS, parse
from .synthesizer import (
    Timestamp,
    synthesize_instant,
    synthesize_range,
)


def render_range(
    query: str,
    start: Timestamp,
    end: Timestamp,
    step: timedelta,
    max_points: int = DEFAULT_MAX_POINTS,
    max_samples: int = DEFAULT_MAX_SAMPLES,
) -> AssembledResponse:
    """Answer a range query."""
    modifiers = parse(query)
    if modifiers.invalid_response_body:
        return assemble([], QueryKind.RANGE, modifiers)
    series = synthesize_range(modifiers, start, end, step, max_points, max_samples)
    return assemble(series, QueryKind.RANGE, modifiers)


def render_instant(
    query: str, instant: Timestamp, max_samples: int = DEFAULT_MAX_SAMPLES
) -> AssembledResponse:
    """Answer an instant query."""
    modifiers = parse(query)
    if modifiers.invalid_response_body:
        return assemble([], QueryKind.INSTANT, modifiers)
    series = synthesize_instant(modifiers, instant, max_samples)
    return assemble(series, QueryKind.INSTANT, modifiers)


def get_time_series_data(
    query: str, start: Timestamp, end: Timestamp, step: timedelta
) -> tuple[str, int]:
    """Range query body and status code."""
    response = render_range(query, start, end, step)
    return response.body, response.status_code


def get_instant_data(query: str, instant: Timestamp) -> tuple[str, int]:
    """Instant query body and status code."""
    response = render_instant(query, instant)
    return response.body, response.status_code


__all__ = [
    "DIRECTIVE_KEYS",
    "INVALID_RESPONSE_BODY",
    "get_instant_data",
    "get_time_series_data",
    "parse",
    "render_instant",
    "render_range",
]
