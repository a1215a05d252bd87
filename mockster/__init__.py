"""Mockster: a synthetic metrics-query backend for testing.

Query strings carry control directives as pseudo-labels (``series_count``,
``latency_ms``, ``line_pattern``, ...) that decide what fake data comes back.
See ``mockster.prometheus`` for the query operations and ``mockster.api``
for the HTTP server.
"""

from .exceptions import InvalidParameterError, MocksterError, ParseError, RangeError
from .prometheus import get_instant_data, get_time_series_data

__all__ = [
    "InvalidParameterError",
    "MocksterError",
    "ParseError",
    "RangeError",
    "get_instant_data",
    "get_time_series_data",
]
