"""Directive parser for selector-style queries.

A query such as ``myQuery{job="api",series_count=3,latency_ms=250,canary}``
is split into its labels. Reserved keys (see ``DIRECTIVE_KEYS``) are also
converted into typed settings on ``Modifiers``:

    >>> m = parse('myQuery{job="api",series_count=3}')
    >>> m.series_count
    3
    >>> m.raw_string
    '"job":"api","series_count":"3"'

Every label, directive or not, stays in ``labels`` and ``raw_string`` in
the order it was written. Bare tags (no operator) render with an empty
value.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from mockster.exceptions import ParseError
from mockster.schema import Modifiers

logger = logging.getLogger(__name__)

SERIES_COUNT = "series_count"
MIN_VALUE = "min_value"
MAX_VALUE = "max_value"
LATENCY_MS = "latency_ms"
RANGE_LATENCY_MS = "range_latency_ms"
LINE_PATTERN = "line_pattern"
STATUS_CODE = "status_code"
INVALID_RESPONSE_BODY = "invalid_response_body"
SERIES_ID = "series_id"

_INT_DIRECTIVES = (
    SERIES_COUNT,
    MIN_VALUE,
    MAX_VALUE,
    LATENCY_MS,
    RANGE_LATENCY_MS,
    STATUS_CODE,
    SERIES_ID,
)
_NON_NEGATIVE = (SERIES_COUNT, LATENCY_MS, RANGE_LATENCY_MS)

DIRECTIVE_KEYS = frozenset(_INT_DIRECTIVES + (LINE_PATTERN, INVALID_RESPONSE_BODY))

_LABEL_NAME_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_MATCHER_RE = re.compile(r"\s*([^=!~\s]*)\s*(!=|=~|!~|=)\s*(.*?)\s*", re.DOTALL)
_QUOTES = ("'", '"')
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


def _selector_body(query: str) -> str:
    """Return the text between the first pair of braces.

    Braces inside quoted strings are ignored. Nested or unbalanced braces and
    unterminated quotes raise ``ParseError``.
    """
    body_start: int | None = None
    body: str | None = None
    quote: str | None = None
    escaped = False

    for i, ch in enumerate(query):
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in _QUOTES:
            quote = ch
        elif ch == "{":
            if body_start is not None:
                raise ParseError(f"nested '{{' at position {i} in query {query!r}")
            body_start = i + 1
        elif ch == "}":
            if body_start is None:
                raise ParseError(f"unexpected '}}' at position {i} in query {query!r}")
            if body is None:
                body = query[body_start:i]
            body_start = None

    if quote:
        raise ParseError(f"unterminated quoted string in query {query!r}")
    if body_start is not None:
        raise ParseError(f"unclosed '{{' in query {query!r}")
    return body or ""


def _split_matchers(body: str) -> list[str]:
    """Split a selector body on commas that are not inside quotes."""
    items: list[str] = []
    current: list[str] = []
    quote: str | None = None
    escaped = False

    for ch in body:
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == ",":
            items.append("".join(current))
            current = []
            continue
        current.append(ch)
    items.append("".join(current))

    # A single trailing comma is valid selector syntax.
    if len(items) > 1 and not items[-1].strip():
        items.pop()
    if len(items) == 1 and not items[0].strip():
        return []
    return items


def _unquote(value: str) -> str:
    if not value or value[0] not in _QUOTES:
        if any(q in value for q in _QUOTES) or any(c.isspace() for c in value):
            raise ParseError(f"malformed label value {value!r}")
        return value

    quote = value[0]
    if len(value) < 2 or value[-1] != quote:
        raise ParseError(f"malformed quoted value {value!r}")

    out: list[str] = []
    escaped = False
    for ch in value[1:-1]:
        if escaped:
            out.append(_ESCAPES.get(ch, ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == quote:
            raise ParseError(f"unexpected quote inside value {value!r}")
        else:
            out.append(ch)
    return "".join(out)


def _parse_matcher(item: str) -> tuple[str, str | None, str]:
    """Parse one ``name<op>value`` item into ``(name, op, value)``.

    Bare tags return ``op=None`` and an empty value.
    """
    match = _MATCHER_RE.fullmatch(item)
    if match is None:
        name = item.strip()
        if not _LABEL_NAME_RE.fullmatch(name):
            raise ParseError(f"invalid label matcher {name!r}")
        return name, None, ""

    name, op, raw_value = match.groups()
    if not _LABEL_NAME_RE.fullmatch(name):
        raise ParseError(f"invalid label name {name!r}")
    if not raw_value:
        raise ParseError(f"missing value for label {name!r}")
    return name, op, _unquote(raw_value)


def _format_label(name: str, value: str) -> str:
    return f"{json.dumps(name)}:{json.dumps(value, ensure_ascii=False)}"


def _directive_settings(matchers: list[tuple[str, str | None, str]]) -> dict[str, Any]:
    """Convert directive labels into typed ``Modifiers`` fields."""
    settings: dict[str, Any] = {}
    for name, op, value in matchers:
        if name not in DIRECTIVE_KEYS:
            continue

        if name == INVALID_RESPONSE_BODY:
            settings[name] = True
            continue
        if op is None:
            raise ParseError(f"directive {name!r} requires a value")
        if op != "=":
            raise ParseError(f"directive {name!r} must use '=', got {op!r}")

        if name == LINE_PATTERN:
            settings[name] = value
            continue

        try:
            number = int(value)
        except ValueError:
            raise ParseError(
                f"directive {name!r} must be an integer, got {value!r}"
            ) from None
        if name in _NON_NEGATIVE and number < 0:
            raise ParseError(f"directive {name!r} must not be negative, got {number}")
        if name == STATUS_CODE and not 100 <= number <= 599:
            raise ParseError(f"directive {name!r} is not an HTTP status: {number}")
        settings[name] = number
    return settings


def parse(query: str) -> Modifiers:
    """Parse a selector-style query into ``Modifiers``.

    Args:
        query: Query text, e.g. ``name{label=value,tag}``. Text outside the
            first brace block is ignored.

    Returns:
        Modifiers with typed directives, labels and the seed ``raw_string``.

    Raises:
        ParseError: If the selector or a directive value is malformed.
    """
    matchers = [_parse_matcher(item) for item in _split_matchers(_selector_body(query))]

    modifiers = Modifiers(**_directive_settings(matchers))
    for name, _op, value in matchers:
        modifiers.labels[name] = value
        modifiers.add_label(_format_label(name, value))

    logger.debug(
        f"Parsed query {query!r}: labels={len(matchers)} "
        f"series_count={modifiers.series_count}"
    )
    return modifiers
