"""Request parameter handling for the query endpoints.

Times may be unix seconds (``1700000000``, ``1700000000.5``) or RFC3339
(``2023-11-14T22:13:20Z``). Steps may be seconds (``30``, ``0.5``) or a
duration string (``30s``, ``5m``, ``1h30m``).
"""

import math
import re
from datetime import datetime, timedelta, timezone

from fastapi import Request

from mockster.exceptions import InvalidParameterError

_DURATION_RE = re.compile(r"(\d+)(ms|y|w|d|h|m|s)")
_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 7 * 86400,
    "y": 365 * 86400,
}


async def read_params(request: Request) -> dict[str, str]:
    """Merge URL query parameters with an urlencoded/multipart form body."""
    params = dict(request.query_params)
    if request.method == "POST":
        form = await request.form()
        params.update({k: v for k, v in form.items() if isinstance(v, str)})
    return params


def require_param(params: dict[str, str], name: str) -> str:
    value = params.get(name, "")
    if not value:
        raise InvalidParameterError(name, "parameter is required")
    return value


def parse_time(value: str, name: str = "time") -> datetime:
    """Parse a unix-seconds or RFC3339 timestamp into an aware datetime."""
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise InvalidParameterError(
                name, f"cannot parse {value!r} to a valid timestamp"
            )
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidParameterError(
                name, f"timestamp {value!r} is out of range"
            ) from None

    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidParameterError(
            name, f"cannot parse {value!r} to a valid timestamp"
        ) from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _seconds_to_duration(seconds: float, value: str, name: str) -> timedelta:
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        raise InvalidParameterError(
            name, f"duration {value!r} is out of range"
        ) from None


def parse_duration(value: str, name: str = "step") -> timedelta:
    """Parse float seconds or a ``1h30m``-style duration."""
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds) or seconds <= 0:
            raise InvalidParameterError(
                name,
                "zero or negative query resolution step widths are not accepted",
            )
        return _seconds_to_duration(seconds, value, name)

    pos = 0
    total = 0.0
    for match in _DURATION_RE.finditer(value):
        if match.start() != pos:
            break
        try:
            total += int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        except OverflowError:
            raise InvalidParameterError(
                name, f"duration {value!r} is out of range"
            ) from None
        pos = match.end()

    if pos == 0 or pos != len(value):
        raise InvalidParameterError(name, f"cannot parse {value!r} to a valid duration")
    if total <= 0:
        raise InvalidParameterError(
            name, "zero or negative query resolution step widths are not accepted"
        )
    return _seconds_to_duration(total, value, name)
