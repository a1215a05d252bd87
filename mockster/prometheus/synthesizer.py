"""Deterministic series synthesis.

Every value is a pure function of the query's ``raw_string``, the series
index and the point's timestamp, so identical queries always produce
identical data. Instant and range queries that touch the same timestamp
also agree.
"""

from __future__ import annotations

import hashlib
import logging
import math
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from mockster.config import DEFAULT_MAX_POINTS, DEFAULT_MAX_SAMPLES
from mockster.exceptions import RangeError
from mockster.schema import LinePattern, Modifiers, SyntheticSeries

logger = logging.getLogger(__name__)

Timestamp = datetime | int | float

SERIES_ID_LABEL = "series_id"


def to_unix(ts: Timestamp) -> int:
    """Convert a timestamp to whole unix seconds. Naive datetimes are UTC."""
    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return math.floor(ts.timestamp())
    return math.floor(ts)


def time_axis(
    start: Timestamp,
    end: Timestamp,
    step: timedelta,
    max_points: int = DEFAULT_MAX_POINTS,
) -> list[int]:
    """Return every ``step`` from ``start`` to ``end``, both ends included.

    If the span is not a multiple of ``step`` the final point is ``end``
    itself rather than the last full step.

    Raises:
        RangeError: If ``end`` precedes ``start``, ``step`` is under one
            second, or the axis would exceed ``max_points``.
    """
    start_s = to_unix(start)
    end_s = to_unix(end)
    step_s = int(step.total_seconds())

    if step_s <= 0:
        raise RangeError(f"step must be at least 1s, got {step.total_seconds()}s")
    if end_s < start_s:
        raise RangeError(f"end {end_s} is before start {start_s}")

    full_steps, remainder = divmod(end_s - start_s, step_s)
    count = full_steps + 1 + (1 if remainder else 0)
    if count > max_points:
        raise RangeError(
            f"exceeded maximum resolution of {max_points} points per timeseries "
            f"({count} requested)"
        )

    axis = list(range(start_s, end_s + 1, step_s))
    if axis[-1] != end_s:
        axis.append(end_s)
    return axis


def _hash_int(*parts: object) -> int:
    seed = hashlib.md5("-".join(str(p) for p in parts).encode()).hexdigest()
    return int(seed[:16], 16)


def random_value(raw_string: str, series_index: int, ts: int, low: int, high: int) -> int:
    """Pseudo-random integer in ``[low, high]`` for one point."""
    return low + _hash_int(raw_string, series_index, ts) % (high - low + 1)


def curve_peak(raw_string: str, series_index: int, low: int, high: int) -> int:
    """Peak amplitude of a usage curve.

    Index 0 peaks at ``high``. Further indexes step down through
    ``[max(low, 1), high]`` by a query-derived stride coprime with the width
    of that interval, so peaks stay distinct until the interval runs out.
    """
    floor = min(max(low, 1), high)
    width = high - floor + 1
    if width <= 1:
        return high

    stride = 1 + _hash_int(raw_string, "peak") % (width - 1)
    while math.gcd(stride, width) != 1:
        stride += 1
    return high - (series_index * stride) % width


def _random_points(
    modifiers: Modifiers, series_index: int, axis: list[int]
) -> list[tuple[int, str]]:
    return [
        (
            ts,
            str(
                random_value(
                    modifiers.raw_string,
                    series_index,
                    ts,
                    modifiers.min_value,
                    modifiers.max_value,
                )
            ),
        )
        for ts in axis
    ]


def _usage_curve_points(
    modifiers: Modifiers, series_index: int, axis: list[int]
) -> list[tuple[int, str]]:
    peak = curve_peak(
        modifiers.raw_string, series_index, modifiers.min_value, modifiers.max_value
    )
    if len(axis) == 1:
        return [(axis[0], str(peak))]

    first, last = axis[0], axis[-1]
    span = last - first
    midpoint = first + span / 2
    half_step = (axis[1] - axis[0]) / 2

    points = []
    for ts in axis:
        if first < ts < last and abs(ts - midpoint) <= half_step:
            value = 0
        else:
            distance = abs(2 * (ts - first) / span - 1)
            value = math.floor(peak * distance + 0.5)
        points.append((ts, str(value)))
    return points


_GENERATORS: dict[
    str | None, Callable[[Modifiers, int, list[int]], list[tuple[int, str]]]
] = {
    None: _random_points,
    LinePattern.USAGE_CURVE.value: _usage_curve_points,
}


def check_bounds(modifiers: Modifiers) -> None:
    """Reject value bounds that cannot be satisfied."""
    if modifiers.max_value < modifiers.min_value:
        raise RangeError(
            f"max_value {modifiers.max_value} is less than "
            f"min_value {modifiers.min_value}"
        )


def _series_labels(modifiers: Modifiers, series_id: int) -> dict[str, str]:
    labels = {k: v for k, v in modifiers.labels.items() if k != SERIES_ID_LABEL}
    labels[SERIES_ID_LABEL] = str(series_id)
    return labels


def synthesize(
    modifiers: Modifiers, axis: list[int], max_samples: int = DEFAULT_MAX_SAMPLES
) -> list[SyntheticSeries]:
    """Build ``series_count`` series over a precomputed time axis.

    Raises:
        RangeError: If ``max_value`` is below ``min_value``, or
            ``series_count`` x points exceeds ``max_samples``.
    """
    check_bounds(modifiers)
    samples = modifiers.series_count * len(axis)
    if samples > max_samples:
        raise RangeError(
            f"query would produce {samples} samples, limit is {max_samples} "
            f"({modifiers.series_count} series x {len(axis)} points)"
        )

    generate = _GENERATORS.get(modifiers.line_pattern, _random_points)
    first_id = modifiers.first_series_id

    series = []
    for series_id in range(first_id, first_id + modifiers.series_count):
        series.append(
            SyntheticSeries(
                labels=_series_labels(modifiers, series_id),
                values=generate(modifiers, series_id, axis),
            )
        )

    logger.debug(
        f"Synthesized {len(series)} series x {len(axis)} points "
        f"(pattern={modifiers.line_pattern or 'random'})"
    )
    return series


def synthesize_range(
    modifiers: Modifiers,
    start: Timestamp,
    end: Timestamp,
    step: timedelta,
    max_points: int = DEFAULT_MAX_POINTS,
    max_samples: int = DEFAULT_MAX_SAMPLES,
) -> list[SyntheticSeries]:
    """Series for a range query: one point per step over ``[start, end]``."""
    check_bounds(modifiers)
    return synthesize(modifiers, time_axis(start, end, step, max_points), max_samples)


def synthesize_instant(
    modifiers: Modifiers, instant: Timestamp, max_samples: int = DEFAULT_MAX_SAMPLES
) -> list[SyntheticSeries]:
    """Series for an instant query: a single point at ``instant``."""
    return synthesize(modifiers, [to_unix(instant)], max_samples)
