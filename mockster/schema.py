"""Pydantic models shared by the parser, synthesizer and assembler.

- ``Modifiers``: typed directive configuration plus pass-through labels
- ``SyntheticSeries``: one generated series (labels + points)
- ``AssembledResponse``: body, status code and advisory delay for a query
"""

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SERIES_COUNT = 1
DEFAULT_MIN_VALUE = 0
DEFAULT_MAX_VALUE = 100
DEFAULT_STATUS_CODE = 200


class QueryKind(str, Enum):
    """Kind of query being answered."""

    INSTANT = "instant"
    RANGE = "range"

    @property
    def result_type(self) -> str:
        return "vector" if self is QueryKind.INSTANT else "matrix"


class LinePattern(str, Enum):
    """Value curve shapes selectable with the ``line_pattern`` directive."""

    USAGE_CURVE = "usage_curve"


class Modifiers(BaseModel):
    """Directives and labels parsed from a query string.

    ``raw_string`` is the normalized ``"key":"value"`` list used both as the
    label representation and as the generation seed. ``labels`` keeps every
    query label in encounter order.
    """

    model_config = ConfigDict(extra="forbid")

    raw_string: str = Field(default="", description="Comma-joined quoted labels")
    labels: dict[str, str] = Field(
        default_factory=dict, description="Query labels in encounter order"
    )

    series_count: int = Field(default=DEFAULT_SERIES_COUNT, ge=0)
    min_value: int = DEFAULT_MIN_VALUE
    max_value: int = DEFAULT_MAX_VALUE
    latency_ms: int = Field(default=0, ge=0)
    range_latency_ms: int = Field(default=0, ge=0)
    line_pattern: str | None = None
    status_code: int = DEFAULT_STATUS_CODE
    invalid_response_body: bool = False
    series_id: int | None = Field(
        default=None, description="Pinned index of the first series"
    )

    def add_label(self, label: str) -> None:
        """Append an already-formatted label to ``raw_string``."""
        if self.raw_string:
            self.raw_string += ","
        self.raw_string += label

    @property
    def first_series_id(self) -> int:
        return self.series_id if self.series_id is not None else 0

    def latency_for(self, kind: QueryKind) -> timedelta:
        """Advisory delay for a query of the given kind."""
        ms = self.latency_ms if kind is QueryKind.INSTANT else self.range_latency_ms
        return timedelta(milliseconds=ms)


class SyntheticSeries(BaseModel):
    """One synthesized series.

    ``values`` holds ``(unix_seconds, "<int>")`` pairs in time order.
    """

    model_config = ConfigDict(extra="forbid")

    labels: dict[str, str] = Field(default_factory=dict)
    values: list[tuple[int, str]] = Field(default_factory=list)


class AssembledResponse(BaseModel):
    """What the transport layer needs to answer a query."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    body: str
    status_code: int = DEFAULT_STATUS_CODE
    delay: timedelta = timedelta(0)
