"""Response assembly for synthesized series.

Turns series into the backend's success envelope, byte-compatible with what
a real server sends:

    {"status":"success","data":{"resultType":"matrix","result":[...]}}

``assemble`` never sleeps. The simulated latency is returned as
``AssembledResponse.delay`` for the transport to honor.
"""

import json
import logging
from typing import Any

from mockster.schema import AssembledResponse, Modifiers, QueryKind, SyntheticSeries

logger = logging.getLogger(__name__)

# Deliberately not JSON; sent when the invalid_response_body directive is set.
INVALID_RESPONSE_BODY = "foo"


def _series_payload(series: SyntheticSeries, kind: QueryKind) -> dict[str, Any]:
    payload: dict[str, Any] = {"metric": series.labels}
    if kind is QueryKind.INSTANT:
        ts, value = series.values[0]
        payload["value"] = [ts, value]
    else:
        payload["values"] = [[ts, value] for ts, value in series.values]
    return payload


def render_body(series_list: list[SyntheticSeries], kind: QueryKind) -> str:
    """Serialize series into the compact success envelope."""
    envelope = {
        "status": "success",
        "data": {
            "resultType": kind.result_type,
            "result": [_series_payload(s, kind) for s in series_list],
        },
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def assemble(
    series_list: list[SyntheticSeries], kind: QueryKind, modifiers: Modifiers
) -> AssembledResponse:
    """Build the body, status code and advisory delay for one query.

    Args:
        series_list: Synthesized series, already in ``series_id`` order.
        kind: Instant (vector) or range (matrix) query.
        modifiers: Parsed directives for the query.

    Returns:
        The assembled response. When ``invalid_response_body`` is set the
        body is ``INVALID_RESPONSE_BODY`` whatever the series contain.
    """
    delay = modifiers.latency_for(kind)

    if modifiers.invalid_response_body:
        logger.debug("Substituting invalid response body")
        return AssembledResponse(
            body=INVALID_RESPONSE_BODY,
            status_code=modifiers.status_code,
            delay=delay,
        )

    return AssembledResponse(
        body=render_body(series_list, kind),
        status_code=modifiers.status_code,
        delay=delay,
    )
