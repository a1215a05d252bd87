"""Instant and range query endpoints.

Both endpoints accept GET query strings or POST form bodies, like the real
backend. The body returned by the synthetic backend is sent verbatim, with
the directive-selected status code, after the simulated latency.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Request
from fastapi.responses import Response

from mockster.api.helpers import parse_duration, parse_time, read_params, require_param
from mockster.config import Settings, get_settings
from mockster.prometheus import render_instant, render_range
from mockster.schema import AssembledResponse
from mockster.telemetry import get_tracer, log_query, set_span_attribute

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
router = APIRouter(tags=["prometheus"])


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def _honor_delay(delay: timedelta, settings: Settings) -> None:
    if not settings.honor_latency or delay <= timedelta(0):
        return
    seconds = min(delay.total_seconds(), settings.max_latency_ms / 1000)
    logger.debug(f"Delaying response by {seconds:.3f}s")
    await asyncio.sleep(seconds)


def _to_response(result: AssembledResponse) -> Response:
    set_span_attribute("mockster.status_code", result.status_code)
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type="application/json",
    )


@router.api_route("/api/v1/query", methods=["GET", "POST"])
async def instant_query(request: Request) -> Response:
    """Answer an instant query with a single synthetic vector."""
    settings = _settings(request)
    params = await read_params(request)
    query = require_param(params, "query")
    if params.get("time"):
        instant = parse_time(params["time"], "time")
    else:
        instant = datetime.now(timezone.utc)

    log_query(logger, "instant", query=query, time=instant.isoformat())
    with tracer.start_as_current_span("mockster.instant_query"):
        set_span_attribute("mockster.query_kind", "instant")
        result = render_instant(query, instant, settings.max_samples)
        await _honor_delay(result.delay, settings)
        return _to_response(result)


@router.api_route("/api/v1/query_range", methods=["GET", "POST"])
async def range_query(request: Request) -> Response:
    """Answer a range query with a synthetic matrix."""
    settings = _settings(request)
    params = await read_params(request)
    query = require_param(params, "query")
    start = parse_time(require_param(params, "start"), "start")
    end = parse_time(require_param(params, "end"), "end")
    step = parse_duration(require_param(params, "step"), "step")

    log_query(
        logger,
        "range",
        query=query,
        start=start.isoformat(),
        end=end.isoformat(),
        step=step.total_seconds(),
    )
    with tracer.start_as_current_span("mockster.range_query"):
        set_span_attribute("mockster.query_kind", "range")
        result = render_range(
            query, start, end, step, settings.max_points, settings.max_samples
        )
        await _honor_delay(result.delay, settings)
        return _to_response(result)
