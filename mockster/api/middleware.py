"""Middleware and exception handlers for the mockster API."""

import logging
import time
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mockster.exceptions import MocksterError

logger = logging.getLogger(__name__)


async def mockster_error_handler(request: Request, exc: MocksterError) -> JSONResponse:
    """Render caller errors in the backend's error envelope."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "errorType": "bad_data", "error": exc.message},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions."""
    logger.error(f"Global exception handler caught: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"status": "error", "errorType": "internal", "error": str(exc)},
    )


async def tracing_middleware(request: Request, call_next: Any) -> Any:
    """Log each request and propagate a correlation ID."""
    correlation_id = (
        request.headers.get("X-Correlation-ID")
        or request.headers.get("X-Request-ID")
        or str(uuid.uuid4())
    )

    start_time = time.time()
    try:
        response = await call_next(request)
    except Exception as e:
        duration = (time.time() - start_time) * 1000
        logger.error(
            f"Request Failed: {request.method} {request.url.path} - {e} "
            f"({duration:.2f}ms) [Correlation-ID: {correlation_id}]"
        )
        raise

    duration = (time.time() - start_time) * 1000
    logger.info(
        f"Request End: {request.method} {request.url.path} - {response.status_code} "
        f"({duration:.2f}ms) [Correlation-ID: {correlation_id}]"
    )
    response.headers["X-Correlation-ID"] = correlation_id
    return response


def configure_middleware(app: FastAPI) -> None:
    """Configure CORS, request tracing and exception handlers."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.middleware("http")(tracing_middleware)
    app.add_exception_handler(MocksterError, mockster_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)
