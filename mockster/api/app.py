"""Mockster API application factory."""

import logging

from fastapi import FastAPI

from mockster.api.middleware import configure_middleware
from mockster.api.routers import health_router, prometheus_router
from mockster.config import Settings, get_settings
from mockster.version import VERSION

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, title: str = "Mockster") -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Server settings; read from the environment when omitted.
        title: Application title

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(title=title, version=VERSION)
    app.state.settings = settings

    configure_middleware(app)

    app.include_router(health_router)
    app.include_router(prometheus_router, prefix=settings.path_prefix)

    logger.info(
        f"Mockster app created (prefix={settings.path_prefix or '/'}, "
        f"honor_latency={settings.honor_latency})"
    )
    return app
