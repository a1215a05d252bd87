"""Mockster API routers module."""

from .health import router as health_router
from .prometheus import router as prometheus_router

__all__ = [
    "health_router",
    "prometheus_router",
]
