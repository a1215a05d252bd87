"""Mockster API module: FastAPI routers serving the synthetic backend."""

from .app import create_app

__all__ = ["create_app"]
