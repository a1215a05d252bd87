"""Mockster server entry point.

Usage:
    python server.py            # listens on $MOCKSTER_HOST:$PORT (0.0.0.0:8001)

Environment variables are read from ``.env`` when present.
"""

import logging

import uvicorn
from dotenv import load_dotenv

from mockster.api import create_app
from mockster.config import get_settings
from mockster.telemetry import setup_telemetry

load_dotenv()

settings = get_settings()
setup_telemetry(settings.log_level, settings.log_format)

logger = logging.getLogger(__name__)

app = create_app(settings)

if __name__ == "__main__":
    logger.info(f"Starting Mockster on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
