"""Health endpoint."""

import logging

from fastapi import APIRouter

from mockster.version import get_version_info

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for connectivity testing."""
    return {"status": "ok", **get_version_info()}
