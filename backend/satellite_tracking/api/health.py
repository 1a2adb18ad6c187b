"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from satellite_tracking import __version__
from satellite_tracking.config import settings

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        Dict with basic health status
    """
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": __version__
    }


@router.get("/health/detailed", tags=["Health"])
async def detailed_health_check():
    """
    Health check including configuration of the N2YO integration.

    No request is sent to N2YO, so the check does not use up API quota.
    """
    n2yo_configured = bool(settings.n2yo_api_key)

    return {
        "status": "healthy" if n2yo_configured else "degraded",
        "timestamp": time.time(),
        "version": __version__,
        "checks": {
            "n2yo_api": {
                "status": "configured" if n2yo_configured else "not_configured",
                "base_url": settings.n2yo_base_url,
                "message": "N2YO API key configured" if n2yo_configured else "N2YO_API_KEY is not set"
            }
        }
    }
