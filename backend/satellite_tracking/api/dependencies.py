"""
FastAPI dependencies shared by the API routers.
"""

from functools import lru_cache

from satellite_tracking.services.n2yo_service import N2YOService


@lru_cache(maxsize=1)
def _shared_n2yo_service() -> N2YOService:
    # Raises ConfigurationError (not cached) until N2YO_API_KEY is set
    return N2YOService()


def get_n2yo_service() -> N2YOService:
    """Dependency function to get the N2YO service instance."""
    return _shared_n2yo_service()
