from fastapi import FastAPI

from satellite_tracking import __version__
from satellite_tracking.api.health import router as health_router
from satellite_tracking.api.resources import router as resources_router
from satellite_tracking.api.satellites import router as satellites_router
from satellite_tracking.config import settings
from satellite_tracking.middleware.error_handler import ErrorHandlingMiddleware, create_exception_handlers
from satellite_tracking.utils.logging_config import setup_logging, get_logger

# Set up logging
setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Satellite Tracking Server",
    description="""
    Satellite tracking data from the [N2YO API](https://www.n2yo.com/api/).

    ## Tools

    * **TLE**: Two-line element sets by NORAD ID
    * **Positions**: Satellite positions as seen from an observer
    * **Passes**: Visual and radio pass predictions
    * **Above**: Satellites currently above a location
    * **Search**: Satellites by name, international designator or category

    ## Resources

    * `/resources/satellite/{norad_id}`
    * `/resources/satellites/category/{category_id}`
    * `/resources/satellites/above/{lat}/{lng}/{radius}`

    ## Rate Limiting

    Requests that hit the N2YO rate limit are retried with exponential backoff
    (1s, 2s, 4s) before a 429 error is returned.
    """,
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

# Add exception handlers
exception_handlers = create_exception_handlers()
for exception_type, handler in exception_handlers.items():
    app.add_exception_handler(exception_type, handler)

# Error handling middleware assigns correlation IDs to every request
app.add_middleware(ErrorHandlingMiddleware, debug=settings.debug)

app.include_router(health_router)  # Health endpoints at root level
app.include_router(satellites_router, prefix=settings.api_v1_prefix)
app.include_router(resources_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Satellite Tracking Server",
        "version": __version__,
        "docs_url": "/api/docs",
        "health_url": "/health"
    }


def run():
    """Run the API with uvicorn."""
    import uvicorn

    logger.info(f"Starting Satellite Tracking Server v{__version__} on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
