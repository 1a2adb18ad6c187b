"""
Global error handling middleware and exception handlers for FastAPI.
"""

import logging
import time
import uuid
from typing import Any, Dict, Optional

from fastapi import Request, Response, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from satellite_tracking.exceptions import ExternalAPIError, SatelliteTrackingError

logger = logging.getLogger(__name__)


class ErrorResponse:
    """Standardized error response format."""

    @staticmethod
    def create_error_response(
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        status_code: int = 500
    ) -> Dict[str, Any]:
        """
        Create a standardized error response.

        Args:
            code: Error code identifier
            message: Human-readable error message
            details: Additional error details
            correlation_id: Request correlation ID for tracking
            status_code: HTTP status code

        Returns:
            Dict containing the standardized error response
        """
        error_response = {
            "error": {
                "code": code,
                "message": message,
                "timestamp": time.time(),
                "status_code": status_code
            }
        }

        if details:
            error_response["error"]["details"] = details

        if correlation_id:
            error_response["error"]["correlation_id"] = correlation_id

        return error_response


def _correlation_id(request: Request) -> str:
    return getattr(request.state, 'correlation_id', None) or str(uuid.uuid4())


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tags every request with a correlation ID and turns
    uncaught exceptions into consistent error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            logger.error(
                f"Unhandled exception in request {correlation_id}: {str(e)}",
                extra={
                    "correlation_id": correlation_id,
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(e).__name__
                },
                exc_info=True
            )

            error_response = ErrorResponse.create_error_response(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again later.",
                details={"exception_type": type(e).__name__} if self.debug else None,
                correlation_id=correlation_id,
                status_code=500
            )

            return JSONResponse(
                status_code=500,
                content=error_response,
                headers={"X-Correlation-ID": correlation_id}
            )


def create_exception_handlers():
    """
    Create FastAPI exception handlers for various error types.

    Returns:
        Dict of exception handlers
    """

    async def satellite_tracking_exception_handler(request: Request, exc: SatelliteTrackingError):
        """Handle custom application exceptions."""
        correlation_id = _correlation_id(request)

        # Upstream failures are worth an error entry, client mistakes are not
        log = logger.error if isinstance(exc, ExternalAPIError) else logger.warning
        log(
            f"Application exception in request {correlation_id}: {exc.code} - {exc.message}",
            extra={
                "correlation_id": correlation_id,
                "path": request.url.path,
                "method": request.method,
                "error_code": exc.code
            }
        )

        error_response = ErrorResponse.create_error_response(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            correlation_id=correlation_id,
            status_code=exc.status_code
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_response,
            headers={"X-Correlation-ID": correlation_id}
        )

    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle FastAPI HTTP exceptions."""
        correlation_id = _correlation_id(request)

        logger.warning(
            f"HTTP exception in request {correlation_id}: {exc.status_code} - {exc.detail}",
            extra={
                "correlation_id": correlation_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code
            }
        )

        # Map HTTP status codes to error codes
        error_code_map = {
            400: "BAD_REQUEST",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            422: "UNPROCESSABLE_ENTITY",
            429: "TOO_MANY_REQUESTS",
            500: "INTERNAL_SERVER_ERROR",
            502: "BAD_GATEWAY",
            503: "SERVICE_UNAVAILABLE",
            504: "GATEWAY_TIMEOUT"
        }

        error_response = ErrorResponse.create_error_response(
            code=error_code_map.get(exc.status_code, "HTTP_ERROR"),
            message=str(exc.detail),
            correlation_id=correlation_id,
            status_code=exc.status_code
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_response,
            headers={"X-Correlation-ID": correlation_id}
        )

    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request parameter validation errors."""
        correlation_id = _correlation_id(request)

        validation_errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            validation_errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"]
            })

        logger.warning(
            f"Validation error in request {correlation_id}: {len(validation_errors)} validation errors",
            extra={
                "correlation_id": correlation_id,
                "path": request.url.path,
                "method": request.method
            }
        )

        error_response = ErrorResponse.create_error_response(
            code="VALIDATION_ERROR",
            message="Input validation failed",
            details={"validation_errors": validation_errors},
            correlation_id=correlation_id,
            status_code=422
        )

        return JSONResponse(
            status_code=422,
            content=error_response,
            headers={"X-Correlation-ID": correlation_id}
        )

    return {
        SatelliteTrackingError: satellite_tracking_exception_handler,
        HTTPException: http_exception_handler,
        StarletteHTTPException: http_exception_handler,
        RequestValidationError: validation_exception_handler,
    }
