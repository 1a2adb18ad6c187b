"""
Custom exceptions for the Satellite Tracking server.

The N2YO client raises the ``ExternalAPIError`` family; the HTTP layer maps
every ``SatelliteTrackingError`` to a JSON error response using ``status_code``.
"""

from typing import Any, Dict, Optional


class SatelliteTrackingError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(
        self,
        message: str,
        code: str = "GENERIC_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(SatelliteTrackingError):
    """Raised when required configuration is missing."""

    def __init__(self, message: str, config_key: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=error_details,
            status_code=500
        )


class ValidationError(SatelliteTrackingError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=error_details,
            status_code=422
        )


class NotFoundError(SatelliteTrackingError):
    """Raised when a requested resource has no data."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_id: Optional[str] = None):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            code="NOT_FOUND",
            details=details,
            status_code=404
        )


class ExternalAPIError(SatelliteTrackingError):
    """Raised when a call to the N2YO API fails."""

    def __init__(
        self,
        message: str,
        api_name: str = "N2YO",
        code: str = "EXTERNAL_API_ERROR",
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        error_details["api_name"] = api_name

        super().__init__(
            message=message,
            code=code,
            details=error_details,
            status_code=status_code
        )


class RateLimitExceededError(ExternalAPIError):
    """Raised when the API keeps answering 429 after the retry budget is spent."""

    def __init__(self, message: str = "Rate limit exceeded for N2YO API", attempts: Optional[int] = None):
        details = {}
        if attempts:
            details["attempts"] = attempts
        self.attempts = attempts

        super().__init__(message, code="RATE_LIMIT_EXCEEDED", status_code=429, details=details)


class InvalidCredentialError(ExternalAPIError):
    """Raised when the API rejects the configured API key."""

    def __init__(self, message: str = "Invalid N2YO API key"):
        super().__init__(message, code="INVALID_CREDENTIAL")


class UpstreamError(ExternalAPIError):
    """Raised for any other unsuccessful API response."""

    def __init__(self, api_status_code: int, body: str, message: Optional[str] = None):
        self.api_status_code = api_status_code
        self.body = body

        super().__init__(
            message or f"N2YO API error: {api_status_code} - {body}",
            code="UPSTREAM_ERROR",
            details={"api_status_code": api_status_code, "body": body}
        )


class NetworkError(ExternalAPIError):
    """Raised when no response was received from the API."""

    def __init__(self, message: str = "Network error while connecting to N2YO API"):
        super().__init__(message, code="NETWORK_ERROR", status_code=504)
