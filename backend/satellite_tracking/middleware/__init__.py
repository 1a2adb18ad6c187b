"""
Middleware package for the Satellite Tracking server.
"""

from .error_handler import (
    ErrorHandlingMiddleware,
    ErrorResponse,
    create_exception_handlers
)

__all__ = [
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "create_exception_handlers"
]
