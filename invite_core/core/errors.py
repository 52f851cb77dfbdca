"""
Domain errors raised by the service layer.

Services raise these instead of HTTP exceptions; ``main.py`` registers a
handler that renders them with the standard error envelope.
"""

from typing import Any, Optional
from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to the immediate caller"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    """Entity or token could not be resolved"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"


class ConflictError(AppError):
    """A uniqueness rule was violated"""

    status_code = status.HTTP_409_CONFLICT
    error_code = "conflict"


class ForbiddenError(AppError):
    """The acting user may not perform this operation"""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"


class BadRequestError(AppError):
    """Invalid input or an illegal state transition"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "bad_request"
