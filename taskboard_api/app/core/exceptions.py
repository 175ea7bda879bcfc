"""
Exception taxonomy raised by the service layer.

Every error carries the HTTP status it maps to, so the API layer can
render it without knowing about individual exception types.  The
handlers registered in ``api.errors`` turn these into JSON bodies of
the form ``{"message": ..., "field": ...}``.
"""

from typing import Optional

from fastapi import status


class TaskboardError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class ValidationError(TaskboardError):
    """Malformed or missing input.  ``field`` names the offending input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Unauthorized(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Forbidden(TaskboardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(TaskboardError):
    """Uniqueness violation (duplicate username or membership)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class InternalError(TaskboardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
