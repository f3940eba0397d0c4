"""
Application error taxonomy.

Services raise these; backend.app.error_handlers turns them into
``{"success": false, "message": ...}`` responses with the matching status.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input, bad id shape, weak password, bad domain."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid request"


class AuthError(AppError):
    """Bad credentials or a missing/invalid/expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "forbidden"


class NotFoundError(AppError):
    """Well-formed id with no matching record (or owned by someone else)."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class ConflictError(AppError):
    """Uniqueness violation on user email or owner + domain name."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "conflict"


class InternalError(AppError):
    """Unexpected failure. Raise without a message so no internals leak."""


__all__ = [
    "AppError",
    "ValidationError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
