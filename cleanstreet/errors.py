"""HTTP-aware exception types raised by the service layer.

Each class pins the status code for one failure category so services can
raise them directly, the same way they would raise ``HTTPException``. The
application-level handler in :mod:`cleanstreet.main` renders all of them as
``{"message": ...}``.
"""
from __future__ import annotations

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Missing or invalid input."""

    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(HTTPException):
    """Missing, malformed or expired credentials."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    """The caller is authenticated but not allowed to perform the action."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Conflict") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UpstreamError(HTTPException):
    """An external dependency (object storage) failed or is not configured."""

    def __init__(self, detail: str = "Upstream service failed") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


__all__ = [
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
]
