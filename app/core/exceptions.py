"""
Typed application errors.

Every error carries an HTTP status code and a human-readable message and is
an ``HTTPException``, so FastAPI renders it as ``{"detail": message}``
without extra handlers.
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for errors raised by the service layer."""

    status_code_default: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail=message,
        )
        self.message = message

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class ConflictError(AppError):
    """A write would duplicate an existing active record."""

    status_code_default = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """The record is absent, or soft-deleted and treated as absent."""

    status_code_default = status.HTTP_404_NOT_FOUND
