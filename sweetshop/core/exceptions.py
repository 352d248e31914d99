"""
Domain exceptions raised by services and dependencies.

Every exception carries the HTTP status it maps to; the handlers in
``sweetshop.api.exception_handlers`` render them as
``{"error": {"message": ...}}``.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied. Admin privileges required"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class OutOfStock(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Sweet is out of stock"


class InsufficientStock(AppError):
    """Requested more units than are available."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, available: int) -> None:
        self.available = available
        super().__init__(f"Insufficient stock. Only {available} available")
