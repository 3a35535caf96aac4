"""
Base exception classes for the CourseVault backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code.
"""

from typing import Optional, Any


class AppError(Exception):
    """
    Base exception for all CourseVault errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AppError):
    """Resource not found."""

    pass


class ValidationError(AppError):
    """Input validation failed."""

    pass


class BusinessRuleError(AppError):
    """A well-formed request violated a business rule."""

    pass


class AuthenticationError(AppError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AppError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(AppError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
