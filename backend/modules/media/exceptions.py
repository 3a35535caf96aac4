"""
Media module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class MissingKeyError(ValidationError):
    """Raised when a request names no storage key."""

    def __init__(self):
        super().__init__("Missing key", code="MISSING_KEY", details={"field": "key"})


class MissingRangeError(ValidationError):
    """Raised when a stream request carries no Range header."""

    def __init__(self):
        super().__init__(
            "Requires Range header",
            code="MISSING_RANGE",
            details={"field": "Range"},
        )


class InvalidRangeError(ValidationError):
    """Raised when a Range header cannot be served."""

    def __init__(self, header: str, reason: str):
        super().__init__(
            f"Invalid Range header: {reason}",
            code="INVALID_RANGE",
            details={"field": "Range", "value": header},
        )


class StreamAccessDeniedError(AuthorizationError):
    """
    Raised when a stream request's token is missing or fails validation.

    Carries no information about the requested object.
    """

    def __init__(self):
        super().__init__("Invalid Token", code="STREAM_ACCESS_DENIED")


class ObjectNotFoundError(NotFoundError):
    """Raised when a key does not exist in object storage."""

    def __init__(self, key: str):
        super().__init__(
            "File not found",
            code="OBJECT_NOT_FOUND",
            details={"key": key},
        )


class StorageError(ExternalServiceError):
    """Raised when object storage fails for any reason other than a missing key."""

    def __init__(self, operation: str, message: str, key: Optional[str] = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            service="object_storage",
            code="STORAGE_ERROR",
            details={"operation": operation, "key": key},
        )


class SigningError(ExternalServiceError):
    """Raised when signing fails and the signer is configured to fail closed."""

    def __init__(self, key: str, message: str):
        super().__init__(
            "Failed to sign URL",
            service="object_storage",
            code="SIGNING_FAILED",
            details={"key": key, "reason": message},
        )


class EmptyUploadError(ValidationError):
    """Raised when an upload request contains no file."""

    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message, code="EMPTY_UPLOAD", details={"field": "file"})


class UploadTooLargeError(ValidationError):
    """Raised when an uploaded file exceeds the configured limit."""

    def __init__(self, filename: str, limit: int):
        super().__init__(
            f"File too large: {filename}",
            code="UPLOAD_TOO_LARGE",
            details={"filename": filename, "limit_bytes": limit},
        )
