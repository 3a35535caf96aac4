"""
Shared infrastructure for the CourseVault backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- storage: S3-compatible object storage client factory
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .storage import get_s3_client, reset_s3_client
from .exceptions import (
    AppError,
    NotFoundError,
    ValidationError,
    BusinessRuleError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser, Role, CamelModel

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "get_s3_client",
    "reset_s3_client",
    "AppError",
    "NotFoundError",
    "ValidationError",
    "BusinessRuleError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "Role",
    "CamelModel",
]
