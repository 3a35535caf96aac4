"""
Authentication module.

Handles session tokens, password hashing, login and account creation.

Public API:
- IAuthService: Interface for auth operations
- TokenManager: Stateless token signing/verification
- hash_password / verify_password
- Account, AuthResult, SignupDetails, TokenClaims models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IAccountRepository
from .models import Account, AuthResult, IssuedToken, SignupDetails, TokenClaims
from .passwords import hash_password, verify_password
from .tokens import TokenManager
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    AccountExistsError,
    AccountNotFoundError,
    InsufficientPermissionsError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IAccountRepository",
    # Building blocks
    "TokenManager",
    "hash_password",
    "verify_password",
    # Models
    "Account",
    "AuthResult",
    "IssuedToken",
    "SignupDetails",
    "TokenClaims",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "AccountExistsError",
    "AccountNotFoundError",
    "InsufficientPermissionsError",
]
