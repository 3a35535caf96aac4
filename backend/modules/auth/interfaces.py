"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import Account, AuthResult, SignupDetails


@runtime_checkable
class IAccountRepository(Protocol):
    """Persistence contract for account records."""

    def get_by_id(self, account_id: str) -> Optional[Account]: ...

    def get_by_email(self, email: str) -> Optional[Account]: ...

    def exists(self, email: str) -> bool: ...

    def get_credentials(self, email: str) -> Optional[tuple[Account, str]]: ...

    def create(self, data: dict[str, Any]) -> Account: ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a session token and return the caller.

        Runs without any storage lookup.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Exchange email and password for a session token.

        Raises:
            InvalidCredentialsError: If either is wrong
        """
        ...

    async def email_registered(self, email: str) -> bool:
        """Check whether an account already uses this email."""
        ...

    async def create_account(self, details: SignupDetails, password: str) -> AuthResult:
        """
        Create an account and return a token scoped to it.

        Raises:
            AccountExistsError: If the email is already registered
        """
        ...

    async def get_account(self, user: AuthenticatedUser) -> Account:
        """
        Load the full account for an authenticated caller.

        Raises:
            AccountNotFoundError: If the account no longer exists
        """
        ...
