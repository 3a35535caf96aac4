"""
Signup code module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.auth.models import AuthResult

from .models import OtpRecord, SignupInitResult, SignupVerifyRequest


@runtime_checkable
class IOtpRepository(Protocol):
    """
    Persistence contract for pending codes.

    Implementations own expiry: ``find_active`` must not return a record
    older than the configured TTL.
    """

    def replace(self, email: str, code: str) -> OtpRecord: ...

    def find_active(self, email: str, code: str) -> Optional[OtpRecord]: ...

    def delete_for_email(self, email: str) -> None: ...

    def purge_expired(self) -> int: ...


@runtime_checkable
class IMailer(Protocol):
    """Delivers a verification code. Returns False when nothing was sent."""

    async def send_code(self, email: str, name: str, code: str, ttl_seconds: int) -> bool: ...

    async def close(self) -> None: ...


@runtime_checkable
class IOtpService(Protocol):
    """
    Email verification gate in front of account creation.

    States per email: no pending code -> code pending -> verified or expired.
    """

    async def initiate(self, email: str, first_name: str) -> SignupInitResult:
        """
        Create (or replace) the pending code for an email and try to send it.

        Raises:
            AccountExistsError: If the email already has an account
        """
        ...

    async def verify(self, request: SignupVerifyRequest) -> AuthResult:
        """
        Consume a pending code and create the account.

        Raises:
            CodeInvalidOrExpiredError: If no unexpired record matches
        """
        ...
