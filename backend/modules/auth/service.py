"""
Authentication service implementation.

Issues and validates session tokens, checks passwords, and creates
accounts once an email has been verified.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.config import get_settings
from shared.database import get_supabase_client
from shared.models import AuthenticatedUser, Role

from .interfaces import IAccountRepository, IAuthService
from .models import Account, AuthResult, IssuedToken, SignupDetails
from .passwords import hash_password, verify_password
from .repository import AccountRepository
from .tokens import TokenManager
from .exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

# Postgres unique_violation
_UNIQUE_VIOLATION = "23505"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are verified purely from their signature and expiry.
    Account records live in Supabase; entitlements and progress are
    attached from the ledger when one is wired in.
    """

    def __init__(
        self,
        accounts: Optional[IAccountRepository] = None,
        tokens: Optional[TokenManager] = None,
        ledger: Any = None,  # ILedgerService - injected
    ):
        self._settings = get_settings()
        self._accounts = accounts
        self._tokens = tokens or TokenManager(
            secret=self._settings.jwt_secret,
            ttl_seconds=self._settings.access_token_ttl_seconds,
            algorithm=self._settings.jwt_algorithm,
        )
        self._ledger = ledger

    @property
    def accounts(self) -> IAccountRepository:
        if self._accounts is None:
            self._accounts = AccountRepository(get_supabase_client())
        return self._accounts

    def issue_token(self, subject_id: str, role: Role | str) -> IssuedToken:
        return self._tokens.issue(subject_id, role)

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        claims = self._tokens.verify(token)
        return AuthenticatedUser(
            id=claims.subject_id,
            role=claims.role,
            issued_at=claims.issued_at,
            expires_at=claims.expires_at,
        )

    async def login(self, email: str, password: str) -> AuthResult:
        found = self.accounts.get_credentials(email)
        if found is None:
            raise InvalidCredentialsError()

        account, password_hash = found
        if not verify_password(password, password_hash):
            raise InvalidCredentialsError()

        issued = self.issue_token(account.id, account.role)
        logger.info("Account %s logged in", account.id)
        return AuthResult(token=issued.token, user=await self._with_ledger(account))

    async def email_registered(self, email: str) -> bool:
        return self.accounts.exists(email)

    async def create_account(self, details: SignupDetails, password: str) -> AuthResult:
        email = details.email.lower()
        role = Role.ADMIN if email in self._admin_emails() else Role.STUDENT

        data = {
            "email": email,
            "password_hash": hash_password(password, self._settings.bcrypt_rounds),
            "first_name": details.first_name,
            "last_name": details.last_name,
            "role": role.value,
            "branch": details.branch,
            "year": details.year,
            "college": details.college,
        }
        try:
            account = self.accounts.create(data)
        except APIError as e:
            if getattr(e, "code", None) == _UNIQUE_VIOLATION:
                raise AccountExistsError(email)
            raise

        issued = self.issue_token(account.id, account.role)
        logger.info("Created %s account %s", account.role.value, account.id)
        return AuthResult(token=issued.token, user=account)

    async def get_account(self, user: AuthenticatedUser) -> Account:
        account = self.accounts.get_by_id(user.id)
        if account is None:
            raise AccountNotFoundError(user.id)
        return await self._with_ledger(account)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _admin_emails(self) -> set[str]:
        return {e.lower() for e in self._settings.admin_emails}

    async def _with_ledger(self, account: Account) -> Account:
        """Attach entitlements and progress from the ledger."""
        if self._ledger is None:
            return account
        entitlements = await self._ledger.get_entitlements(account.id)
        progress = await self._ledger.get_progress(account.id)
        return account.model_copy(
            update={
                "purchased_course_ids": entitlements.course_ids,
                "purchased_note_ids": entitlements.note_ids,
                "course_progress": progress,
            }
        )


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
