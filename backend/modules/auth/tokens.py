"""
Stateless session tokens.

Tokens are HS256 JWTs carrying the account ID, role, issue time and expiry.
Validity depends only on the signature and the ``exp`` claim, so verification
never touches storage.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.models import Role

from .exceptions import (
    AuthNotConfiguredError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from .models import IssuedToken, TokenClaims


class TokenManager:
    """Signs and verifies session tokens with a shared secret."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        algorithm: str = "HS256",
    ):
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm

    def issue(
        self,
        subject_id: str,
        role: Role | str = Role.STUDENT,
        now: Optional[datetime] = None,
    ) -> IssuedToken:
        """Sign a token for an account."""
        if not self._secret:
            raise AuthNotConfiguredError()

        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + self._ttl
        payload = {
            "sub": str(subject_id),
            "role": Role(role).value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            MissingTokenError: If the token is empty
            ExpiredTokenError: If the token's validity window has elapsed
            InvalidTokenError: On any signature or format failure
        """
        if not token:
            raise MissingTokenError()
        if not self._secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            role = Role(payload.get("role", Role.STUDENT.value))
        except ValueError:
            raise InvalidTokenError("Invalid token: unknown role")

        return TokenClaims(
            subject_id=str(payload["sub"]),
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
