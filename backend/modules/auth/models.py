"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import CamelModel, Role


class TokenClaims(BaseModel):
    """Verified contents of a session token."""

    subject_id: str = Field(..., description="Account ID")
    role: Role = Field(default=Role.STUDENT)
    issued_at: datetime
    expires_at: datetime

    model_config = {"frozen": True}


class IssuedToken(BaseModel):
    """A freshly signed session token."""

    token: str
    expires_at: datetime


class Account(CamelModel):
    """
    Public view of an account.

    Entitlements and progress are owned by the ledger module and
    attached here when the account is returned to the client.
    The password hash never appears on this model.
    """

    id: str
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Role = Role.STUDENT
    branch: Optional[str] = None
    year: Optional[str] = None
    college: Optional[str] = None
    created_at: Optional[datetime] = None

    purchased_course_ids: list[str] = Field(default_factory=list)
    purchased_note_ids: list[str] = Field(default_factory=list)
    course_progress: dict[str, list[str]] = Field(default_factory=dict)


class SignupDetails(CamelModel):
    """Profile fields collected during signup verification."""

    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    college: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """Token plus account, returned by login and signup verification."""

    token: str
    user: Account
