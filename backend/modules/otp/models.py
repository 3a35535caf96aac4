"""
Signup code data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import CamelModel


class OtpRecord(BaseModel):
    """A pending signup code. Never mutated after creation."""

    email: str
    code: str
    created_at: datetime

    model_config = {"frozen": True}


class SignupInitRequest(CamelModel):
    """Request body for POST /auth/signup-init."""

    email: EmailStr
    first_name: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class SignupVerifyRequest(CamelModel):
    """Request body for POST /auth/signup-verify."""

    email: EmailStr
    otp: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    college: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("otp")
    @classmethod
    def _strip_otp(cls, value: str) -> str:
        return value.strip()


class SignupInitResult(CamelModel):
    """
    Outcome of starting a signup.

    ``dev_otp`` is only populated when the code could not be emailed
    and the deployment explicitly allows exposing it.
    """

    message: str
    delivered: bool = False
    dev_otp: Optional[str] = None
