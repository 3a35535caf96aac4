"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """Account roles."""

    STUDENT = "student"
    ADMIN = "admin"


class CamelModel(BaseModel):
    """Base model whose JSON field names are camelCase (``branchSlug``)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    Populated from verified session token claims and made available
    to route handlers via dependency injection. No database lookup
    is needed to build it.
    """

    id: str = Field(..., description="Account ID")
    role: Role = Field(default=Role.STUDENT, description="Account role")
    issued_at: Optional[datetime] = Field(None, description="Token issue time")
    expires_at: Optional[datetime] = Field(None, description="Token expiry time")

    model_config = {
        "frozen": True,  # Make immutable for safety
    }

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
