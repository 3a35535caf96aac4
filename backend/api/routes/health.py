"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    storage: str
    email: str
    payments: str


def _configured(flag: bool) -> str:
    return "configured" if flag else "not_configured"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which external collaborators have credentials. Email is
    optional: without it signup codes go to the server log.
    """
    settings = get_settings()
    database_ok = bool(settings.supabase_url and settings.supabase_service_role_key)
    storage_ok = settings.storage_configured
    return ReadinessResponse(
        status="ready" if database_ok and storage_ok else "degraded",
        database=_configured(database_ok),
        storage=_configured(storage_ok),
        email=_configured(settings.email_configured),
        payments=_configured(bool(settings.razorpay_key_id and settings.razorpay_key_secret)),
    )
