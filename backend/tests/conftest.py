"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta

from api.dependencies import reset_container
from modules.auth.service import AuthService, reset_auth_service
from modules.auth.tokens import TokenManager
from shared.config import get_settings
from shared.models import Role

from tests.fakes import FakeAccountRepository


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_TOKEN_TTL = 3600


def make_token_manager() -> TokenManager:
    return TokenManager(secret=TEST_JWT_SECRET, ttl_seconds=TEST_TOKEN_TTL)


def create_test_token(
    user_id: str = "test-user-123",
    role: Role = Role.STUDENT,
    expired: bool = False,
) -> str:
    """
    Create a session token for tests.

    Args:
        user_id: Account ID to put in the token
        role: Role claim
        expired: If True, the token's validity window has already passed
    """
    now = datetime.now(timezone.utc)
    if expired:
        now -= timedelta(seconds=TEST_TOKEN_TTL * 2)
    return make_token_manager().issue(user_id, role, now=now).token


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached services and settings before and after each test."""
    reset_auth_service()
    reset_container()
    get_settings.cache_clear()
    yield
    reset_auth_service()
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def token_manager() -> TokenManager:
    return make_token_manager()


@pytest.fixture
def accounts() -> FakeAccountRepository:
    return FakeAccountRepository()


@pytest.fixture
def auth_service(accounts, token_manager) -> AuthService:
    """Auth service over in-memory accounts with the test signing secret."""
    return AuthService(accounts=accounts, tokens=token_manager)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid student token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Authorization headers for an admin account."""
    token = create_test_token(user_id="admin-1", role=Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}
