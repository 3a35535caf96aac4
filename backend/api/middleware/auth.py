"""
Bearer token authentication.

Session tokens are verified by the auth service from their signature and
expiry alone; there is no database lookup on the request path.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InsufficientPermissionsError, MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser, Role

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError()
    return await auth.validate_token(credentials.credentials)


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that requires an authenticated admin."""
    if not user.is_admin:
        raise InsufficientPermissionsError(Role.ADMIN.value, user.role.value)
    return user
