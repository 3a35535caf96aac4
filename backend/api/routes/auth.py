"""
Account endpoints: email-verified signup, login and the current user.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.interfaces import IAuthService
from modules.auth.models import Account, AuthResult, LoginRequest
from modules.otp.interfaces import IOtpService
from modules.otp.models import SignupInitRequest, SignupInitResult, SignupVerifyRequest
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service, get_otp_service
from ..middleware.auth import get_current_user

router = APIRouter()


class CurrentUserResponse(BaseModel):
    """Response body for GET /auth/me."""

    user: Account


@router.post(
    "/signup-init",
    response_model=SignupInitResult,
    response_model_exclude_none=True,
)
async def signup_init(
    request: SignupInitRequest,
    otp: IOtpService = Depends(get_otp_service),
) -> SignupInitResult:
    """
    Start signup by sending a verification code to the email.

    Returns 400 if the email already has an account.
    """
    return await otp.initiate(request.email, request.first_name)


@router.post("/signup-verify", response_model=AuthResult)
async def signup_verify(
    request: SignupVerifyRequest,
    otp: IOtpService = Depends(get_otp_service),
) -> AuthResult:
    """
    Finish signup with the emailed code.

    Creates the account and returns a session token for it. A code works
    once; a wrong or expired code is a 400.
    """
    return await otp.verify(request)


@router.post("/login", response_model=AuthResult)
async def login(
    request: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    return await auth.login(request.email, request.password)


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> CurrentUserResponse:
    """
    Get the current account with purchases and progress.

    Requires authentication.
    """
    return CurrentUserResponse(user=await auth.get_account(user))
