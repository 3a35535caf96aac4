"""
Signup code service.

Generates single-use numeric codes, stores them with a TTL, sends them by
email, and creates the account when a matching code is presented.
"""

import logging
import secrets
from typing import Optional

from shared.config import Settings, get_settings
from modules.auth.exceptions import AccountExistsError
from modules.auth.interfaces import IAuthService
from modules.auth.models import AuthResult, SignupDetails

from .exceptions import CodeInvalidOrExpiredError, EmailDeliveryError
from .interfaces import IMailer, IOtpRepository, IOtpService
from .models import SignupInitResult, SignupVerifyRequest

logger = logging.getLogger(__name__)

MESSAGE_SENT = "OTP sent successfully"
MESSAGE_NOT_SENT = "OTP generated (check server console for the code)"


def generate_code(length: int = 4) -> str:
    """Return a random numeric code of exactly ``length`` digits."""
    if length < 1:
        raise ValueError("Code length must be positive")
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


class OtpService(IOtpService):
    """
    Signup verification state machine.

    Expiry lives entirely in the repository: a record that has outlived the
    TTL is simply not found. Single use is enforced by deleting the record
    after the account is created.
    """

    def __init__(
        self,
        repository: IOtpRepository,
        auth: IAuthService,
        mailer: IMailer,
        settings: Optional[Settings] = None,
    ):
        self._repository = repository
        self._auth = auth
        self._mailer = mailer
        self._settings = settings or get_settings()

    async def initiate(self, email: str, first_name: str) -> SignupInitResult:
        email = email.lower()
        if await self._auth.email_registered(email):
            raise AccountExistsError(email)

        code = generate_code(self._settings.otp_length)
        self._repository.replace(email, code)
        logger.debug("Signup code issued for %s", email)

        delivered = False
        try:
            delivered = await self._mailer.send_code(
                email, first_name, code, self._settings.otp_ttl_seconds
            )
        except EmailDeliveryError as e:
            logger.error("Signup email to %s failed: %s", email, e.message)
            logger.warning("Signup code for %s is %s", email, code)

        if delivered:
            return SignupInitResult(message=MESSAGE_SENT, delivered=True)

        return SignupInitResult(
            message=MESSAGE_NOT_SENT,
            delivered=False,
            dev_otp=code if self._settings.dev_otp_enabled else None,
        )

    async def verify(self, request: SignupVerifyRequest) -> AuthResult:
        email = request.email.lower()
        if self._repository.find_active(email, request.otp) is None:
            raise CodeInvalidOrExpiredError()

        details = SignupDetails(
            email=email,
            first_name=request.first_name,
            last_name=request.last_name,
            branch=request.branch,
            year=request.year,
            college=request.college,
        )
        result = await self._auth.create_account(details, request.password)
        self._repository.delete_for_email(email)
        return result
