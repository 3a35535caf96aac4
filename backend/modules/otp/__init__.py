"""
Signup verification module.

Gates account creation behind a short-lived numeric code sent by email.

Public API:
- IOtpService: Interface for signup initiation and verification
- OtpService: Implementation
- OtpRepository: Supabase-backed code store (one row per email, TTL on read)
- BrevoMailer / ConsoleMailer: code delivery
"""

from .interfaces import IOtpService, IOtpRepository, IMailer
from .models import OtpRecord, SignupInitRequest, SignupInitResult, SignupVerifyRequest
from .exceptions import CodeInvalidOrExpiredError, EmailDeliveryError

__all__ = [
    "IOtpService",
    "IOtpRepository",
    "IMailer",
    "OtpRecord",
    "SignupInitRequest",
    "SignupInitResult",
    "SignupVerifyRequest",
    "CodeInvalidOrExpiredError",
    "EmailDeliveryError",
]
