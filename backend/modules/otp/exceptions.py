"""
Signup code module exceptions.
"""

from shared.exceptions import BusinessRuleError, ExternalServiceError


class CodeInvalidOrExpiredError(BusinessRuleError):
    """
    Raised when no unexpired code matches the email.

    Wrong and expired codes share one message.
    """

    def __init__(self):
        super().__init__("Invalid or expired OTP", code="OTP_INVALID_OR_EXPIRED")


class EmailDeliveryError(ExternalServiceError):
    """Raised when the email provider rejects or fails a send."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            f"Email delivery failed: {message}",
            service="brevo",
            code="EMAIL_DELIVERY_FAILED",
            details={"status_code": status_code},
        )
