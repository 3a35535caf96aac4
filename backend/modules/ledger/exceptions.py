"""
Ledger module exceptions.
"""

from shared.exceptions import ExternalServiceError, ValidationError


class PaymentVerificationError(ValidationError):
    """Raised when a gateway signature does not match the order and payment."""

    def __init__(self, order_id: str):
        super().__init__(
            "Payment verification failed",
            code="PAYMENT_VERIFICATION_FAILED",
            details={"order_id": order_id},
        )


class PaymentGatewayError(ExternalServiceError):
    """Raised when the payment gateway rejects or fails an order request."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(
            f"Payment gateway error: {message}",
            service="razorpay",
            code="PAYMENT_GATEWAY_ERROR",
            details={"status_code": status_code} if status_code else None,
        )


class PaymentsNotConfiguredError(ExternalServiceError):
    """Raised when payment credentials are missing."""

    def __init__(self):
        super().__init__(
            "Payments are not configured",
            service="razorpay",
            code="PAYMENTS_NOT_CONFIGURED",
        )
