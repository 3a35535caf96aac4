"""
Ledger module.

Per-account lesson progress, purchases, and payment confirmation.
"""

from .interfaces import ILedgerService, ILedgerRepository, IPaymentGateway
from .models import Entitlements, ItemType, PaymentOrder
from .exceptions import PaymentVerificationError, PaymentGatewayError, PaymentsNotConfiguredError

__all__ = [
    "ILedgerService",
    "ILedgerRepository",
    "IPaymentGateway",
    "Entitlements",
    "ItemType",
    "PaymentOrder",
    "PaymentVerificationError",
    "PaymentGatewayError",
    "PaymentsNotConfiguredError",
]
