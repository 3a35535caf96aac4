"""
Ledger service.

Records lesson completion and purchases for an account, and confirms
payments before granting access.
"""

import logging

from .exceptions import PaymentVerificationError
from .interfaces import ILedgerRepository, ILedgerService, IPaymentGateway
from .models import Entitlements, ItemType, PaymentOrder, VerifyPaymentRequest

logger = logging.getLogger(__name__)


class LedgerService(ILedgerService):
    def __init__(self, repository: ILedgerRepository, gateway: IPaymentGateway):
        self._repository = repository
        self._gateway = gateway

    async def mark_complete(self, account_id: str, course_id: str, video_id: str) -> None:
        self._repository.add_progress(account_id, course_id, video_id)
        logger.debug("Recorded completion of %s/%s for %s", course_id, video_id, account_id)

    async def get_progress(self, account_id: str) -> dict[str, list[str]]:
        return self._repository.get_progress(account_id)

    async def grant(self, account_id: str, item_type: ItemType, item_id: str) -> None:
        item_type = ItemType(item_type)
        self._repository.add_entitlement(account_id, item_type, item_id)
        logger.info("Granted %s %s to %s", item_type.value, item_id, account_id)

    async def get_entitlements(self, account_id: str) -> Entitlements:
        return self._repository.get_entitlements(account_id)

    async def create_order(self, amount: float, item_id: str) -> PaymentOrder:
        return await self._gateway.create_order(amount, item_id)

    async def verify_payment(self, account_id: str, request: VerifyPaymentRequest) -> None:
        valid = self._gateway.verify_signature(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature,
        )
        if not valid:
            logger.warning(
                "Payment signature mismatch for order %s", request.razorpay_order_id
            )
            raise PaymentVerificationError(request.razorpay_order_id)
        await self.grant(account_id, request.item_type, request.item_id)
