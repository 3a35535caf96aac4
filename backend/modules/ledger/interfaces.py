"""
Ledger module interfaces.
"""

from typing import Protocol, runtime_checkable

from .models import Entitlements, ItemType, PaymentOrder, VerifyPaymentRequest


@runtime_checkable
class ILedgerRepository(Protocol):
    def add_progress(self, account_id: str, course_id: str, video_id: str) -> None: ...

    def get_progress(self, account_id: str) -> dict[str, list[str]]: ...

    def add_entitlement(self, account_id: str, item_type: ItemType, item_id: str) -> None: ...

    def get_entitlements(self, account_id: str) -> Entitlements: ...


@runtime_checkable
class IPaymentGateway(Protocol):
    async def create_order(self, amount: float, item_id: str) -> PaymentOrder: ...

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool: ...

    async def close(self) -> None: ...


@runtime_checkable
class ILedgerService(Protocol):
    """
    Interface for progress and purchase records.

    Every write is idempotent: recording the same completion or purchase
    again leaves the ledger unchanged.
    """

    async def mark_complete(self, account_id: str, course_id: str, video_id: str) -> None: ...

    async def get_progress(self, account_id: str) -> dict[str, list[str]]: ...

    async def grant(self, account_id: str, item_type: ItemType, item_id: str) -> None: ...

    async def get_entitlements(self, account_id: str) -> Entitlements: ...

    async def create_order(self, amount: float, item_id: str) -> PaymentOrder: ...

    async def verify_payment(self, account_id: str, request: VerifyPaymentRequest) -> None:
        """
        Raises:
            PaymentVerificationError: If the signature does not match
        """
        ...
