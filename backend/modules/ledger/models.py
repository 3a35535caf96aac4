"""
Ledger module domain models.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from shared.models import CamelModel


class ItemType(str, Enum):
    """Kinds of purchasable catalog items."""

    COURSE = "course"
    NOTE = "note"


class Entitlements(CamelModel):
    """Items an account has purchased."""

    course_ids: list[str] = Field(default_factory=list)
    note_ids: list[str] = Field(default_factory=list)


class ProgressRequest(CamelModel):
    course_id: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)


class CreateOrderRequest(CamelModel):
    """Amount is in whole currency units; the gateway is sent the minor unit."""

    amount: float = Field(..., gt=0)
    item_id: str = Field(..., min_length=1)


class PaymentOrder(CamelModel):
    """Order as returned by the gateway."""

    id: str
    amount: int
    currency: str
    receipt: str
    status: str = "created"
    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)


class VerifyPaymentRequest(CamelModel):
    """
    Checkout confirmation posted by the client.

    The gateway fields keep the names the checkout widget hands back.
    """

    razorpay_order_id: str = Field(..., alias="razorpay_order_id")
    razorpay_payment_id: str = Field(..., alias="razorpay_payment_id")
    razorpay_signature: str = Field(..., alias="razorpay_signature")
    item_id: str = Field(..., min_length=1)
    item_type: ItemType = Field(..., alias="type")


class PaymentStatus(CamelModel):
    status: str
