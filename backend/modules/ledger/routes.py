"""
Progress and payment API endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import get_ledger_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import ILedgerService
from .models import CreateOrderRequest, PaymentStatus, ProgressRequest, VerifyPaymentRequest

router = APIRouter()


@router.post("/courses/progress")
async def mark_progress(
    request: ProgressRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILedgerService = Depends(get_ledger_service),
) -> dict[str, str]:
    """Record a completed lesson. Repeating the call is harmless."""
    await service.mark_complete(user.id, request.course_id, request.video_id)
    return {"status": "ok"}


@router.post("/payment/create-order")
async def create_order(
    request: CreateOrderRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILedgerService = Depends(get_ledger_service),
) -> dict[str, Any]:
    """Create a gateway order. The gateway's order body is returned as is."""
    order = await service.create_order(request.amount, request.item_id)
    return order.raw or order.model_dump()


@router.post("/payment/verify", response_model=PaymentStatus)
async def verify_payment(
    request: VerifyPaymentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILedgerService = Depends(get_ledger_service),
) -> PaymentStatus:
    await service.verify_payment(user.id, request)
    return PaymentStatus(status="success")
