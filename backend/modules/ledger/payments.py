"""
Razorpay client for order creation and checkout signature checks.
"""

import hashlib
import hmac
import logging
import time
from typing import Optional

import httpx

from .exceptions import PaymentGatewayError, PaymentsNotConfiguredError
from .models import PaymentOrder

logger = logging.getLogger(__name__)


def make_receipt(item_id: str, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"receipt_{item_id}_{now_ms}"


def to_minor_units(amount: float) -> int:
    """Convert rupees to paise."""
    return int(round(amount * 100))


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class RazorpayGateway:
    """Creates orders over the REST API and verifies checkout signatures."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        api_url: str = "https://api.razorpay.com/v1",
        currency: str = "INR",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._key_id = key_id
        self._key_secret = key_secret
        self._api_url = api_url.rstrip("/")
        self._currency = currency
        self._timeout = timeout
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._key_id and self._key_secret)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def create_order(self, amount: float, item_id: str) -> PaymentOrder:
        """
        Create a gateway order for an item.

        Raises:
            PaymentsNotConfiguredError: If credentials are missing
            PaymentGatewayError: On a transport failure or non-2xx response
        """
        if not self.configured:
            raise PaymentsNotConfiguredError()

        payload = {
            "amount": to_minor_units(amount),
            "currency": self._currency,
            "receipt": make_receipt(item_id),
        }
        try:
            response = await self._get_client().post(
                f"{self._api_url}/orders",
                json=payload,
                auth=(self._key_id, self._key_secret),
            )
        except httpx.HTTPError as e:
            raise PaymentGatewayError(str(e))

        if response.status_code >= 400:
            raise PaymentGatewayError(response.text, status_code=response.status_code)

        data = response.json()
        logger.info("Created payment order %s for %s", data.get("id"), item_id)
        return PaymentOrder(
            id=data["id"],
            amount=data.get("amount", payload["amount"]),
            currency=data.get("currency", self._currency),
            receipt=data.get("receipt", payload["receipt"]),
            status=data.get("status", "created"),
            raw=data,
        )

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """Constant-time check of the checkout signature."""
        if not self._key_secret:
            raise PaymentsNotConfiguredError()
        expected = compute_signature(self._key_secret, order_id, payment_id)
        return hmac.compare_digest(expected.encode("utf-8"), (signature or "").encode("utf-8"))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
