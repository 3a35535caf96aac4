import base64
import json

import httpx
import pytest

from modules.ledger.exceptions import PaymentGatewayError, PaymentsNotConfiguredError
from modules.ledger.payments import (
    RazorpayGateway,
    compute_signature,
    make_receipt,
    to_minor_units,
)


def make_gateway(handler, key_id="rzp_test", key_secret="shh") -> RazorpayGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RazorpayGateway(key_id, key_secret, api_url="https://gw.test/v1/", client=client)


class TestHelpers:

    def test_receipt_format(self):
        assert make_receipt("c1", now_ms=1700000000000) == "receipt_c1_1700000000000"

    def test_minor_units_rounds(self):
        assert to_minor_units(499) == 49900
        assert to_minor_units(19.99) == 1999

    def test_signature_is_hmac_sha256_hex(self):
        signature = compute_signature("secret", "order_1", "pay_1")
        assert len(signature) == 64
        assert signature == compute_signature("secret", "order_1", "pay_1")
        assert signature != compute_signature("secret", "order_1", "pay_2")


class TestCreateOrder:

    @pytest.mark.asyncio
    async def test_posts_amount_in_paise(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(
                200,
                json={
                    "id": "order_1",
                    "amount": seen["body"]["amount"],
                    "currency": "INR",
                    "receipt": seen["body"]["receipt"],
                    "status": "created",
                },
            )

        gateway = make_gateway(handler)
        order = await gateway.create_order(499, "c1")
        await gateway.close()

        assert seen["url"] == "https://gw.test/v1/orders"
        assert seen["body"]["amount"] == 49900
        assert seen["body"]["currency"] == "INR"
        assert seen["body"]["receipt"].startswith("receipt_c1_")
        expected_auth = base64.b64encode(b"rzp_test:shh").decode()
        assert seen["auth"] == f"Basic {expected_auth}"
        assert order.id == "order_1"
        assert order.raw["status"] == "created"

    @pytest.mark.asyncio
    async def test_gateway_error_status(self):
        gateway = make_gateway(lambda request: httpx.Response(401, text="bad key"))
        with pytest.raises(PaymentGatewayError):
            await gateway.create_order(100, "c1")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        gateway = make_gateway(handler)
        with pytest.raises(PaymentGatewayError):
            await gateway.create_order(100, "c1")

    @pytest.mark.asyncio
    async def test_not_configured(self):
        gateway = RazorpayGateway("", "")
        assert gateway.configured is False
        with pytest.raises(PaymentsNotConfiguredError):
            await gateway.create_order(100, "c1")


class TestVerifySignature:

    def test_accepts_matching_signature(self):
        gateway = RazorpayGateway("rzp_test", "shh")
        signature = compute_signature("shh", "order_1", "pay_1")
        assert gateway.verify_signature("order_1", "pay_1", signature) is True

    def test_rejects_other_signature(self):
        gateway = RazorpayGateway("rzp_test", "shh")
        signature = compute_signature("other", "order_1", "pay_1")
        assert gateway.verify_signature("order_1", "pay_1", signature) is False
        assert gateway.verify_signature("order_1", "pay_1", "") is False

    def test_non_ascii_signature_is_a_mismatch(self):
        gateway = RazorpayGateway("rzp_test", "shh")
        assert gateway.verify_signature("order_1", "pay_1", "\u00e9abc") is False

    def test_requires_secret(self):
        with pytest.raises(PaymentsNotConfiguredError):
            RazorpayGateway("rzp_test", "").verify_signature("o", "p", "s")
