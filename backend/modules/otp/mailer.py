"""
Delivery of signup codes by email.

BrevoMailer sends through Brevo's transactional email API. ConsoleMailer is
used when no API key is configured: it writes the code to the server log so
a developer can complete signup locally.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from .exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


VERIFICATION_SUBJECT = "Verify your email for {brand}"

VERIFICATION_TEMPLATE = """\
<!DOCTYPE html>
<html>
<body style="font-family: Helvetica, Arial, sans-serif; background-color: #f9fafb; margin: 0; padding: 0;">
  <div style="max-width: 600px; margin: 40px auto; background-color: #ffffff; border-radius: 12px;">
    <div style="background-color: #f0f9ff; padding: 30px; text-align: center;">
      <h1 style="color: #0284c7; font-size: 24px; margin: 0;">{brand}</h1>
    </div>
    <div style="padding: 40px 30px; color: #334155; text-align: center;">
      <p style="font-size: 20px; font-weight: 600;">Hello, {name}!</p>
      <p>Use the verification code below to complete your registration.</p>
      <p style="font-size: 32px; font-family: monospace; letter-spacing: 4px; font-weight: bold;">{code}</p>
      <p style="font-size: 14px; color: #64748b;">This code is valid for {minutes} minutes.</p>
      <p style="font-size: 14px; color: #64748b;">If you did not request this, please ignore this email.</p>
    </div>
    <div style="padding: 20px; text-align: center; font-size: 12px; color: #94a3b8;">
      &copy; {year} {brand}. All rights reserved.
    </div>
  </div>
</body>
</html>
"""


def render_verification_email(brand: str, name: str, code: str, ttl_seconds: int) -> str:
    """Render the HTML body of the verification email."""
    return VERIFICATION_TEMPLATE.format(
        brand=brand,
        name=name,
        code=code,
        minutes=max(1, ttl_seconds // 60),
        year=datetime.now(timezone.utc).year,
    )


class BrevoMailer:
    """Sends verification codes through the Brevo transactional email API."""

    def __init__(
        self,
        api_key: str,
        sender_email: str,
        sender_name: str,
        api_url: str = "https://api.brevo.com/v3/smtp/email",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._sender_email = sender_email
        self._sender_name = sender_name
        self._api_url = api_url
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send_code(self, email: str, name: str, code: str, ttl_seconds: int) -> bool:
        """
        Send a verification code.

        Returns:
            True once the provider has accepted the message

        Raises:
            EmailDeliveryError: On a transport failure or non-2xx response
        """
        payload = {
            "sender": {"name": self._sender_name, "email": self._sender_email},
            "to": [{"email": email, "name": name}],
            "subject": VERIFICATION_SUBJECT.format(brand=self._sender_name),
            "htmlContent": render_verification_email(
                self._sender_name, name, code, ttl_seconds
            ),
        }
        headers = {
            "api-key": self._api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

        try:
            response = await self._get_client().post(
                self._api_url, json=payload, headers=headers
            )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(str(e))

        if response.status_code >= 400:
            raise EmailDeliveryError(response.text, status_code=response.status_code)

        logger.info("Verification email accepted for %s", email)
        return True

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


class ConsoleMailer:
    """Fallback used when email is not configured. Never delivers."""

    async def send_code(self, email: str, name: str, code: str, ttl_seconds: int) -> bool:
        logger.warning(
            "Email not configured; signup code for %s is %s (valid %ss)",
            email,
            code,
            ttl_seconds,
        )
        return False

    async def close(self) -> None:
        return None
