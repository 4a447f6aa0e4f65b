"""
Email service implementation.

Posts messages as JSON to an HTTP mail API. When no API URL is configured
(local development, tests) messages are logged instead of sent.
"""

import html
import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from shared.config import Settings, get_settings

from .exceptions import EmailDeliveryError
from .interfaces import IEmailService

logger = logging.getLogger(__name__)

PRODUCTION_APP_URL = "https://seoinforce.com"


def public_app_url(app_url: str) -> str:
    """Base URL for links in emails. Never localhost: mail is read elsewhere."""
    if not app_url or "localhost" in app_url or "127.0.0.1" in app_url:
        return PRODUCTION_APP_URL
    return app_url.rstrip("/")


def render_verification_email(name: str, verify_url: str) -> str:
    name = html.escape(name)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #fbbf24; background: #1f2937; padding: 20px; margin: 0; text-align: center;">
    Verify Your Email Address
  </h2>
  <div style="background: #f9fafb; padding: 30px;">
    <p>Hi {name},</p>
    <p>Thank you for creating an account with SEOInForce! Please verify your
    email address by clicking the button below:</p>
    <p style="text-align: center; margin: 30px 0;">
      <a href="{verify_url}" style="background: #fbbf24; color: #1f2937; padding: 14px 28px;
         text-decoration: none; border-radius: 6px; font-weight: bold;">Verify Email Address</a>
    </p>
    <p style="color: #6b7280; font-size: 14px;">This link will expire in 24 hours.
    If you didn't create an account, please ignore this email.</p>
  </div>
</div>
"""


def render_welcome_email(name: str, dashboard_url: str) -> str:
    name = html.escape(name)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #fbbf24; background: #1f2937; padding: 20px; margin: 0; text-align: center;">
    Welcome to SEOInForce
  </h2>
  <div style="background: #f9fafb; padding: 30px;">
    <p>Hi {name},</p>
    <p>Your email address is verified and your account is ready.</p>
    <p><a href="{dashboard_url}">Open your dashboard</a></p>
    <p>Best regards,<br><strong>SEOInForce Team</strong></p>
  </div>
</div>
"""


class EmailService(IEmailService):
    """
    HTTP mail API client.

    A new AsyncClient is opened per message; volume is a handful of
    messages per sign-up, so pooling buys nothing here.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        return bool(self._settings.email_api_url)

    async def send_verification_email(
        self, to: str, token: str, name: Optional[str] = None
    ) -> None:
        base_url = public_app_url(self._settings.app_url)
        verify_url = f"{base_url}/verify-email?{urlencode({'token': token})}"
        await self._send(
            to,
            "Verify Your SEOInForce Account",
            render_verification_email(name or to.split("@")[0], verify_url),
        )

    async def send_welcome_email(self, to: str, name: str) -> None:
        base_url = public_app_url(self._settings.app_url)
        await self._send(
            to,
            "Welcome to SEOInForce",
            render_welcome_email(name, f"{base_url}/audit/dashboard"),
        )

    async def _send(self, to: str, subject: str, body: str) -> None:
        if not self.is_configured:
            logger.info(f"Email API not configured; would send '{subject}' to {to}")
            return

        payload = {
            "from": self._settings.email_from,
            "to": [to],
            "subject": subject,
            "html": body,
        }
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self._settings.email_api_url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._settings.email_api_key}",
                        "Content-Type": "application/json",
                    },
                    timeout=self._settings.email_timeout_seconds,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                to, f"mail API returned {e.response.status_code}", e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(to, str(e) or e.__class__.__name__) from e

        logger.info(f"Sent '{subject}' to {to}")
