"""
Notifications module interface.

The auth module sends mail through IEmailService only, so the transport
can be swapped (or faked in tests) without touching auth code.
"""

from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class IEmailService(Protocol):
    """Outbound transactional email."""

    async def send_verification_email(
        self, to: str, token: str, name: Optional[str] = None
    ) -> None:
        """
        Send the email verification link.

        Raises:
            EmailDeliveryError: If the message could not be handed off
        """
        ...

    async def send_welcome_email(self, to: str, name: str) -> None:
        """
        Send the welcome email after an address is verified.

        Raises:
            EmailDeliveryError: If the message could not be handed off
        """
        ...
