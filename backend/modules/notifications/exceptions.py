"""
Notifications module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """
    Raised when the mail API rejects or fails to accept a message.

    Callers in the auth module catch and log this; a failed email never
    turns a completed sign-up or verification into an error response.
    """

    def __init__(self, recipient: str, reason: str, status_code: Optional[int] = None):
        super().__init__(
            f"Failed to send email: {reason}",
            service="email",
            code="email_delivery_failed",
            details={"status_code": status_code} if status_code else {},
        )
        self.recipient = recipient
