"""
Notifications module.

Sends the transactional emails of the account lifecycle (verification
link, welcome message) through an HTTP mail API.

Public API:
- IEmailService: Interface for sending emails
- EmailDeliveryError: Raised when a message cannot be handed off
"""

from .interfaces import IEmailService
from .exceptions import EmailDeliveryError

__all__ = [
    # Interface
    "IEmailService",
    # Exceptions
    "EmailDeliveryError",
]
