"""
Authentication module.

Handles password sign-in, signed session cookies, email verification and
account moderation.

Public API:
- IAuthService: Interface for auth operations
- IUserRepository: Credential store contract
- UserRecord, SessionClaims, SignInResult, VerificationOutcome: Models
- Auth exceptions: InvalidCredentialsError, AccountBannedError, etc.
"""

from .interfaces import IAuthService, IUserRepository, IVerificationService
from .models import (
    UserRecord,
    SessionClaims,
    SignInResult,
    VerificationOutcome,
    VerificationResult,
    VerificationTicket,
)
from .exceptions import (
    InvalidCredentialsError,
    AccountBannedError,
    EmailNotVerifiedError,
    InvalidSessionError,
    SessionExpiredError,
    InvalidTokenError,
    TokenExpiredError,
    AlreadyVerifiedError,
    EmailAlreadyRegisteredError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    "IVerificationService",
    # Models
    "UserRecord",
    "SessionClaims",
    "SignInResult",
    "VerificationOutcome",
    "VerificationResult",
    "VerificationTicket",
    # Exceptions
    "InvalidCredentialsError",
    "AccountBannedError",
    "EmailNotVerifiedError",
    "InvalidSessionError",
    "SessionExpiredError",
    "InvalidTokenError",
    "TokenExpiredError",
    "AlreadyVerifiedError",
    "EmailAlreadyRegisteredError",
    "UserNotFoundError",
]
