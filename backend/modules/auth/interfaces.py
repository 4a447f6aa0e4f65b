"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
IUserRepository is the narrow contract the auth module needs from the data
store; tests substitute an in-memory implementation.
"""

from datetime import datetime
from typing import Any, Protocol, Optional, runtime_checkable

from starlette.requests import Request

from shared.models import AuthenticatedUser

from .models import (
    SignInResult,
    UserPage,
    UserRecord,
    UserSummary,
    VerificationOutcome,
    VerificationResult,
    VerificationTicket,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Credential store for the users table.

    Every method raises StoreUnavailableError when the store cannot answer;
    a missing record is None, never an exception.
    """

    def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def get_user_by_verification_token(self, token: str) -> Optional[UserRecord]:
        ...

    def create_user(self, fields: dict[str, Any]) -> UserRecord:
        """
        Insert a user.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
        """
        ...

    def update_user(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        """Update a user; returns the updated record or None if no such id."""
        ...

    def consume_verification_token(self, token: str, now: datetime) -> Optional[UserRecord]:
        """
        Atomically mark the matching user verified and clear the token.

        Only matches an unverified user whose token expires strictly after
        `now`. Returns the updated record, or None if nothing matched.
        """
        ...

    def list_users(
        self, offset: int, limit: int, search: Optional[str] = None
    ) -> tuple[list[UserSummary], int]:
        """Return one page of users, newest first, and the total match count."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and to other modules.
    """

    async def current_user(self, request: Request) -> Optional[AuthenticatedUser]:
        """
        Resolve the caller of a request from its session cookie.

        Returns:
            The user, or None if there is no valid session or the user
            is gone or banned
        """
        ...

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Check credentials and mint a session token.

        Raises:
            ValidationError: If the email or password is malformed
            InvalidCredentialsError: Unknown email or wrong password
            AccountBannedError: The account is banned
            EmailNotVerifiedError: The email address is not verified yet
        """
        ...

    def start_session(self, response: Any, result: SignInResult) -> None:
        """Attach the session cookie for a successful sign-in."""
        ...

    def sign_out(self, response: Any) -> None:
        """Clear the session cookie. Never fails."""
        ...

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> AuthenticatedUser:
        ...

    async def verify_email(self, token: str) -> VerificationOutcome:
        ...

    async def resend_verification(self, email: str) -> None:
        ...

    async def set_banned(self, user_id: str, banned: bool) -> AuthenticatedUser:
        ...

    async def set_admin(self, user_id: str, is_admin: bool) -> AuthenticatedUser:
        ...

    async def list_users(
        self, page: int = 1, limit: int = 50, search: Optional[str] = None
    ) -> UserPage:
        ...


@runtime_checkable
class IVerificationService(Protocol):
    """The email verification state machine."""

    async def issue(self, user: UserRecord) -> VerificationTicket:
        ...

    async def consume(self, token: str) -> VerificationResult:
        ...
