"""
Authentication service implementation.

Composes the password hasher, token issuer, cookie manager, user repository
and verification state machine into sign-in, sign-out, sign-up and "who is
calling" operations.

The email-verified requirement for sign-in is enforced here, not in the
verification state machine, so each can be tested on its own.
"""

import logging
import math
from typing import Any, Awaitable, Optional

from starlette.requests import Request

from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser
from modules.notifications.exceptions import EmailDeliveryError
from modules.notifications.interfaces import IEmailService

from .cookies import SessionCookieManager
from .exceptions import (
    AccountBannedError,
    EmailAlreadyRegisteredError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from .interfaces import IAuthService, IUserRepository
from .models import SignInResult, UserPage, VerificationOutcome
from .passwords import PasswordHasher
from .tokens import TokenIssuer, utcnow
from .verification import VerificationService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> str:
    """
    Trim and lowercase an email address.

    Raises:
        ValidationError: If the result does not look like an address
    """
    normalized = (email or "").strip().lower()
    if "@" not in normalized:
        raise ValidationError("Please enter a valid email address", code="invalid_email")
    return normalized


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Sessions are stateless: nothing is written on sign-in or sign-out,
    and every request re-reads the user so bans apply at once.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
        cookies: SessionCookieManager,
        verification: VerificationService,
        email: IEmailService,
    ):
        self._users = users
        self._hasher = hasher
        self._issuer = issuer
        self.cookies = cookies
        self._verification = verification
        self._email = email

    async def current_user(self, request: Request) -> Optional[AuthenticatedUser]:
        return await self.resolve_session(self.cookies.extract(request))

    async def resolve_session(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """
        Turn a session token into a user, failing closed.

        StoreUnavailableError still propagates: an unreachable store is
        reported as such rather than as "signed out".
        """
        claims = self._issuer.validate(token)
        if claims is None:
            return None

        user = self._users.get_user_by_id(claims.user_id)
        if user is None:
            logger.info(f"Session for missing user {claims.user_id} rejected")
            return None
        if user.is_banned:
            logger.info(f"Session for banned user {user.id} rejected")
            return None
        return user.to_authenticated()

    async def sign_in(self, email: str, password: str) -> SignInResult:
        email = normalize_email(email)
        if not password:
            raise ValidationError("Password is required", code="invalid_password")

        user = self._users.get_user_by_email(email)
        if user is None:
            self._hasher.dummy_verify()
            logger.info(f"Sign-in failed for unknown email {email}")
            raise InvalidCredentialsError()

        if user.is_banned:
            logger.info(f"Sign-in refused for banned user {user.id}")
            raise AccountBannedError()

        if not user.email_verified:
            logger.info(f"Sign-in refused for unverified user {user.id}")
            raise EmailNotVerifiedError()

        verified, replacement = self._hasher.verify_and_update(password, user.password_hash)
        if not verified:
            logger.info(f"Sign-in failed for user {user.id}: wrong password")
            raise InvalidCredentialsError()

        if replacement:
            self._users.update_user(user.id, {"password_hash": replacement})
            logger.info(f"Upgraded password hash for user {user.id}")

        issued_at = utcnow()
        token = self._issuer.mint(user.id, issued_at)
        logger.info(f"User {user.id} signed in")
        return SignInResult(
            user=user.to_authenticated(),
            token=token,
            expires_at=issued_at + self._issuer.session_ttl,
        )

    def start_session(self, response: Any, result: SignInResult) -> None:
        self.cookies.attach(response, result.token)

    def sign_out(self, response: Any) -> None:
        self.cookies.clear(response)

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> AuthenticatedUser:
        """
        Create an unverified account and send its verification email.

        Raises:
            ValidationError: Malformed email or password too short
            EmailAlreadyRegisteredError: The email already has an account
        """
        email = normalize_email(email)
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                code="invalid_password",
            )

        if self._users.get_user_by_email(email) is not None:
            raise EmailAlreadyRegisteredError()

        full_name = (full_name or "").strip() or email.split("@")[0]
        ticket = self._issuer.mint_verification_token()
        # The unique constraint on email still backs up the pre-check above.
        user = self._users.create_user(
            {
                "email": email,
                "password_hash": self._hasher.hash(password),
                "full_name": full_name,
                "verification_token": ticket.token,
                "verification_token_expires": ticket.expires_at.isoformat(),
            }
        )
        logger.info(f"Created user {user.id}")

        await self._notify(self._email.send_verification_email(email, ticket.token, full_name))
        return user.to_authenticated()

    async def verify_email(self, token: str) -> VerificationOutcome:
        """
        Consume a verification token, welcoming the user on first success.

        Raises:
            InvalidTokenError: No user holds the token
            TokenExpiredError: The token is past its expiry
        """
        result = await self._verification.consume(token)
        if result.outcome is VerificationOutcome.VERIFIED:
            user = result.user
            await self._notify(
                self._email.send_welcome_email(
                    user.email, user.full_name or user.email.split("@")[0]
                )
            )
        return result.outcome

    async def resend_verification(self, email: str) -> None:
        """
        Issue and send a fresh verification token.

        Unknown and already verified addresses are accepted silently so
        the endpoint cannot be used to discover accounts.
        """
        email = normalize_email(email)
        user = self._users.get_user_by_email(email)
        if user is None or user.email_verified:
            return

        ticket = await self._verification.issue(user)
        await self._notify(
            self._email.send_verification_email(user.email, ticket.token, user.full_name)
        )

    async def set_banned(self, user_id: str, banned: bool) -> AuthenticatedUser:
        user = self._users.update_user(user_id, {"is_banned": banned})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"User {user_id} {'banned' if banned else 'unbanned'}")
        return user.to_authenticated()

    async def set_admin(self, user_id: str, is_admin: bool) -> AuthenticatedUser:
        user = self._users.update_user(user_id, {"is_admin": is_admin})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"User {user_id} admin rights {'granted' if is_admin else 'revoked'}")
        return user.to_authenticated()

    async def list_users(
        self, page: int = 1, limit: int = 50, search: Optional[str] = None
    ) -> UserPage:
        """
        One page of the user list for the admin console.

        Pages are 1-based; the caller bounds page and limit.
        """
        users, total = self._users.list_users((page - 1) * limit, limit, search)
        return UserPage(
            users=users,
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )

    async def _notify(self, send: Awaitable[None]) -> None:
        """Await an email send, logging instead of raising on failure."""
        try:
            await send
        except EmailDeliveryError as e:
            logger.warning(f"Email to {e.recipient} not sent: {e.message}")
