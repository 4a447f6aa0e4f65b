"""
Session and verification token issuance.

Session tokens are HS256 JWTs that carry everything needed to check them
(subject, issue time, expiry, token type, key epoch), so validating one
needs no database round trip. There is no revocation list: a session stays
valid until its exp claim passes, or until the key epoch is bumped.

Verification tokens are unrelated random hex strings. A hex string never
parses as a JWT, so the two kinds cannot be swapped for one another.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from .exceptions import InvalidSessionError, SessionExpiredError
from .models import SessionClaims, VerificationTicket

SESSION_TOKEN_TYPE = "session"
VERIFICATION_TOKEN_BYTES = 32


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """
    Mints and checks session tokens and mints verification tokens.

    All parameters come from settings at start-up and never change for the
    life of the process.
    """

    def __init__(
        self,
        secret: str,
        session_ttl: timedelta,
        verification_ttl: timedelta,
        clock_skew: timedelta = timedelta(seconds=60),
        key_epoch: int = 0,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("A session signing secret is required (set JWT_SECRET)")
        self._secret = secret
        self._session_ttl = session_ttl
        self._verification_ttl = verification_ttl
        self._clock_skew = clock_skew
        self._key_epoch = key_epoch
        self._algorithm = algorithm

    @property
    def session_ttl(self) -> timedelta:
        return self._session_ttl

    def mint(
        self,
        user_id: str,
        issued_at: Optional[datetime] = None,
        ttl: Optional[timedelta] = None,
    ) -> str:
        """
        Mint a signed session token for a user.

        Args:
            user_id: Subject of the token
            issued_at: Issue time, defaults to now
            ttl: Lifetime, defaults to the configured session TTL

        Returns:
            Encoded JWT
        """
        issued_at = issued_at or utcnow()
        expires_at = issued_at + (ttl if ttl is not None else self._session_ttl)
        payload = {
            "sub": user_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "typ": SESSION_TOKEN_TYPE,
            "kep": self._key_epoch,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> SessionClaims:
        """
        Check a session token and return its claims.

        Raises:
            SessionExpiredError: If the exp claim has passed
            InvalidSessionError: For anything else that is wrong with it
        """
        if not token:
            raise InvalidSessionError("Missing session token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    # iat is checked below against the skew tolerance
                    "verify_iat": False,
                },
            )
        except jwt.ExpiredSignatureError:
            raise SessionExpiredError()
        except jwt.InvalidTokenError as e:
            raise InvalidSessionError(f"Invalid session token: {e}")

        if payload.get("typ") != SESSION_TOKEN_TYPE:
            raise InvalidSessionError("Not a session token")
        if payload.get("kep") != self._key_epoch:
            raise InvalidSessionError("Session was signed with a retired key")

        user_id = payload["sub"]
        if not isinstance(user_id, str) or not user_id:
            raise InvalidSessionError("Invalid session subject")

        try:
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            raise InvalidSessionError("Invalid session timestamps")

        if issued_at > utcnow() + self._clock_skew:
            raise InvalidSessionError("Session issued in the future")

        return SessionClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)

    def validate(self, token: Optional[str]) -> Optional[SessionClaims]:
        """Like decode(), but returns None instead of raising."""
        try:
            return self.decode(token or "")
        except (InvalidSessionError, SessionExpiredError):
            return None

    def mint_verification_token(self, now: Optional[datetime] = None) -> VerificationTicket:
        """Create a random email verification token with an absolute expiry."""
        now = now or utcnow()
        return VerificationTicket(
            token=secrets.token_hex(VERIFICATION_TOKEN_BYTES),
            expires_at=now + self._verification_ttl,
        )
