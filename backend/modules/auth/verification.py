"""
Email verification state machine.

A user is Unverified (with or without a live token) or Verified, and
Verified is terminal. Issuing a token overwrites any earlier one; there is
no cooldown between reissues.

Consuming a token has four distinguishable results:
- VerificationOutcome.VERIFIED: the token was live and is now cleared
- VerificationOutcome.ALREADY_VERIFIED: the holder is already verified
- TokenExpiredError: the token is past expiry (expiry is inclusive); it
  stays on the record so only a reissue helps
- InvalidTokenError: no user holds the token
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from .exceptions import AlreadyVerifiedError, InvalidTokenError, TokenExpiredError
from .interfaces import IUserRepository, IVerificationService
from .models import UserRecord, VerificationOutcome, VerificationResult, VerificationTicket
from .tokens import TokenIssuer, utcnow

logger = logging.getLogger(__name__)


class VerificationService(IVerificationService):
    """Issues and consumes email verification tokens."""

    def __init__(
        self,
        users: IUserRepository,
        issuer: TokenIssuer,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._users = users
        self._issuer = issuer
        self._clock = clock

    async def issue(self, user: UserRecord) -> VerificationTicket:
        """
        Store a fresh verification token on an unverified user.

        Raises:
            AlreadyVerifiedError: If the user is already verified
        """
        if user.email_verified:
            raise AlreadyVerifiedError(user.id)

        ticket = self._issuer.mint_verification_token(self._clock())
        self._users.update_user(
            user.id,
            {
                "verification_token": ticket.token,
                "verification_token_expires": ticket.expires_at.isoformat(),
            },
        )
        logger.info(f"Issued verification token for user {user.id}")
        return ticket

    async def consume(self, token: Optional[str]) -> VerificationResult:
        """
        Consume a verification token.

        The conditional update does all the mutating. The follow-up read
        only explains why nothing matched.
        """
        if not token:
            raise InvalidTokenError()

        now = self._clock()
        verified = self._users.consume_verification_token(token, now)
        if verified is not None:
            logger.info(f"Verified email for user {verified.id}")
            return VerificationResult(outcome=VerificationOutcome.VERIFIED, user=verified)

        holder = self._users.get_user_by_verification_token(token)
        if holder is None:
            raise InvalidTokenError()
        if holder.email_verified:
            return VerificationResult(outcome=VerificationOutcome.ALREADY_VERIFIED, user=holder)

        # The update skips only unverified holders whose token is not live,
        # which includes a missing expiry.
        logger.info(f"Verification token expired for user {holder.id}")
        raise TokenExpiredError()
