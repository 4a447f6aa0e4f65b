"""
Password hashing.

New hashes use argon2. bcrypt is still accepted so accounts created by the
previous Node backend (bcryptjs, cost 10) keep working, and such hashes are
upgraded to argon2 on the next successful sign-in.
"""

import logging
from typing import Optional

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class PasswordHasher:
    """One-way password hashing with constant-time verification."""

    def __init__(self):
        self._ctx = CryptContext(
            schemes=["argon2", "bcrypt"],
            deprecated="auto",
        )

    def hash(self, password: str) -> str:
        return self._ctx.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        verified, _ = self.verify_and_update(password, password_hash)
        return verified

    def verify_and_update(
        self, password: str, password_hash: str
    ) -> tuple[bool, Optional[str]]:
        """
        Verify a password and report a replacement hash if the stored one
        uses a deprecated scheme.

        A malformed or unrecognized stored hash verifies as False.
        """
        try:
            verified, replacement = self._ctx.verify_and_update(password, password_hash)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False, None
        return bool(verified), replacement

    def dummy_verify(self) -> None:
        """Spend the time of a real verification; used for unknown emails."""
        self._ctx.dummy_verify()
