"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory stand-ins for the user and profile stores, a recording email
service, a controllable clock, and fully wired services built on them.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import pytest

from api.dependencies import reset_container
from shared.config import Settings
from shared.database import reset_client_cache
from modules.auth.cookies import SessionCookieManager
from modules.auth.exceptions import EmailAlreadyRegisteredError
from modules.auth.models import UserRecord, UserSummary
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from modules.auth.tokens import TokenIssuer
from modules.auth.verification import VerificationService
from modules.billing.models import Profile
from modules.billing.service import BillingService
from modules.notifications.exceptions import EmailDeliveryError


# Long enough that PyJWT does not warn about a short HMAC key
TEST_JWT_SECRET = "test-session-secret-for-testing-only-0123456789"
TEST_PASSWORD = "correct-horse"


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class InMemoryUserRepository:
    """Dict-backed IUserRepository with the same matching rules as the SQL."""

    def __init__(self):
        self.rows: dict[str, dict[str, Any]] = {}

    def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        row = self.rows.get(user_id)
        return UserRecord(**row) if row else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find(lambda row: row["email"] == email)

    def get_user_by_verification_token(self, token: str) -> Optional[UserRecord]:
        return self._find(lambda row: row.get("verification_token") == token)

    def create_user(self, fields: dict[str, Any]) -> UserRecord:
        if self.get_user_by_email(fields["email"]) is not None:
            raise EmailAlreadyRegisteredError()
        user_id = fields.get("id") or str(uuid.uuid4())
        self.rows[user_id] = {
            "email_verified": False,
            "is_banned": False,
            "is_admin": False,
            **fields,
            "id": user_id,
        }
        return UserRecord(**self.rows[user_id])

    def update_user(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        if user_id not in self.rows:
            return None
        self.rows[user_id].update(fields)
        return UserRecord(**self.rows[user_id])

    def consume_verification_token(self, token: str, now: datetime) -> Optional[UserRecord]:
        for user_id, row in self.rows.items():
            record = UserRecord(**row)
            if (
                record.verification_token == token
                and not record.email_verified
                and record.verification_token_expires is not None
                and record.verification_token_expires > now
            ):
                return self.update_user(
                    user_id,
                    {
                        "email_verified": True,
                        "verification_token": None,
                        "verification_token_expires": None,
                    },
                )
        return None

    def list_users(
        self, offset: int, limit: int, search: Optional[str] = None
    ) -> tuple[list[UserSummary], int]:
        term = (search or "").strip().lower()
        # dicts keep insertion order, so newest first is the reverse
        matches = [
            UserSummary(**row)
            for row in reversed(list(self.rows.values()))
            if term in row["email"] or term in (row.get("full_name") or "").lower()
        ]
        return matches[offset : offset + limit], len(matches)

    def _find(self, predicate) -> Optional[UserRecord]:
        for row in self.rows.values():
            if predicate(row):
                return UserRecord(**row)
        return None


class InMemoryProfileRepository:
    """
    Dict-backed IProfileRepository.

    on_insert, when set, runs at the start of insert_profile_if_absent so a
    test can slip in a rival writer between a caller's read and its insert.
    """

    def __init__(self):
        self.rows: dict[str, dict[str, Any]] = {}
        self.insert_calls = 0
        self.on_insert: Optional[Callable[[], None]] = None

    def get_profile(self, user_id: str) -> Optional[Profile]:
        row = self.rows.get(user_id)
        return Profile(**row) if row else None

    def insert_profile_if_absent(self, user_id: str, fields: dict[str, Any]) -> None:
        if self.on_insert is not None:
            self.on_insert()
        self.insert_calls += 1
        self.rows.setdefault(user_id, {**fields, "id": user_id})

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> Optional[Profile]:
        if user_id not in self.rows:
            return None
        self.rows[user_id].update(fields)
        return Profile(**self.rows[user_id])


class FakeEmailService:
    """Records outgoing mail instead of sending it."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.verification_emails: list[tuple[str, str, Optional[str]]] = []
        self.welcome_emails: list[tuple[str, str]] = []

    async def send_verification_email(
        self, to: str, token: str, name: Optional[str] = None
    ) -> None:
        if self.fail:
            raise EmailDeliveryError(to, "mail API returned 502", 502)
        self.verification_emails.append((to, token, name))

    async def send_welcome_email(self, to: str, name: str) -> None:
        if self.fail:
            raise EmailDeliveryError(to, "mail API returned 502", 502)
        self.welcome_emails.append((to, name))


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and client cache before and after each test."""
    reset_container()
    reset_client_cache()
    yield
    reset_container()
    reset_client_cache()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(
        secret=TEST_JWT_SECRET,
        session_ttl=timedelta(days=7),
        verification_ttl=timedelta(hours=24),
    )


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture(scope="session")
def password_hash(hasher: PasswordHasher) -> str:
    """Argon2 hash of TEST_PASSWORD, computed once."""
    return hasher.hash(TEST_PASSWORD)


@pytest.fixture
def cookies() -> SessionCookieManager:
    return SessionCookieManager(name="auth-token", ttl=timedelta(days=7))


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def profiles() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def email() -> FakeEmailService:
    return FakeEmailService()


@pytest.fixture
def verification(users, issuer, clock) -> VerificationService:
    return VerificationService(users, issuer, clock=clock)


@pytest.fixture
def auth_service(users, hasher, issuer, cookies, verification, email) -> AuthService:
    return AuthService(
        users=users,
        hasher=hasher,
        issuer=issuer,
        cookies=cookies,
        verification=verification,
        email=email,
    )


@pytest.fixture
def billing_service(profiles, clock) -> BillingService:
    return BillingService(profiles, clock=clock)


@pytest.fixture
def make_user(users, password_hash):
    """Factory for users stored in the in-memory repository."""

    def _make_user(
        email: str = "a@b.com",
        email_verified: bool = True,
        **fields: Any,
    ) -> UserRecord:
        return users.create_user(
            {
                "email": email,
                "password_hash": password_hash,
                "full_name": email.split("@")[0],
                "email_verified": email_verified,
                **fields,
            }
        )

    return _make_user
