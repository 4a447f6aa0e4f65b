"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from settings.

Settings are read once per container; the signing secret and TTLs baked
into the token issuer never change until the container is reset.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.cookies import SessionCookieManager
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.passwords import PasswordHasher
    from modules.auth.tokens import TokenIssuer
    from modules.auth.verification import VerificationService
    from modules.billing.interfaces import IBillingService, IProfileRepository
    from modules.notifications.interfaces import IEmailService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._users: "IUserRepository | None" = None
        self._profiles: "IProfileRepository | None" = None
        self._hasher: "PasswordHasher | None" = None
        self._issuer: "TokenIssuer | None" = None
        self._cookies: "SessionCookieManager | None" = None
        self._email: "IEmailService | None" = None
        self._verification: "VerificationService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._billing_service: "IBillingService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._users is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._users = UserRepository(get_supabase_client())
        return self._users

    @property
    def profiles(self) -> "IProfileRepository":
        """Get the profile repository instance."""
        if self._profiles is None:
            from modules.billing.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profiles = ProfileRepository(get_supabase_client())
        return self._profiles

    @property
    def hasher(self) -> "PasswordHasher":
        if self._hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._hasher = PasswordHasher()
        return self._hasher

    @property
    def issuer(self) -> "TokenIssuer":
        """Get the token issuer, configured from settings."""
        if self._issuer is None:
            from modules.auth.tokens import TokenIssuer
            settings = self.settings
            self._issuer = TokenIssuer(
                secret=settings.jwt_secret,
                session_ttl=timedelta(seconds=settings.session_ttl_seconds),
                verification_ttl=timedelta(hours=settings.verification_token_ttl_hours),
                clock_skew=timedelta(seconds=settings.session_clock_skew_seconds),
                key_epoch=settings.session_key_epoch,
                algorithm=settings.jwt_algorithm,
            )
        return self._issuer

    @property
    def cookies(self) -> "SessionCookieManager":
        if self._cookies is None:
            from modules.auth.cookies import SessionCookieManager
            settings = self.settings
            self._cookies = SessionCookieManager(
                name=settings.session_cookie_name,
                ttl=timedelta(seconds=settings.session_ttl_seconds),
                secure=settings.session_cookie_secure,
            )
        return self._cookies

    @property
    def email(self) -> "IEmailService":
        """Get the email service instance."""
        if self._email is None:
            from modules.notifications.service import EmailService
            self._email = EmailService(self.settings)
        return self._email

    @property
    def verification(self) -> "VerificationService":
        if self._verification is None:
            from modules.auth.verification import VerificationService
            self._verification = VerificationService(self.users, self.issuer)
        return self._verification

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                hasher=self.hasher,
                issuer=self.issuer,
                cookies=self.cookies,
                verification=self.verification,
                email=self.email,
            )
        return self._auth_service

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.service import BillingService
            self._billing_service = BillingService(
                self.profiles,
                free_credits=self.settings.free_plan_credits,
            )
        return self._billing_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._users = None
        self._profiles = None
        self._hasher = None
        self._issuer = None
        self._cookies = None
        self._email = None
        self._verification = None
        self._auth_service = None
        self._billing_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing
