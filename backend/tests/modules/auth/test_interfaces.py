"""Tests that the concrete auth classes satisfy their protocols."""

from datetime import timedelta
from unittest.mock import MagicMock

from modules.auth.interfaces import IAuthService, IUserRepository, IVerificationService
from modules.auth.repository import UserRepository
from modules.auth.service import AuthService
from modules.auth.tokens import TokenIssuer
from modules.auth.verification import VerificationService


class TestAuthProtocols:
    def test_user_repository_satisfies_protocol(self):
        assert isinstance(UserRepository(MagicMock()), IUserRepository)

    def test_in_memory_repository_satisfies_protocol(self, users):
        assert isinstance(users, IUserRepository)

    def test_verification_service_satisfies_protocol(self, users):
        issuer = TokenIssuer(
            "secret-0123456789abcdef0123456789abcdef", timedelta(days=1), timedelta(hours=1)
        )
        assert isinstance(VerificationService(users, issuer), IVerificationService)

    def test_auth_service_satisfies_protocol(self, auth_service):
        assert isinstance(auth_service, AuthService)
        assert isinstance(auth_service, IAuthService)

    def test_protocol_methods(self):
        for name in (
            "current_user",
            "sign_in",
            "start_session",
            "sign_out",
            "sign_up",
            "verify_email",
            "resend_verification",
            "set_banned",
            "set_admin",
            "list_users",
        ):
            assert hasattr(IAuthService, name)
