"""Tests for shared/config.py."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "SEOInForce API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.app_version == "0.1.0"

    def test_session_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.jwt_algorithm == "HS256"
        assert settings.session_ttl_seconds == 7 * 24 * 60 * 60
        assert settings.session_cookie_name == "auth-token"
        assert settings.session_clock_skew_seconds == 60
        assert settings.verification_token_ttl_hours == 24
        assert settings.free_plan_credits == 100

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_secrets_from_env(self):
        with patch.dict(os.environ, {
            "JWT_SECRET": "env-secret",
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "EMAIL_API_KEY": "mail-key",
        }):
            settings = Settings(_env_file=None)
            assert settings.jwt_secret == "env-secret"
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.email_api_key == "mail-key"

    def test_settings_are_immutable(self):
        settings = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.jwt_secret = "changed"


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        assert isinstance(get_settings(), Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
