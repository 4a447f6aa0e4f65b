"""
Centralized configuration for the SEOInForce backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SESSION_*, EMAIL_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "SEOInForce API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, migrations only

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    session_ttl_seconds: int = 60 * 60 * 24 * 7  # 7 days
    session_clock_skew_seconds: int = 60
    session_key_epoch: int = 0
    session_cookie_name: str = "auth-token"
    session_cookie_secure: bool = False

    # Email verification
    verification_token_ttl_hours: int = 24

    # Plans
    free_plan_credits: int = 100

    # Links in outgoing emails
    app_url: str = "https://seoinforce.com"

    # Email transport (HTTP mail API)
    email_api_url: str = ""
    email_api_key: str = ""
    email_from: str = "no-reply@seoinforce.com"
    email_timeout_seconds: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
