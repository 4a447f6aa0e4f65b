"""
Shared infrastructure for SEOInForce backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- repository: Base repository with store error translation
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    InForceError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    StoreUnavailableError,
    DuplicateRecordError,
    UnauthenticatedError,
    ForbiddenError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "InForceError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "StoreUnavailableError",
    "DuplicateRecordError",
    "UnauthenticatedError",
    "ForbiddenError",
    "AuthenticatedUser",
]
