"""
Session cookie authentication dependencies.

Resolves the caller from the session cookie on each request. Anything
wrong with the cookie (missing, forged, expired, user gone or banned)
means "no user".
"""

from typing import Optional
from fastapi import Depends, Request

from shared.exceptions import ForbiddenError, UnauthenticatedError
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService

from ..dependencies import get_auth_service


async def get_optional_user(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.email}"}
            return {"message": "Hello, anonymous"}
    """
    return await auth.current_user(request)


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if user is None:
        raise UnauthenticatedError()
    return user


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that requires an authenticated administrator."""
    if not user.is_admin:
        raise ForbiddenError("Forbidden - Admin access required")
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireAdmin = Depends(require_admin)
