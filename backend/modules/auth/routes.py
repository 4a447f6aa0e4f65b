"""
Auth API endpoints.

Sign-in, sign-out, sign-up, email verification and the current-user
lookup, plus the admin user management endpoints. Error responses come
from the InForceError handler registered on the app.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_auth_service, get_billing_service
from api.middleware.auth import get_current_user, require_admin
from shared.models import AuthenticatedUser
from modules.billing.interfaces import IBillingService
from modules.billing.models import PlanType

from .interfaces import IAuthService
from .models import (
    AdminUserUpdate,
    AuthResponse,
    MessageResponse,
    Pagination,
    ResendVerificationRequest,
    SignInRequest,
    SignUpRequest,
    UserListResponse,
    UserResponse,
    VerificationOutcome,
)

router = APIRouter()
admin_router = APIRouter()

MAX_PAGE_SIZE = 100

VERIFICATION_MESSAGES = {
    VerificationOutcome.VERIFIED: "Your email has been verified successfully!",
    VerificationOutcome.ALREADY_VERIFIED: "Your email is already verified",
}


def to_user_response(user: AuthenticatedUser, plan_type: Optional[str] = None) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        email_verified=user.email_verified,
        is_admin=user.is_admin,
        plan_type=plan_type,
    )


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Sign in with email and password.

    Sets the session cookie on success.
    """
    result = await service.sign_in(request.email, request.password)
    service.start_session(response, result)
    return AuthResponse(user=to_user_response(result.user))


@router.post("/signout", response_model=MessageResponse)
async def sign_out(
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Sign out by clearing the session cookie.

    Works without a session, and with an expired or garbage cookie.
    """
    service.sign_out(response)
    return MessageResponse(code="signed_out", message="Signed out successfully")


@router.get("/me", response_model=AuthResponse)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    billing: IBillingService = Depends(get_billing_service),
) -> AuthResponse:
    """
    Get the signed-in user and their plan.

    Requires authentication. A user without a profile yet is on the free
    plan; the profile itself is only created by the subscription endpoints.
    """
    profile = await billing.get_profile(user.id)
    plan = profile.plan_type if profile else PlanType.FREE
    return AuthResponse(user=to_user_response(user, plan.value))


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create an account.

    The account cannot sign in until the emailed verification link is used.
    """
    user = await service.sign_up(request.email, request.password, request.full_name)
    return AuthResponse(user=to_user_response(user))


@router.get("/verify-email", response_model=MessageResponse)
async def verify_email(
    token: str = Query(default=""),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Consume an email verification token.

    Returns code email_verified or already_verified; invalid and expired
    tokens come back as 400 with code invalid_token or token_expired.
    """
    outcome = await service.verify_email(token)
    return MessageResponse(code=outcome.value, message=VERIFICATION_MESSAGES[outcome])


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    request: ResendVerificationRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Send a fresh verification link.

    The response is the same whether or not the address has an account.
    """
    await service.resend_verification(request.email)
    return MessageResponse(
        code="verification_sent",
        message="If that address needs verifying, a new link is on its way.",
    )


@admin_router.get("/users", response_model=UserListResponse)
async def list_users(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=MAX_PAGE_SIZE),
    search: str = Query(default=""),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IAuthService = Depends(get_auth_service),
) -> UserListResponse:
    """
    List users, newest first.

    `search` filters on email or full name. No secrets are returned.
    """
    result = await service.list_users(page, limit, search or None)
    return UserListResponse(
        users=result.users,
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@admin_router.patch("/users/{user_id}", response_model=AuthResponse)
async def update_user(
    user_id: UUID,
    request: AdminUserUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Grant or revoke admin rights."""
    user = await service.set_admin(str(user_id), request.is_admin)
    return AuthResponse(user=to_user_response(user))


@admin_router.post("/users/{user_id}/ban", response_model=AuthResponse)
async def ban_user(
    user_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Ban a user. Their existing sessions stop working immediately."""
    user = await service.set_banned(str(user_id), True)
    return AuthResponse(user=to_user_response(user))


@admin_router.post("/users/{user_id}/unban", response_model=AuthResponse)
async def unban_user(
    user_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Lift a ban."""
    user = await service.set_banned(str(user_id), False)
    return AuthResponse(user=to_user_response(user))
