"""
Subscription API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_billing_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IBillingService
from .models import ChangePlanRequest, PlanChangeResponse, ProfileResponse
from .service import resolve_paid_plan

router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_subscription(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> ProfileResponse:
    """
    Get the current user's plan and credits.

    Creates the free profile on first access.
    """
    profile = await service.ensure_profile(user)
    return ProfileResponse(
        plan=profile.plan_type,
        credits=profile.api_credits,
        updated_at=profile.updated_at,
    )


@router.post("", response_model=PlanChangeResponse)
async def change_subscription(
    request: ChangePlanRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> PlanChangeResponse:
    """
    Switch the current user to a paid plan.

    No payment is taken here; credits are reset to the plan's allotment.
    """
    plan = resolve_paid_plan(request.plan_type)
    await service.ensure_profile(user)
    change = await service.change_plan(user.id, plan.value)
    return PlanChangeResponse(plan=change.plan, credits=change.credits)
