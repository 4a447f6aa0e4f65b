"""
Billing service implementation.

The plan/credit ledger: lazily bootstraps a free profile per user and
moves users between paid plans, replacing their credit balance with the
plan's allotment. Payment is out of scope; plan changes are granted as
requested.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.models import AuthenticatedUser

from .exceptions import InvalidPlanError, ProfileNotFoundError
from .interfaces import IBillingService, IProfileRepository
from .models import (
    DEFAULT_FREE_CREDITS,
    PLAN_CREDITS,
    PlanChange,
    PlanType,
    Profile,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BillingService(IBillingService):
    """Implementation of the plan/credit ledger over a profile store."""

    def __init__(
        self,
        profiles: IProfileRepository,
        free_credits: int = DEFAULT_FREE_CREDITS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._profiles = profiles
        self._free_credits = free_credits
        self._clock = clock

    async def ensure_profile(self, user: AuthenticatedUser) -> Profile:
        profile = self._profiles.get_profile(user.id)
        if profile is not None:
            return profile

        # Conflict-tolerant insert, then re-read: whoever wins the race,
        # every caller returns the one stored row.
        self._profiles.insert_profile_if_absent(
            user.id,
            {
                "email": user.email,
                "full_name": user.full_name or user.email.split("@")[0],
                "plan_type": PlanType.FREE.value,
                "api_credits": self._free_credits,
            },
        )
        profile = self._profiles.get_profile(user.id)
        if profile is None:
            raise ProfileNotFoundError(user.id)
        logger.info(f"Bootstrapped profile for user {user.id}")
        return profile

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        return self._profiles.get_profile(user_id)

    async def change_plan(self, user_id: str, new_plan: str) -> PlanChange:
        plan = resolve_paid_plan(new_plan)
        credits = PLAN_CREDITS[plan]

        updated = self._profiles.update_profile(
            user_id,
            {
                "plan_type": plan.value,
                "api_credits": credits,
                "updated_at": self._clock().isoformat(),
            },
        )
        if updated is None:
            raise ProfileNotFoundError(user_id)

        logger.info(f"User {user_id} moved to plan {plan.value} with {credits} credits")
        return PlanChange(plan=plan, credits=credits)


def resolve_paid_plan(value: Optional[str]) -> PlanType:
    """
    Map a requested plan name to a selectable paid plan.

    Raises:
        InvalidPlanError: For free, unknown or missing plan names
    """
    try:
        plan = PlanType(value)
    except ValueError:
        raise InvalidPlanError(str(value))
    if plan not in PLAN_CREDITS:
        raise InvalidPlanError(plan.value)
    return plan
