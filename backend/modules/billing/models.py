"""
Billing module data models.

These models define the data structures used by the billing module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PlanType(str, Enum):
    """Subscription tiers."""

    FREE = "free"
    STARTER = "starter"
    GROWTH = "growth"
    EMPIRE = "empire"


# Credits granted when switching to a plan. Free is only ever the bootstrap
# plan and cannot be selected through a plan change.
PLAN_CREDITS: dict[PlanType, int] = {
    PlanType.STARTER: 500,     # 100 keywords, monthly audits
    PlanType.GROWTH: 2000,     # 1,000 keywords, weekly reports
    PlanType.EMPIRE: 10000,    # Unlimited keywords
}

DEFAULT_FREE_CREDITS = 100


class Profile(BaseModel):
    """
    A user's subscription state (row of the profiles table).

    api_credits is replaced wholesale on every plan change, never added to.
    """

    id: str = Field(..., description="User ID")
    email: Optional[str] = Field(None, description="Email at bootstrap time")
    full_name: Optional[str] = Field(None, description="Display name")
    plan_type: PlanType = Field(default=PlanType.FREE, description="Current plan")
    api_credits: int = Field(default=DEFAULT_FREE_CREDITS, description="Remaining credits")
    updated_at: Optional[datetime] = Field(None, description="Last plan change")

    model_config = {"extra": "ignore"}


class PlanChange(BaseModel):
    """Result of a plan change."""

    plan: PlanType
    credits: int


class ChangePlanRequest(BaseModel):
    """
    Request to change plan.

    planType is a free string so that unknown values reach the ledger and
    come back as invalid_plan rather than a generic validation error.
    """

    plan_type: str = Field("", alias="planType")

    model_config = {"populate_by_name": True}


class PlanChangeResponse(BaseModel):
    """API response for a plan change."""

    success: bool = True
    plan: PlanType
    credits: int
    message: str = "Subscription updated successfully"


class ProfileResponse(BaseModel):
    """API response for subscription queries."""

    plan: PlanType
    credits: int
    updated_at: Optional[datetime] = None
