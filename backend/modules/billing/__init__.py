"""
Billing module.

Handles subscription plans and the API credit allotment that comes with
each plan.

Public API:
- IBillingService: Interface for plan/credit operations
- IProfileRepository: Profile store contract
- Profile, PlanType, PlanChange: Models
- Billing exceptions: InvalidPlanError, ProfileNotFoundError
"""

from .interfaces import IBillingService, IProfileRepository
from .models import (
    Profile,
    PlanType,
    PlanChange,
    PLAN_CREDITS,
    DEFAULT_FREE_CREDITS,
)
from .exceptions import InvalidPlanError, ProfileNotFoundError

__all__ = [
    # Interfaces
    "IBillingService",
    "IProfileRepository",
    # Models
    "Profile",
    "PlanType",
    "PlanChange",
    "PLAN_CREDITS",
    "DEFAULT_FREE_CREDITS",
    # Exceptions
    "InvalidPlanError",
    "ProfileNotFoundError",
]
