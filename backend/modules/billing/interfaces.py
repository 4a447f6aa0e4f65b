"""
Billing module interfaces.

Other modules should depend on IBillingService, not the concrete implementation.
IProfileRepository is the contract the ledger needs from the data store.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import PlanChange, Profile


@runtime_checkable
class IProfileRepository(Protocol):
    """
    Store for the profiles table.

    Every method raises StoreUnavailableError when the store cannot answer.
    """

    def get_profile(self, user_id: str) -> Optional[Profile]:
        ...

    def insert_profile_if_absent(self, user_id: str, fields: dict[str, Any]) -> None:
        """
        Insert a profile unless one already exists for user_id.

        Must be a single conflict-tolerant write (unique key on id), so
        concurrent callers can never create two rows.
        """
        ...

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> Optional[Profile]:
        """Update a profile; returns the updated row or None if absent."""
        ...


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for plan and credit operations.

    This protocol defines the contract that the billing module exposes
    to the API layer.
    """

    async def ensure_profile(self, user: AuthenticatedUser) -> Profile:
        """
        Get the user's profile, creating a free one on first touch.

        Idempotent under concurrent callers.
        """
        ...

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        ...

    async def change_plan(self, user_id: str, new_plan: str) -> PlanChange:
        """
        Switch to a paid plan and reset credits to its allotment.

        Not payment-gated: credits are granted as soon as this is called.

        Raises:
            InvalidPlanError: If new_plan is not starter, growth or empire
            ProfileNotFoundError: If ensure_profile was never run
        """
        ...
