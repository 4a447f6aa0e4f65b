"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import NotFoundError, ValidationError


class InvalidPlanError(ValidationError):
    """Raised when a plan change targets anything but a paid plan."""

    def __init__(self, plan: str):
        super().__init__(
            "Invalid plan type",
            code="invalid_plan",
            details={"plan": plan},
        )


class ProfileNotFoundError(NotFoundError):
    """Raised when a plan change finds no profile row to update."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found: {user_id}",
            code="profile_not_found",
            details={"user_id": user_id},
        )
