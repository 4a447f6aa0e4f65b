"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents the caller behind a valid session.

    Resolved from the session cookie on every request and made available
    to route handlers via dependency injection. It never carries the
    password hash or the verification token.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Lowercase-normalized email address")
    full_name: Optional[str] = Field(None, description="Display name")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    is_admin: bool = Field(default=False, description="Whether the user is an administrator")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra columns from the users table
    }
