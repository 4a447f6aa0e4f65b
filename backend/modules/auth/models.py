"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class UserRecord(BaseModel):
    """
    A row of the users table.

    Secrets are excluded from repr so a record can be logged safely.
    Use to_authenticated() before handing a user to anything outside
    the auth module.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Lowercase-normalized email")
    password_hash: str = Field(..., repr=False)
    full_name: Optional[str] = Field(None)
    email_verified: bool = Field(default=False)
    is_banned: bool = Field(default=False)
    is_admin: bool = Field(default=False)
    verification_token: Optional[str] = Field(None, repr=False)
    verification_token_expires: Optional[datetime] = Field(None)
    created_at: Optional[datetime] = Field(None)

    model_config = {"extra": "ignore"}

    def to_authenticated(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            id=self.id,
            email=self.email,
            full_name=self.full_name,
            email_verified=self.email_verified,
            is_admin=self.is_admin,
        )


class UserSummary(BaseModel):
    """What an admin sees of an account in the user list."""

    id: str
    email: str
    full_name: Optional[str] = None
    email_verified: bool = False
    is_banned: bool = False
    is_admin: bool = False
    created_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}


class UserPage(BaseModel):
    """One page of the admin user list."""

    users: list[UserSummary]
    page: int
    limit: int
    total: int
    total_pages: int


class SessionClaims(BaseModel):
    """Claims recovered from a valid session token."""

    user_id: str = Field(..., description="Subject (user ID)")
    issued_at: datetime = Field(..., description="When the token was minted")
    expires_at: datetime = Field(..., description="When the token stops being valid")

    model_config = {"frozen": True}


class VerificationTicket(BaseModel):
    """A freshly minted email verification token and its absolute expiry."""

    token: str = Field(..., repr=False)
    expires_at: datetime

    model_config = {"frozen": True}


class VerificationOutcome(str, Enum):
    """Successful results of consuming a verification token."""

    VERIFIED = "email_verified"
    ALREADY_VERIFIED = "already_verified"


class VerificationResult(BaseModel):
    """Outcome of consuming a verification token, with the token's holder."""

    outcome: VerificationOutcome
    user: UserRecord


class SignInResult(BaseModel):
    """Result of a successful sign-in."""

    user: AuthenticatedUser
    token: str = Field(..., repr=False)
    expires_at: datetime


class SignInRequest(BaseModel):
    """Request body for sign-in."""

    email: str = ""
    password: str = ""


class SignUpRequest(BaseModel):
    """Request body for sign-up."""

    email: str = ""
    password: str = ""
    full_name: Optional[str] = Field(None, alias="fullName")

    model_config = {"populate_by_name": True}


class AdminUserUpdate(BaseModel):
    """Request body for an admin editing an account."""

    is_admin: bool


class ResendVerificationRequest(BaseModel):
    """Request body for re-sending the verification email."""

    email: str = ""


class UserResponse(BaseModel):
    """Public view of a user."""

    id: str
    email: str
    full_name: Optional[str] = None
    email_verified: bool
    is_admin: bool = False
    plan_type: Optional[str] = None


class AuthResponse(BaseModel):
    """API response for sign-in, sign-up and /me."""

    success: bool = True
    user: UserResponse


class MessageResponse(BaseModel):
    """API response carrying only a status code and a message."""

    success: bool = True
    code: str
    message: str


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UserListResponse(BaseModel):
    """API response for the admin user list."""

    success: bool = True
    users: list[UserSummary]
    pagination: Pagination
