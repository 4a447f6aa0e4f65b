"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.

Sign-in deliberately uses one InvalidCredentialsError for both "no such
user" and "wrong password", while banned and unverified accounts get
their own codes.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Raised when the email is unknown or the password is wrong."""

    def __init__(self):
        super().__init__("Invalid email or password", code="invalid_credentials")


class AccountBannedError(AuthorizationError):
    """Raised when a banned user tries to sign in."""

    def __init__(self):
        super().__init__(
            "Your account has been banned. Please contact support.",
            code="banned",
        )


class EmailNotVerifiedError(AuthorizationError):
    """Raised when a user signs in before verifying their email."""

    def __init__(self):
        super().__init__(
            "Please verify your email address before signing in. "
            "Check your inbox for the verification link.",
            code="email_not_verified",
        )


class InvalidSessionError(AuthenticationError):
    """Raised when a session token is malformed, forged or not yet valid."""

    def __init__(self, message: str = "Invalid session token"):
        super().__init__(message, code="invalid_session")


class SessionExpiredError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Session has expired"):
        super().__init__(message, code="session_expired")


class InvalidTokenError(ValidationError):
    """Raised when a verification token matches no user."""

    def __init__(self):
        super().__init__("Invalid verification link", code="invalid_token")


class TokenExpiredError(ValidationError):
    """Raised when a verification token is past its expiry."""

    def __init__(self):
        super().__init__("Verification link has expired", code="token_expired")


class AlreadyVerifiedError(ValidationError):
    """Raised when a verification token is requested for a verified user."""

    def __init__(self, user_id: str):
        super().__init__(
            "Email address is already verified",
            code="already_verified",
            details={"user_id": user_id},
        )


class EmailAlreadyRegisteredError(ValidationError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self):
        super().__init__(
            "This email is already registered. Please sign in instead.",
            code="email_taken",
        )


class UserNotFoundError(NotFoundError):
    """Raised when an operation targets a user id that does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="user_not_found",
            details={"user_id": user_id},
        )
