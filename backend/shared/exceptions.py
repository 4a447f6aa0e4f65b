"""
Base exception classes for the SEOInForce backend.

Each module should define its own exceptions that inherit from these bases.
The API layer turns any InForceError into a structured response using
status_code and to_dict(), so these are expected outcomes, not crashes.
"""

from typing import Optional, Any


class InForceError(Exception):
    """
    Base exception for all SEOInForce errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class NotFoundError(InForceError):
    """Resource not found."""

    status_code = 404


class ValidationError(InForceError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(InForceError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(InForceError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class ExternalServiceError(InForceError):
    """Error communicating with an external service."""

    status_code = 503

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreUnavailableError(ExternalServiceError):
    """
    Raised when the data store cannot be reached or rejects a query.

    The message is deliberately generic; the underlying error is logged
    where it is caught and never sent to the client.
    """

    def __init__(self, operation: str):
        super().__init__(
            "The data store is temporarily unavailable. Please try again.",
            service="supabase",
            code="store_unavailable",
        )
        self.operation = operation


class DuplicateRecordError(InForceError):
    """Raised when an insert violates a unique constraint."""

    status_code = 409

    def __init__(self, operation: str):
        super().__init__(
            "A record with the same unique key already exists",
            code="duplicate_record",
            details={"operation": operation},
        )


class UnauthenticatedError(AuthenticationError):
    """Raised when an operation needs a session and the caller has none."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="unauthenticated")


class ForbiddenError(AuthorizationError):
    """Raised when the caller is authenticated but not allowed."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, code="forbidden")
