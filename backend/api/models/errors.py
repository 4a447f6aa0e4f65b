"""
Error response models.

Standardized error responses for the API. InForceError.to_dict() produces
the same shape.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    code: str
    details: dict[str, Any] = Field(default_factory=dict)
