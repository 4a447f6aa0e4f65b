"""Tests for billing module exceptions."""

from shared.exceptions import NotFoundError, ValidationError
from modules.billing.exceptions import InvalidPlanError, ProfileNotFoundError


class TestInvalidPlanError:
    def test_invalid_plan_error(self):
        error = InvalidPlanError("platinum")
        assert isinstance(error, ValidationError)
        assert error.status_code == 400
        assert error.to_dict() == {
            "error": "Invalid plan type",
            "code": "invalid_plan",
            "details": {"plan": "platinum"},
        }


class TestProfileNotFoundError:
    def test_profile_not_found_error(self):
        error = ProfileNotFoundError("u1")
        assert isinstance(error, NotFoundError)
        assert error.status_code == 404
        assert error.code == "profile_not_found"
        assert "u1" in str(error)
