"""Tests that the concrete billing classes satisfy their protocols."""

from unittest.mock import MagicMock

from modules.billing.interfaces import IBillingService, IProfileRepository
from modules.billing.repository import ProfileRepository


class TestBillingProtocols:
    def test_profile_repository_satisfies_protocol(self):
        assert isinstance(ProfileRepository(MagicMock()), IProfileRepository)

    def test_in_memory_repository_satisfies_protocol(self, profiles):
        assert isinstance(profiles, IProfileRepository)

    def test_billing_service_satisfies_protocol(self, billing_service):
        assert isinstance(billing_service, IBillingService)
