"""
Fixtures for API tests.

Routes run against the in-memory services from the top-level conftest by
overriding the container's FastAPI dependencies.
"""

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import get_auth_service, get_billing_service


@pytest.fixture
def client(auth_service, billing_service):
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_billing_service] = lambda: billing_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client, make_user):
    """Sign a verified user in; the client then carries the session cookie."""

    def _signed_in(email: str = "a@b.com", **fields):
        user = make_user(email, **fields)
        response = client.post(
            "/api/auth/signin", json={"email": email, "password": "correct-horse"}
        )
        assert response.status_code == 200
        return user

    return _signed_in
