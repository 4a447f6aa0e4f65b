"""Tests for health check endpoints."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from api import app
from shared.config import Settings


client = TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self):
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    @patch("api.routes.health.get_settings")
    def test_ready_when_configured(self, mock_settings):
        mock_settings.return_value = Settings(
            _env_file=None,
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
            jwt_secret="secret",
        )
        data = client.get("/api/ready").json()
        assert data == {
            "status": "ready",
            "database": "configured",
            "sessions": "configured",
            "email": "log-only",
        }

    @patch("api.routes.health.get_settings")
    def test_not_ready_without_secret(self, mock_settings):
        mock_settings.return_value = Settings(
            _env_file=None,
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
            jwt_secret="",
        )
        data = client.get("/api/ready").json()
        assert data["status"] == "not_ready"
        assert data["sessions"] == "missing"
