"""Tests for health check endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from shared.config import get_settings


@pytest.fixture
def client():
    return TestClient(create_app())


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self, client):
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    def test_readiness_reports_collaborators(self, client):
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert set(data.keys()) == {"status", "database", "storage", "email", "payments"}

    def test_readiness_degraded_without_storage(self, client, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "http://db")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "key")
        monkeypatch.setenv("STORAGE_BUCKET", "")
        get_settings.cache_clear()
        response = client.get("/api/ready")
        data = response.json()
        assert data["database"] == "configured"
        assert data["storage"] == "not_configured"
        assert data["status"] == "degraded"
