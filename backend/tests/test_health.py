"""
Tests for health check endpoints.
"""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from rest_api.main import app
from shared.infrastructure.db import get_db


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "rest-api"

    def test_health_check_needs_no_token(self, client):
        assert "Authorization" not in client.headers
        assert client.get("/api/health").status_code == 200

    def test_detailed_health_check(self, client):
        """Detailed health check reports the database dependency."""
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"]["status"] == "healthy"
        assert "latency_ms" in data["dependencies"]["database"]

    def test_detailed_health_check_database_down(self, client):
        """An unreachable database is reported as 503."""
        broken = MagicMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        app.dependency_overrides[get_db] = lambda: broken

        response = client.get("/api/health/detailed")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["dependencies"]["database"]["status"] == "unhealthy"
