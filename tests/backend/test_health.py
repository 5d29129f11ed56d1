"""
Tests for health check endpoints.

These tests verify:
- Basic health endpoint returns 200
- Readiness check reports the MongoDB connection status
- Health degrades gracefully when MongoDB is down
"""

from unittest.mock import AsyncMock, patch

from records_api.database.connections import PersistenceClient


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_endpoint_returns_200_when_api_running(self, client):
        """Basic health check should return 200 if API is up."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_does_not_require_token(self, client):
        response = client.get("/health")

        assert response.status_code == 200

    def test_root_describes_api(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Records API"


class TestReadinessEndpoint:
    """Tests for GET /health/ready endpoint."""

    def test_readiness_healthy_when_connected(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"] == {"api": "healthy", "mongodb": "healthy"}

    def test_readiness_degraded_when_mongodb_unreachable(self, client, fake_mongo):
        fake_mongo.available = False

        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert "unhealthy" in data["checks"]["mongodb"]

    def test_readiness_reports_connection_state(self, client):
        with patch.object(PersistenceClient, "ping", new_callable=AsyncMock) as mock_ping:
            mock_ping.return_value = False

            data = client.get("/health/ready").json()

        assert data["status"] == "degraded"
        assert data["checks"]["mongodb"] == "unhealthy: connected"
