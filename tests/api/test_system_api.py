"""API tests for the unversioned system endpoints."""

from unittest.mock import AsyncMock

import pytest

from src.core.config import settings
from src.core.container import get_database


@pytest.mark.api
class TestSystemEndpoints:
    """GET /, /health and /config."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "message": settings.app_name,
            "status": "operational",
            "version": settings.app_version,
        }

    def test_health_when_database_answers(self, client, override):
        database = AsyncMock()
        database.check_connection.return_value = True
        override(get_database, database)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "ok"}

    def test_health_when_database_unreachable(self, client, override):
        database = AsyncMock()
        database.check_connection.return_value = False
        override(get_database, database)

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_config_hidden_outside_development(self, client):
        response = client.get("/config")

        assert response.status_code == 403

    def test_responses_carry_trace_id(self, client):
        response = client.get("/", headers={"X-Trace-Id": "trace-abc"})

        assert response.headers["X-Trace-Id"] == "trace-abc"
