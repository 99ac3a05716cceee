"""Integration tests for health, readiness and metrics endpoints"""

import pytest
from unittest.mock import Mock

from dependencies import get_content_store
from main import app


@pytest.fixture
def content_store():
    store = Mock()
    store.bucket_exists.return_value = True
    app.dependency_overrides[get_content_store] = lambda: store
    return store


class TestObservabilityEndpoints:

    def test_ready(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    def test_metrics(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "handoff_messages_total" in response.text

    def test_health_with_unprobed_broker(self, client, content_store):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["content_store"]["status"] == "healthy"

    def test_health_unhealthy_content_store(self, client, content_store):
        content_store.bucket_exists.return_value = False

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["components"]["content_store"]["status"] == "unhealthy"
