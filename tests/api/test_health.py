"""Health endpoint tests."""

from unittest.mock import MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from pricecompare.store import DataAccessError


class TestHealth:
    """Tests for /health and /ready."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client: TestClient) -> None:
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "rate_source": "fallback"}

    def test_not_ready_before_startup(self, app: FastAPI) -> None:
        del app.state.price_store
        client = TestClient(app)

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "starting"}

    def test_ready_with_live_subscription(self, app: FastAPI) -> None:
        app.state.price_subscription = MagicMock(failure=None, closed=False)
        client = TestClient(app)

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_degraded_after_subscription_failure(self, app: FastAPI) -> None:
        app.state.price_subscription = MagicMock(
            failure=DataAccessError("subscribe", OSError("connection lost")),
            closed=True,
        )
        client = TestClient(app)

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "degraded", "rate_source": "fallback"}

    def test_degraded_after_subscription_closed(self, app: FastAPI) -> None:
        app.state.price_subscription = MagicMock(failure=None, closed=True)
        client = TestClient(app)

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
