"""Health endpoint tests."""

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from doclife.interfaces.api.resources.health import HealthResource


def _client(health: HealthResource) -> TestClient:
    app = App()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Create test client with health endpoints."""
    return _client(HealthResource())


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_storage_down() -> None:
    """GET /v1/health/ready returns 503 when the readiness check fails."""

    async def failing_check() -> bool:
        return False

    result = _client(HealthResource(failing_check)).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["status"] == "unavailable"
