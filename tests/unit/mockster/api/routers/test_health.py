"""Tests for the health endpoint."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mockster.api.routers.health import health_check, router


@pytest.fixture
def client() -> TestClient:
    """Create a TestClient with the health router mounted."""
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


class TestHealthCheckEndpoint:
    """Tests for GET /health."""

    def test_returns_200(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200

    def test_response_contains_status_and_version(self, client: TestClient) -> None:
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert isinstance(data["version"], str)
        assert set(data) == {"status", "version"}

    @pytest.mark.asyncio
    async def test_health_check_direct_call(self) -> None:
        """Calling the handler directly should return the expected dict."""
        result = await health_check()
        assert result["status"] == "ok"
        assert "version" in result
