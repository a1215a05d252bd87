"""Tests for the application factory and middleware wiring."""

from fastapi import APIRouter
from fastapi.testclient import TestClient

from mockster.api import create_app
from mockster.config import Settings


class TestCreateApp:
    def test_routes_registered(self) -> None:
        app = create_app(Settings())
        paths = {route.path for route in app.routes}
        assert {"/health", "/api/v1/query", "/api/v1/query_range"} <= paths

    def test_settings_stored_on_state(self) -> None:
        settings = Settings(max_points=5)
        assert create_app(settings).state.settings is settings

    def test_defaults_to_env_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("MOCKSTER_PATH_PREFIX", "mock")
        app = create_app()
        paths = {route.path for route in app.routes}
        assert "/mock/api/v1/query" in paths

    def test_unexpected_errors_return_500(self) -> None:
        app = create_app(Settings())
        broken = APIRouter()

        @broken.get("/boom")
        async def boom() -> None:
            raise RuntimeError("kaboom")

        app.include_router(broken)
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/boom")
        assert response.status_code == 500
        assert response.json()["status"] == "error"

    def test_cors_headers(self) -> None:
        client = TestClient(create_app(Settings()))
        response = client.get("/health", headers={"Origin": "http://dashboard.local"})
        assert response.headers["access-control-allow-origin"] == "*"
