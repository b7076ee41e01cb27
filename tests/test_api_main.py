"""Tests for the FastAPI app wiring, settings and server entry point."""

import sys
from unittest.mock import patch

from fastapi.testclient import TestClient

from envelope_purge.api.config import Settings, get_settings
from envelope_purge.api import server
from envelope_purge.api.main import app
from envelope_purge.clients.soap_client import DocumentServiceClient


class TestApp:
    def test_routes_registered(self):
        paths = {getattr(route, "path", None) for route in app.routes}
        assert "/api/health" in paths
        assert "/api/send-soap" in paths

    def test_lifespan_creates_soap_client(self):
        with TestClient(app) as client:
            assert isinstance(app.state.soap_client, DocumentServiceClient)
            assert app.state.batch_size > 0
            response = client.get("/api/health")
            assert response.status_code == 200

    def test_cors_preflight(self):
        client = TestClient(app)
        response = client.options(
            "/api/send-soap",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        settings = Settings()
        assert settings.PORT == 3001
        assert settings.CORS_ORIGINS == ["*"]
        assert settings.LOG_JSON is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000"]')
        get_settings.cache_clear()
        try:
            settings = get_settings()
            assert settings.PORT == 8080
            assert settings.CORS_ORIGINS == ["http://localhost:3000"]
        finally:
            get_settings.cache_clear()


class TestServer:
    @patch("envelope_purge.api.server.uvicorn")
    def test_run_starts_uvicorn(self, mock_uvicorn, monkeypatch):
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)
        get_settings.cache_clear()
        try:
            server.run()
        finally:
            get_settings.cache_clear()

        mock_uvicorn.run.assert_called_once()
        args, kwargs = mock_uvicorn.run.call_args
        assert args[0] == "envelope_purge.api.main:app"
        assert kwargs["port"] == get_settings().PORT
        assert sys.excepthook is server._log_unhandled
