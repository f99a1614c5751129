# =============================================================================
# tests/test_health.py - Health and Configuration Tests
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.config import Settings
from app.dependencies import get_store
from app import main
from app.main import app as api


class TestHealthRoutes:
    """Tests for the health endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_with_memory_store(self, client):
        response = client.get("/api/v1/health/ready")

        assert response.json()["status"] == "ready"
        assert response.json()["checks"]["store"] == "healthy"

    def test_ready_degraded_when_store_unreachable(self, client):
        broken = MagicMock()
        broken.ping.side_effect = RuntimeError("connection refused")
        api.dependency_overrides[get_store] = lambda: broken

        response = client.get("/api/v1/health/ready")

        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["store"].startswith("unhealthy")

    def test_live(self, client):
        assert client.get("/api/v1/health/live").json()["status"] == "alive"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Volunteer Match API"


class TestSettings:
    """Tests for configuration validation."""

    def test_memory_backend_needs_nothing(self):
        Settings(STORE_BACKEND="memory").validate_store_backend()

    def test_supabase_backend_requires_credentials(self):
        config = Settings(STORE_BACKEND="supabase", SUPABASE_URL="", SUPABASE_SERVICE_KEY="")

        with pytest.raises(ValueError, match="SUPABASE_URL"):
            config.validate_store_backend()

    def test_supabase_backend_configured(self):
        Settings(
            STORE_BACKEND="supabase",
            SUPABASE_URL="https://example.supabase.co",
            SUPABASE_SERVICE_KEY="service-key",
        ).validate_store_backend()

    def test_cors_origins_list(self):
        config = Settings(CORS_ORIGINS="http://a.org, https://b.org")

        assert config.cors_origins_list == ["http://a.org", "https://b.org"]


class TestLauncher:
    """Tests for `python -m app.main`."""

    def test_run_uses_configured_host_and_port(self):
        with patch.object(main.settings, "API_HOST", "127.0.0.1"), \
                patch.object(main.settings, "API_PORT", 9001), \
                patch.object(main.uvicorn, "run") as serve:
            main.run()

        serve.assert_called_once_with(
            "app.main:app",
            host="127.0.0.1",
            port=9001,
            reload=main.settings.is_development,
        )
