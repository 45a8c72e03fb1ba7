# tests/main/test_main.py
"""Tests for the app-level endpoints and middleware."""

from datetime import datetime

import pytest
from httpx import AsyncClient
from pytest_mock import MockerFixture

from app.configs import settings
from app.managers import ResponseCache
from app.middleware import REQUEST_ID_HEADER


class TestHealth:
    """Tests for GET /health."""

    async def test_health_reports_cache(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["version"] == "1.0.0"
        assert body["uptime"] >= 0
        assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None
        assert body["cache"]["backend"] == "in-memory"
        assert body["cache"]["status"] == "healthy"
        assert body["cache"]["statistics"]["size"] == 0

    async def test_health_reports_unreachable_cache(
        self,
        client: AsyncClient,
        response_cache: ResponseCache,
        mocker: MockerFixture,
    ) -> None:
        mocker.patch.object(response_cache.client, "ping", side_effect=RuntimeError("store gone"))

        body = (await client.get("/health")).json()

        assert body["status"] == "OK"
        assert body["cache"]["status"] == "unhealthy"
        assert body["cache"]["error"] == "store gone"


class TestMetrics:
    """Tests for GET /metrics."""

    async def test_metrics_sections(self, client: AsyncClient) -> None:
        await client.get("/api/posts")

        body = (await client.get("/metrics")).json()

        assert set(body) >= {"timestamp", "api_metrics", "cache_metrics", "system_metrics"}
        assert body["cache_metrics"]["misses"] == 1
        assert body["api_metrics"]["request_counts"]["/posts"] >= 1


class TestRoot:
    """Tests for GET /."""

    async def test_welcome(self, client: AsyncClient) -> None:
        response = await client.get("/")
        assert response.json() == {"message": "Welcome to Inkwell Blog Backend"}


class TestMiddleware:
    """Tests for request id and security headers."""

    async def test_request_id_is_generated(self, client: AsyncClient) -> None:
        response = await client.get("/")
        assert len(response.headers[REQUEST_ID_HEADER]) == 32

    async def test_request_id_is_propagated(self, client: AsyncClient) -> None:
        response = await client.get("/", headers={REQUEST_ID_HEADER: "trace-123"})
        assert response.headers[REQUEST_ID_HEADER] == "trace-123"

    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    async def test_hsts_only_in_production(
        self,
        client: AsyncClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        assert "Strict-Transport-Security" not in (await client.get("/")).headers

        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        response = await client.get("/")
        assert response.headers["Strict-Transport-Security"] == "max-age=31536000; includeSubDomains"

    async def test_unknown_route(self, client: AsyncClient) -> None:
        assert (await client.get("/api/nowhere")).status_code == 404
