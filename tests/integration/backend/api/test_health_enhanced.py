"""Integration tests for health endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

HEALTHY_DB = {"status": "healthy", "latency_ms": 1}
UNHEALTHY_DB = {"status": "unhealthy", "error": "connection refused"}


@pytest.mark.asyncio
async def test_liveness_always_healthy(client: AsyncClient) -> None:
    """GET /health should always return 200."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_readiness_healthy(client: AsyncClient) -> None:
    with patch(
        "cloudnotes.backend.api.health.check_database",
        AsyncMock(return_value=HEALTHY_DB),
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"] == {"database": HEALTHY_DB}


@pytest.mark.asyncio
async def test_readiness_unhealthy_returns_503(client: AsyncClient) -> None:
    with patch(
        "cloudnotes.backend.api.health.check_database",
        AsyncMock(return_value=UNHEALTHY_DB),
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 503
    detail = response.json()["detail"]
    assert detail["status"] == "unhealthy"
    assert detail["checks"]["database"]["error"] == "connection refused"


@pytest.mark.asyncio
async def test_readiness_not_configured_is_ready(client: AsyncClient) -> None:
    with patch(
        "cloudnotes.backend.api.health.check_database",
        AsyncMock(return_value={"status": "not_configured"}),
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_detailed_returns_app_info(client: AsyncClient) -> None:
    """GET /health/detailed should include application info."""
    with patch(
        "cloudnotes.backend.api.health.check_database",
        AsyncMock(return_value=UNHEALTHY_DB),
    ):
        response = await client.get("/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "unhealthy"
    app_info = data["application"]
    assert app_info["name"]
    assert "env" in app_info
    assert "version" in app_info
