# tests/main/test_main.py
"""Tests for app-level endpoints and wiring."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from pytest_mock import MockerFixture

from app.main import app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_ok(client: AsyncClient, mocker: MockerFixture) -> None:
    mocker.patch("app.main.ping_db", AsyncMock(return_value=True))

    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "ok"
    assert body["version"] == app.version


@pytest.mark.asyncio
async def test_health_degraded(client: AsyncClient, mocker: MockerFixture) -> None:
    mocker.patch("app.main.ping_db", AsyncMock(return_value=False))

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"


@pytest.mark.asyncio
async def test_security_headers(client: AsyncClient, mocker: MockerFixture) -> None:
    mocker.patch("app.main.ping_db", AsyncMock(return_value=True))

    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_routes_registered() -> None:
    paths = {route.path for route in app.routes}
    assert {
        "/blogs",
        "/blogs/slug/{slug}",
        "/blogs/category/{category_id}",
        "/blogs/{identifier}",
        "/blogs/{blog_id}",
        "/health",
    } <= paths


def test_slug_route_precedes_identifier_route() -> None:
    paths = [route.path for route in app.routes]
    assert paths.index("/blogs/slug/{slug}") < paths.index("/blogs/{identifier}")
    assert paths.index("/blogs/category/{category_id}") < paths.index("/blogs/{identifier}")
