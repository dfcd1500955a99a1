# tests/repositories/conftest.py
"""Pytest fixtures for repository tests."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.models import BlogDB


@pytest.fixture
def result() -> MagicMock:
    """Result object returned by the mocked session."""
    return MagicMock()


@pytest.fixture
def session(result: MagicMock) -> MagicMock:
    """AsyncSession stand-in that records executed statements."""
    mock = MagicMock()
    mock.execute = AsyncMock(return_value=result)
    mock.flush = AsyncMock()
    mock.refresh = AsyncMock()
    mock.rollback = AsyncMock()
    mock.commit = AsyncMock()
    mock.delete = AsyncMock()
    return mock


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def blog() -> BlogDB:
    return BlogDB(
        id=uuid4(),
        title="Hello, World!",
        slug="hello-world",
        content="First post.",
        cover_image_url="https://example.com/a.jpg",
        read_time_minutes=3,
        category_id=uuid4(),
        meta_title="Hello, World!",
        meta_description="First post.",
    )
