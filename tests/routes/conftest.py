# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image

from app.main import app
from app.routes import get_blog_service
from app.schemas import BlogPage, BlogResponse, CategoryRef, Pagination
from app.services import BlogService


@pytest.fixture
def sample_blog() -> BlogResponse:
    """Create a sample blog response for testing."""
    category_id = uuid4()
    moment = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    return BlogResponse(
        id=uuid4(),
        title="Hello, World!",
        slug="hello-world",
        content="First post.",
        cover_image_url="/uploads/blog_images/cover.jpg",
        read_time_minutes=3,
        category_id=category_id,
        category=CategoryRef(id=category_id, title="Travel"),
        meta_title="Hello, World!",
        meta_description="First post.",
        published_date=moment,
        created_at=moment,
        updated_at=moment,
    )


@pytest.fixture
def sample_page(sample_blog: BlogResponse) -> BlogPage:
    return BlogPage(
        items=[sample_blog],
        pagination=Pagination(
            current_page=1,
            total_pages=1,
            total_blogs=1,
            has_next=False,
            has_prev=False,
        ),
    )


@pytest.fixture
def blog_service(sample_blog: BlogResponse, sample_page: BlogPage) -> MagicMock:
    """BlogService stand-in returning canned responses."""
    mock = MagicMock(spec=BlogService)
    mock.create = AsyncMock(return_value=sample_blog)
    mock.update = AsyncMock(return_value=sample_blog)
    mock.get = AsyncMock(return_value=sample_blog)
    mock.get_by_slug = AsyncMock(return_value=sample_blog)
    mock.list_blogs = AsyncMock(return_value=sample_page)
    mock.list_by_category = AsyncMock(return_value=sample_page)
    mock.delete = AsyncMock(return_value=None)
    return mock


@pytest.fixture
async def client(blog_service: MagicMock) -> AsyncGenerator[AsyncClient]:
    """Async client with the blog service dependency overridden."""
    app.dependency_overrides[get_blog_service] = lambda: blog_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def jpeg_bytes() -> bytes:
    img = Image.new("RGB", (64, 64), color="red")
    buffer = BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()
