# tests/services/conftest.py
"""Pytest fixtures for services tests."""

from collections.abc import Callable
from datetime import UTC, datetime
from io import BytesIO
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest
from PIL import Image

from app.models import BlogDB
from app.repositories import BlogRepository
from app.schemas import ImageUpload
from app.services import BlogService, CategoryValidator, MediaService
from app.services.storage.base import AssetStore

MANAGED_URL = "https://res.cloudinary.com/demo/image/upload/v1/blog_images/new.jpg"
OLD_MANAGED_URL = "https://res.cloudinary.com/demo/image/upload/v1/blog_images/old.jpg"
EXTERNAL_URL = "https://images.example.com/cover.jpg"


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def category_id() -> UUID:
    return uuid4()


@pytest.fixture
def valid_jpeg_bytes() -> bytes:
    """Create valid JPEG image bytes."""
    img = Image.new("RGB", (200, 200), color="red")
    buffer = BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def valid_png_bytes() -> bytes:
    """Create valid PNG image bytes."""
    img = Image.new("RGBA", (200, 200), color="blue")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def image(valid_jpeg_bytes: bytes) -> ImageUpload:
    return ImageUpload(data=valid_jpeg_bytes, content_type="image/jpeg", filename="cover.jpg")


@pytest.fixture
def make_blog(category_id: UUID, now: datetime) -> Callable[..., BlogDB]:
    """Factory for stored blog rows."""

    def _make(**overrides: Any) -> BlogDB:
        fields: dict[str, Any] = {
            "id": uuid4(),
            "title": "Hello, World!",
            "slug": "hello-world",
            "content": "First post.",
            "cover_image_url": OLD_MANAGED_URL,
            "read_time_minutes": 3,
            "category_id": category_id,
            "meta_title": "Hello, World!",
            "meta_description": "First post.",
            "published_date": now,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return BlogDB(**fields)

    return _make


@pytest.fixture
def blogs() -> MagicMock:
    """Blog repository fake whose writes echo their input."""

    async def _update(blog: BlogDB, changes: dict[str, Any]) -> BlogDB:
        for key, value in changes.items():
            setattr(blog, key, value)
        return blog

    mock = MagicMock(spec=BlogRepository)
    mock.create = AsyncMock(side_effect=lambda blog: blog)
    mock.update = AsyncMock(side_effect=_update)
    mock.delete = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=None)
    mock.get_by_slug = AsyncMock(return_value=None)
    mock.slug_taken = AsyncMock(return_value=False)
    mock.find_many = AsyncMock(return_value=[])
    mock.count = AsyncMock(return_value=0)
    mock.commit = AsyncMock()
    return mock


@pytest.fixture
def categories(category_id: UUID) -> MagicMock:
    mock = MagicMock(spec=CategoryValidator)
    mock.exists = AsyncMock(return_value=True)
    mock.titles = AsyncMock(return_value={category_id: "Travel"})
    return mock


@pytest.fixture
def media() -> MagicMock:
    mock = MagicMock(spec=MediaService)
    mock.upload_cover_image = AsyncMock(return_value=MANAGED_URL)
    mock.release = AsyncMock(return_value=True)
    mock.is_managed = MagicMock(side_effect=lambda url: bool(url) and "cloudinary" in url)
    return mock


@pytest.fixture
def service(
    blogs: MagicMock,
    categories: MagicMock,
    media: MagicMock,
    now: datetime,
) -> BlogService:
    return BlogService(blogs=blogs, categories=categories, media=media, clock=lambda: now)


@pytest.fixture
def storage() -> MagicMock:
    """Asset store fake."""
    mock = MagicMock(spec=AssetStore)
    mock.store = AsyncMock(return_value=MANAGED_URL)
    mock.delete = AsyncMock(return_value=True)
    mock.owns = MagicMock(side_effect=lambda url: "cloudinary" in url)
    return mock
