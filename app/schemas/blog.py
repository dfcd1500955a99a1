"""
Blog schemas.

Request drafts keep every field optional: required-field and range
checks belong to the service layer, which reports them as
``BlogValidationError`` before touching the store. Responses use
camelCase keys.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.configs.settings import settings


class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class BlogCreate(CamelModel):
    """Blog creation input (before validation)."""

    title: str | None = None
    content: str | None = None
    read_time_minutes: int | None = None
    category_id: str | None = None
    slug: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published_date: datetime | None = None
    cover_image_url: str | None = Field(
        default=None,
        description="Direct cover image URL, used when no file is uploaded",
    )


class BlogUpdate(CamelModel):
    """Blog partial update input. Only fields that are set are applied."""

    title: str | None = None
    content: str | None = None
    read_time_minutes: int | None = None
    category_id: str | None = None
    slug: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published_date: datetime | None = None
    cover_image_url: str | None = None


@dataclass(frozen=True)
class ImageUpload:
    """Raw cover image bytes received with a request."""

    data: bytes
    content_type: str | None = None
    filename: str | None = None


class CategoryRef(CamelModel):
    """Category reference embedded in blog responses."""

    id: UUID
    title: str | None = None


class BlogResponse(CamelModel):
    """Blog post as returned to clients."""

    id: UUID
    title: str
    slug: str
    content: str
    cover_image_url: str
    read_time_minutes: int
    category_id: UUID
    category: CategoryRef
    meta_title: str
    meta_description: str
    published_date: datetime
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    """Pagination metadata for list responses."""

    current_page: int
    total_pages: int
    total_blogs: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class BlogListQuery:
    """
    Listing parameters as received from the caller.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size.
    category_id : str | None
        Optional category filter.
    search : str | None
        Optional case-insensitive substring matched against title or content.
    sort_by : str
        API name of the sort field.
    sort_order : str
        ``asc`` or ``desc``.
    """

    page: int = 1
    limit: int = settings.BLOG_DEFAULT_PAGE_SIZE
    category_id: str | None = None
    search: str | None = None
    sort_by: str = "publishedDate"
    sort_order: str = "desc"


@dataclass(frozen=True)
class BlogPage:
    """One page of blogs plus its pagination metadata."""

    items: list[BlogResponse]
    pagination: Pagination


class BlogEnvelope(CamelModel):
    """Response envelope for single-blog operations."""

    success: bool = True
    message: str | None = None
    data: BlogResponse | None = None


class BlogListEnvelope(CamelModel):
    """Response envelope for blog listings."""

    success: bool = True
    data: list[BlogResponse]
    pagination: Pagination


class MessageEnvelope(CamelModel):
    """Response envelope carrying only a message."""

    success: bool = True
    message: str


class ErrorEnvelope(CamelModel):
    """Response envelope for failures (documentation only)."""

    success: bool = False
    message: str
    error: str
