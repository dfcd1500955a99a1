"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Integer, Text, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from app.configs.settings import MAX_META_LENGTH, MAX_SLUG_LENGTH, MAX_TITLE_LENGTH


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class BlogDB(SQLModel, table=True):
    """
    Blog post table.

    ``slug`` carries a unique index: it is the store-side guarantee that
    two concurrent creates cannot both persist the same slug.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_category_published", "category_id", "published_date"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Blog title",
    )
    slug: str = Field(
        sa_column=Column(String(MAX_SLUG_LENGTH), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content",
    )
    cover_image_url: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Cover image URL (uploaded or external)",
    )
    read_time_minutes: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Estimated reading time in minutes (1-60)",
    )
    category_id: UUID = Field(
        sa_column=Column(
            "category_id",
            Uuid(),
            ForeignKey("categories.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        ),
        description="Category ID (foreign key to categories.id)",
    )
    meta_title: str = Field(
        sa_column=Column(String(MAX_META_LENGTH), nullable=False),
        description="SEO title",
    )
    meta_description: str = Field(
        sa_column=Column(String(MAX_META_LENGTH), nullable=False),
        description="SEO description",
    )

    # Posts with a future published_date are scheduled and hidden from listings
    published_date: datetime = Field(
        default_factory=_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Publication timestamp",
    )
    created_at: datetime = Field(
        default_factory=_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Hello, World!",
                "slug": "hello-world",
                "content": "First post.",
                "cover_image_url": "https://res.cloudinary.com/demo/image/upload/v1/blog_images/a.jpg",
                "read_time_minutes": 3,
                "category_id": "123e4567-e89b-12d3-a456-426614174000",
                "meta_title": "Hello, World!",
                "meta_description": "First post.",
            },
        },
    )
