"""Category database model.

Categories are managed by another part of the system; blogs only
reference them and read their titles.
"""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class CategoryDB(SQLModel, table=True):
    """Category table."""

    __tablename__ = cast("declared_attr[str]", "categories")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    title: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False),
        description="Display title",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
