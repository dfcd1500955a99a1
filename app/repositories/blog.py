"""Blog repository for database operations."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Select, asc, desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute

from app.errors.database import DatabaseConnectionError
from app.models.blog import BlogDB
from app.monitoring import get_logger
from app.repositories.base import BaseRepository
from app.utils.helpers import utc_now

logger = get_logger(__name__)

# API sort names mapped to columns
SORT_COLUMNS: dict[str, Any] = {
    "publishedDate": BlogDB.published_date,
    "createdAt": BlogDB.created_at,
    "updatedAt": BlogDB.updated_at,
    "title": BlogDB.title,
    "readTimeMinutes": BlogDB.read_time_minutes,
}


@dataclass(frozen=True)
class BlogFilter:
    """
    Visibility filter for blog listings.

    ``published_before`` is pinned once per request so the page query and
    the count query gate on the same instant.
    """

    published_before: datetime
    category_id: UUID | None = None
    search: str | None = None


@dataclass(frozen=True)
class BlogSort:
    """Ordering for blog listings."""

    field: str = "publishedDate"
    descending: bool = True


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    Uniqueness of ``slug`` is enforced by the unique index on the table;
    ``slug_taken`` is only a pre-check that lets callers fail early.
    """

    model = BlogDB

    async def create(self, blog: BlogDB) -> BlogDB:
        """
        Persist a new blog post.

        Args:
            blog: Fully validated blog model

        Returns:
            BlogDB: Created blog with server-side state loaded

        Raises:
            DuplicateEntryError: If the slug is already taken
            DatabaseError: For other database errors
        """
        now = utc_now()
        blog.created_at = now
        blog.updated_at = now
        created = await self._flush_and_refresh(blog)
        logger.debug("Blog row inserted", blog_id=str(created.id), slug=created.slug)
        return created

    async def get_by_slug(self, slug: str) -> BlogDB | None:
        """
        Get blog by slug.

        Args:
            slug: Blog slug

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        result = await self._execute(select(BlogDB).where(BlogDB.slug == slug))
        return result.scalar_one_or_none()

    async def slug_taken(self, slug: str, exclude_id: UUID | None = None) -> bool:
        """
        Check whether another blog already uses ``slug``.

        Args:
            slug: Normalized slug
            exclude_id: Blog to ignore (the one being updated)

        Returns:
            bool: True if a different blog holds the slug
        """
        statement = select(1).where(BlogDB.slug == slug)
        if exclude_id is not None:
            statement = statement.where(BlogDB.id != exclude_id)

        result = await self._execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def find_many(
        self,
        blog_filter: BlogFilter,
        sort: BlogSort,
        skip: int,
        limit: int,
    ) -> list[BlogDB]:
        """
        Get one page of visible blogs.

        Args:
            blog_filter: Visibility filter
            sort: Requested ordering
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            list[BlogDB]: Blogs on the requested page
        """
        column: InstrumentedAttribute = SORT_COLUMNS[sort.field]
        direction = desc if sort.descending else asc
        statement = (
            self._filtered(select(BlogDB), blog_filter)
            # id breaks ties so pages don't overlap
            .order_by(direction(column), direction(BlogDB.id))
            .offset(skip)
            .limit(limit)
        )

        result = await self._execute(statement)
        return list(result.scalars().all())

    async def count(self, blog_filter: BlogFilter) -> int:
        """
        Count visible blogs, independent of paging.

        Args:
            blog_filter: Visibility filter

        Returns:
            int: Number of matching blogs
        """
        statement = self._filtered(select(func.count()).select_from(BlogDB), blog_filter)
        result = await self._execute(statement)
        return result.scalar() or 0

    async def update(self, blog: BlogDB, changes: dict[str, Any]) -> BlogDB:
        """
        Apply validated field changes to a blog.

        Args:
            blog: Loaded blog to modify
            changes: Column name to new value

        Returns:
            BlogDB: Updated blog

        Raises:
            DuplicateEntryError: If the new slug collides at write time
        """
        for key, value in changes.items():
            setattr(blog, key, value)
        blog.updated_at = utc_now()

        return await self._flush_and_refresh(blog)

    async def delete(self, blog: BlogDB) -> None:
        """
        Delete a loaded blog.

        Args:
            blog: Blog to delete
        """
        try:
            await self.session.delete(blog)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Failed to delete blog", blog_id=str(blog.id))
            raise DatabaseConnectionError(detail="Failed to delete blog") from e

    @staticmethod
    def _filtered(statement: Select, blog_filter: BlogFilter) -> Select:
        statement = statement.where(BlogDB.published_date <= blog_filter.published_before)

        if blog_filter.category_id is not None:
            statement = statement.where(BlogDB.category_id == blog_filter.category_id)

        if blog_filter.search:
            statement = statement.where(
                or_(
                    BlogDB.title.icontains(blog_filter.search, autoescape=True),
                    BlogDB.content.icontains(blog_filter.search, autoescape=True),
                ),
            )

        return statement
