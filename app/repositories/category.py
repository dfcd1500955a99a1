"""Category repository (read-only)."""

from uuid import UUID

from sqlalchemy import select

from app.models.category import CategoryDB
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    """Read access to categories referenced by blogs."""

    model = CategoryDB

    async def get_titles(self, category_ids: set[UUID]) -> dict[UUID, str]:
        """
        Resolve display titles for a set of categories in one query.

        Args:
            category_ids: Category UUIDs

        Returns:
            dict[UUID, str]: Title per found category
        """
        if not category_ids:
            return {}

        statement = select(CategoryDB.id, CategoryDB.title).where(
            CategoryDB.id.in_(category_ids),  # pyrefly: ignore [missing-attribute]
        )
        result = await self._execute(statement)
        return {row.id: row.title for row in result.all()}
