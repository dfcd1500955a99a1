"""Category lookups used while validating blog writes."""

from uuid import UUID

from app.repositories.category import CategoryRepository


def parse_uuid(value: str | UUID | None) -> UUID | None:
    """Parse ``value`` as a UUID, returning None when it is not one."""
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except ValueError:
        return None


class CategoryValidator:
    """Checks category references and resolves their display titles."""

    def __init__(self, repo: CategoryRepository) -> None:
        self.repo = repo

    async def exists(self, category_id: str | UUID | None) -> bool:
        """
        Check that ``category_id`` names an existing category.

        Malformed ids cannot name anything and are reported as missing.
        """
        parsed = parse_uuid(category_id)
        if parsed is None:
            return False
        return await self.repo.exists(parsed)

    async def titles(self, category_ids: set[UUID]) -> dict[UUID, str]:
        """Resolve display titles for the given categories."""
        return await self.repo.get_titles(category_ids)
