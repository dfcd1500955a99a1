"""Base repository for database operations."""

from re import compile as re_compile
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Executable, Result, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import DatabaseConnectionError, DatabaseError, DuplicateEntryError
from app.monitoring import get_logger

logger = get_logger(__name__)

_CONSTRAINT_IN_MESSAGE = re_compile(r'constraint "([^"]+)"')

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Shared plumbing for entity repositories.

    Every statement goes through ``_execute`` and every write through
    ``_flush_and_refresh`` so driver exceptions surface as
    ``DatabaseError`` subclasses instead of leaking SQLAlchemy types.

    Attributes:
        model: The SQLModel database model type.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its primary key.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self.model.id == record_id)
        result = await self._execute(statement)
        return result.scalar_one_or_none()

    async def exists(self, record_id: UUID) -> bool:
        """Check if a record exists without loading it."""
        statement = select(1).where(self.model.id == record_id).limit(1)
        result = await self._execute(statement)
        return result.scalar_one_or_none() is not None

    async def _execute(self, statement: Executable) -> Result[Any]:
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.exception("Database query failed", model=self.model.__name__)
            raise DatabaseConnectionError(detail="Database query failed") from e

    async def commit(self) -> None:
        """
        Commit the session's pending changes.

        Raises:
            DatabaseConnectionError: If the commit fails; the session is
                rolled back
        """
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Commit failed", model=self.model.__name__)
            raise DatabaseConnectionError(detail="Failed to save changes") from e

    async def _flush_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record, flush it and reload server-side state.

        Args:
            record: Record to persist

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
            DatabaseConnectionError: For any other driver failure
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            logger.warning("Integrity error on write", model=self.model.__name__, error=error_msg)
            lowered = error_msg.lower()
            if "unique" in lowered or "duplicate" in lowered:
                raise DuplicateEntryError(constraint=_constraint_name(e, error_msg)) from e
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Failed to save record", model=self.model.__name__)
            raise DatabaseConnectionError(detail="Failed to save record") from e


def _constraint_name(error: IntegrityError, message: str) -> str | None:
    # asyncpg exposes the violated constraint on the original exception
    orig = getattr(error.orig, "__cause__", None) or error.orig
    if name := getattr(orig, "constraint_name", None):
        return name
    match = _CONSTRAINT_IN_MESSAGE.search(message)
    return match.group(1) if match else None
