"""
Database initialization and verification script.

Run with ``python -m app.db.init_db`` to create missing tables on a
development database. Production schema is managed by Alembic
(``alembic upgrade head``).
"""

from asyncio import run as asyncio_run
from time import perf_counter

from app.db.database import close_db, init_db
from app.errors.database import DatabaseInitializationError
from app.monitoring import configure_logging, get_logger
from app.utils.helpers import time_taken

logger = get_logger(__name__)


async def main() -> None:
    """Create tables and release the pool."""
    try:
        logger.info("Initializing database...")
        start = perf_counter()
        await init_db()
        logger.info("Database ready!", took=time_taken(start))
    except Exception as e:
        logger.exception("Failed to initialize database")
        raise DatabaseInitializationError from e
    finally:
        await close_db()


if __name__ == "__main__":
    configure_logging()
    asyncio_run(main())
