"""Database session management."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import StorageUnavailableError
from db.pool import database_pool


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session from connection pool; 503 when no database is configured."""
    if not database_pool.is_available():
        raise StorageUnavailableError()

    session = await database_pool.get_session()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session as an async context manager.

    Commits on success, rolls back on exception, always closes the session.
    """
    session = await database_pool.get_session()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
