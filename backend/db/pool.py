"""Database connection pool management."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from core.config import Settings, settings as default_settings
from db.models import Base


class DatabasePool:
    """Singleton database connection pool manager."""

    _instance: Optional["DatabasePool"] = None
    _engine: Optional[AsyncEngine] = None
    _session_factory: Optional[async_sessionmaker] = None
    _logger = logging.getLogger(__name__)

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(DatabasePool, cls).__new__(cls)
        return cls._instance

    @classmethod
    async def setup(cls, settings: Optional[Settings] = None, logger=None):
        """Create the engine and session factory, then make sure tables exist."""
        settings = settings or default_settings
        if logger is not None:
            cls._logger = logger

        if cls._engine is not None:
            cls._logger.warning("Attempt to reinitialize database pool")
            return

        url = settings.database_url
        engine_kwargs = {"echo": settings.database_echo, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                poolclass=AsyncAdaptedQueuePool,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
                pool_timeout=settings.database_pool_timeout,
                pool_recycle=settings.database_pool_recycle,
            )

        engine = create_async_engine(url, **engine_kwargs)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except BaseException:
            # Includes cancellation by the startup timeout
            await engine.dispose()
            raise

        cls._engine = engine
        cls._session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        cls._logger.info(f"Database pool created successfully - backend={engine.dialect.name}")

    @classmethod
    def is_available(cls) -> bool:
        return cls._session_factory is not None

    @classmethod
    async def get_session(cls) -> AsyncSession:
        """Get a database session from the pool."""
        if not cls._session_factory:
            cls._logger.error("Database pool has not been initialized")
            raise RuntimeError("Database pool has not been initialized. Call setup() first.")

        return cls._session_factory()

    @classmethod
    async def close(cls):
        """Close the database connection pool."""
        if not cls._engine:
            return

        try:
            await cls._engine.dispose()
            cls._logger.info("Database pool closed successfully")
        finally:
            cls._engine = None
            cls._session_factory = None


# Global database pool instance
database_pool = DatabasePool()
