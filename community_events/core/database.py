"""
Async SQLAlchemy connection pool and database session management.

One engine and sessionmaker are shared by the whole process. The FastAPI
lifespan initialises them at startup and disposes them at shutdown; request
handlers get a session per request through ``get_db``.

Usage:
    await AsyncDBPool.init(database_config)

    async with AsyncDBPool.get_session() as session:
        result = await session.execute(select(Event))
        events = result.scalars().all()
        await session.commit()

    await AsyncDBPool.dispose()
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from community_events.main_config import DatabaseConfig
from community_events.models import Base


class AsyncDBPool:
    """Async-only SQLAlchemy engine + session manager."""

    _engine: AsyncEngine | None = None
    _maker: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    async def init(
        cls,
        config: DatabaseConfig,
    ) -> None:
        """Initialize async engine and sessionmaker.

        Args:
            config: DatabaseConfig instance with credentials and pool settings
        """
        if cls._engine is not None:
            return  # already initialized

        # SQLite engines do not take queue-pool sizing arguments
        pool_kwargs = {}
        if not config.is_sqlite:
            pool_kwargs = {
                "pool_size": config.pool_size,
                "max_overflow": config.max_overflow,
                "pool_timeout": config.pool_timeout,
                "pool_recycle": config.pool_recycle,
            }

        cls._engine = create_async_engine(
            config.url,
            pool_pre_ping=config.pool_pre_ping,
            echo=config.echo,
            **pool_kwargs,
        )
        cls._maker = async_sessionmaker(cls._engine, expire_on_commit=False, class_=AsyncSession)

        if config.create_tables:
            await cls.create_all()

    @classmethod
    async def create_all(cls) -> None:
        """Create missing tables for all registered models."""
        if cls._engine is None:
            raise RuntimeError("AsyncDBPool not initialized. Call await AsyncDBPool.init() first.")
        async with cls._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @classmethod
    async def dispose(cls) -> None:
        """Dispose engine and clear session maker."""
        if cls._engine is not None:
            await cls._engine.dispose()
            cls._engine = None
            cls._maker = None

    @classmethod
    @asynccontextmanager
    async def get_session(cls) -> AsyncIterator[AsyncSession]:
        """Yield a session; rollback on exceptions.

        Raises:
            RuntimeError: If pool not initialized
        """
        if cls._maker is None:
            raise RuntimeError("AsyncDBPool not initialized. Call await AsyncDBPool.init() first.")

        async with cls._maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
