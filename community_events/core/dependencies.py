"""
FastAPI dependency injection functions for infrastructure resources.

Both providers are overridable in tests through ``app.dependency_overrides``:

    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: ImageStorage(tmp_path)
"""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from community_events.main_config import storage_config

from .database import AsyncDBPool
from .storage import ImageStorage


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency for async database session.

    Provides a database session that automatically handles cleanup
    and rollback on errors.
    """
    async with AsyncDBPool.get_session() as session:
        yield session


def get_image_storage() -> ImageStorage:
    """FastAPI dependency for the configured image store."""
    return ImageStorage(
        root=storage_config.root_path,
        images_dir=storage_config.images_dir,
        max_bytes=storage_config.max_image_bytes,
    )
