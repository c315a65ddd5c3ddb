"""
Application lifespan management for FastAPI.

Startup opens the database pool (creating tables when configured) and makes
sure the image upload directory exists; shutdown disposes the pool.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from community_events.core.database import AsyncDBPool
from community_events.main_config import database_config, storage_config

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def app_lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events."""
    await AsyncDBPool.init(database_config)
    storage_config.images_path.mkdir(parents=True, exist_ok=True)
    logger.info(
        "application_started",
        sqlite=database_config.is_sqlite,
        images_path=str(storage_config.images_path),
    )

    yield

    await AsyncDBPool.dispose()
    logger.info("application_stopped")
