"""Health check endpoints for monitoring."""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from community_events.core.dependencies import get_db
from community_events.main_config import fastapi_config

router = APIRouter(
    prefix="/api",
    tags=["health"],
)


@router.get("/")
async def root():
    """API root endpoint."""
    return {
        "success": True,
        "message": fastapi_config.title,
        "version": fastapi_config.version,
        "docs": fastapi_config.docs_url,
    }


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_db)):
    """Health check endpoint; pings the database."""
    await session.execute(text("SELECT 1"))
    return {"success": True, "message": "healthy", "database": "ok"}
