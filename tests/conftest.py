"""Shared fixtures: a throwaway SQLite database, image storage and API client."""

from collections.abc import AsyncIterator

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from community_events.core.dependencies import get_db, get_image_storage
from community_events.core.storage import ImageStorage
from community_events.main import app
from community_events.main_config import EventsConfig
from community_events.models import Base
from community_events.repository import UserRepository
from community_events.services import EventService, ParticipationService


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def session_maker(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'events.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest.fixture
async def session(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def users(session_maker) -> list[str]:
    """Seed the user directory with an owner (U1) and a participant (U2)."""
    async with session_maker() as session:
        repo = UserRepository(session)
        await repo.create(id="U1", username="olive", email="olive@example.com", role="host")
        await repo.create(id="U2", username="pat", email="pat@example.com")
        await session.commit()
    return ["U1", "U2"]


@pytest.fixture
def storage(tmp_path) -> ImageStorage:
    return ImageStorage(tmp_path / "media", "uploads/events", max_bytes=1024)


@pytest.fixture
def event_service(session, storage) -> EventService:
    return EventService(session, storage, EventsConfig(validate_future_date_on_update=False))


@pytest.fixture
def participation_service(session) -> ParticipationService:
    return ParticipationService(session)


@pytest.fixture
async def client(session_maker, storage) -> AsyncIterator[httpx.AsyncClient]:
    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: storage

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
