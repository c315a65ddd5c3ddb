"""Event repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from community_events.core.base_repository import BaseRepository
from community_events.models.event import Event


class EventRepository(BaseRepository[Event, str]):
    """Repository for Event entity operations.

    Every listing is sorted by event date, soonest first.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize EventRepository with database session.

        Args:
            session: Async SQLAlchemy session
        """
        super().__init__(Event, session)

    async def list_by_date(self) -> list[Event]:
        """All events ordered ascending by date."""
        result = await self.session.execute(select(self.model).order_by(self.model.date))
        return list(result.scalars().all())

    async def find_by_code(self, code: str) -> Event | None:
        return await self.get_by(code=code)

    async def code_exists(self, code: str) -> bool:
        result = await self.session.execute(select(self.model.id).where(self.model.code == code))
        return result.scalar_one_or_none() is not None

    async def list_by_owner(self, owner_id: str) -> list[Event]:
        """Events created by one user, ordered ascending by date."""
        return list(await self.filter(order_by="date", owner_id=owner_id))
