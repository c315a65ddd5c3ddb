"""EventJoin repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from community_events.core.base_repository import BaseRepository
from community_events.models.event import Event
from community_events.models.event_join import EventJoin
from community_events.models.user import User

JoinedRow = tuple[EventJoin, Event | None, User | None]


class EventJoinRepository(BaseRepository[EventJoin, str]):
    """Repository for participation records keyed by (user, event)."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(EventJoin, session)

    async def is_joined(self, user_id: str, event_id: str) -> bool:
        result = await self.session.execute(
            select(self.model.id)
            .where(self.model.user_id == user_id)
            .where(self.model.event_id == event_id)
        )
        return result.scalar_one_or_none() is not None

    async def delete_pair(self, user_id: str, event_id: str) -> bool:
        """Delete the join for a (user, event) pair.

        Returns:
            True if a row was deleted
        """
        try:
            result = await self.session.execute(
                delete(self.model)
                .where(self.model.user_id == user_id)
                .where(self.model.event_id == event_id)
            )
            await self.session.flush()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        else:
            return result.rowcount > 0

    async def list_for_user(self, user_id: str) -> list[JoinedRow]:
        """Joins of a user with their event and user resolved.

        Outer joins keep a row whose event (or user) no longer exists; the
        missing side comes back as None.

        Args:
            user_id: User whose joins to list

        Returns:
            (join, event, user) tuples ordered by join time
        """
        query = (
            select(EventJoin, Event, User)
            .outerjoin(Event, Event.id == EventJoin.event_id)
            .outerjoin(User, User.id == EventJoin.user_id)
            .where(EventJoin.user_id == user_id)
            .order_by(EventJoin.created_at)
        )
        result = await self.session.execute(query)
        return [(join, event, user) for join, event, user in result.all()]
