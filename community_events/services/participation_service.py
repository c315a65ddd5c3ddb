"""
Participation service: users joining and leaving events.

A (user, event) pair is either joined or not. Joining a joined pair and
leaving an unjoined pair are both rejected; the composite unique constraint
on event_joins backs the pre-check when two joins race.
"""

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from community_events.core.dependencies import get_db
from community_events.core.exceptions import ConflictError, NotFoundError
from community_events.models.event_join import EventJoin
from community_events.repository.event_join_repository import EventJoinRepository, JoinedRow
from community_events.repository.event_repository import EventRepository
from community_events.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)

ALREADY_JOINED_MESSAGE = "You have already joined this event"


class ParticipationService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.joins = EventJoinRepository(session)
        self.events = EventRepository(session)
        self.users = UserRepository(session)

    async def join(self, user_id: str, event_id: str) -> EventJoin:
        """Record that a user joins an event.

        Raises:
            NotFoundError: Event or user does not exist
            ConflictError: The user already joined this event
        """
        if not await self.events.exists(event_id):
            raise NotFoundError(message="Event not found", detail={"event_id": event_id})
        if not await self.users.exists(user_id):
            raise NotFoundError(message="User not found", detail={"user_id": user_id})

        detail = {"user_id": user_id, "event_id": event_id}
        if await self.joins.is_joined(user_id, event_id):
            raise ConflictError(message=ALREADY_JOINED_MESSAGE, detail=detail)

        try:
            join = await self.joins.create(user_id=user_id, event_id=event_id)
            await self.joins.commit()
        except IntegrityError as exc:
            raise ConflictError(message=ALREADY_JOINED_MESSAGE, detail=detail) from exc

        logger.info("event_joined", user_id=user_id, event_id=event_id, join_id=join.id)
        return join

    async def leave(self, user_id: str, event_id: str) -> None:
        """Remove a user's join of an event.

        Raises:
            NotFoundError: The user has not joined this event
        """
        deleted = await self.joins.delete_pair(user_id, event_id)
        if not deleted:
            raise NotFoundError(
                message="You have not joined this event yet",
                detail={"user_id": user_id, "event_id": event_id},
            )
        await self.joins.commit()
        logger.info("event_left", user_id=user_id, event_id=event_id)

    async def list_joined_by_user(self, user_id: str) -> list[JoinedRow]:
        return await self.joins.list_for_user(user_id)

    async def is_joined(self, user_id: str, event_id: str) -> bool:
        return await self.joins.is_joined(user_id, event_id)


def get_participation_service(session: AsyncSession = Depends(get_db)) -> ParticipationService:
    """FastAPI dependency building a ParticipationService per request."""
    return ParticipationService(session)
