"""User repository for database operations."""

from sqlalchemy.ext.asyncio import AsyncSession

from community_events.core.base_repository import BaseRepository
from community_events.models.user import User


class UserRepository(BaseRepository[User, str]):
    """Read access to the user directory, plus the import script's inserts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def find_by_email(self, email: str) -> User | None:
        return await self.get_by(email=email)
