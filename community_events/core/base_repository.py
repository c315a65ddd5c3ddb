"""
Generic repository base class for SQLAlchemy models with async CRUD operations.

Repositories only flush; the caller (a service) owns the transaction and
decides when to commit. Write failures roll the session back before the
error is re-raised so the session stays usable.

Usage:
    class UserRepository(BaseRepository[User, str]):
        async def find_by_email(self, email: str) -> User | None:
            return await self.get_by(email=email)

    repo = UserRepository(session)
    user = await repo.create(id="u1", username="ana")
    await session.commit()
"""

from abc import ABC
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

__all__ = ["BaseRepository"]

ModelType = TypeVar("ModelType")
IDType = TypeVar("IDType", int, str)


class BaseRepository(Generic[ModelType, IDType], ABC):
    """Base repository with async CRUD operations for SQLAlchemy models."""

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created instance

        Raises:
            IntegrityError: On unique/constraint violation (session rolled back)
        """
        try:
            instance = self.model(**kwargs)
            self.session.add(instance)
            await self.session.flush()
            await self.session.refresh(instance)
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        else:
            return instance

    async def get_by_id(self, id_: IDType) -> ModelType | None:
        """Get record by primary key."""
        result = await self.session.execute(select(self.model).where(self.model.id == id_))
        return result.scalar_one_or_none()

    async def get_by(self, **filters: Any) -> ModelType | None:
        """Get single record by field-value filters."""
        query = select(self.model)
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def filter(self, order_by: str | None = None, **filters: Any) -> Sequence[ModelType]:
        """Get records by filters.

        Args:
            order_by: Column name to sort ascending by
            **filters: Field-value pairs

        Returns:
            List of instances
        """
        query = select(self.model)

        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)

        if order_by:
            query = query.order_by(getattr(self.model, order_by))

        result = await self.session.execute(query)
        return result.scalars().all()

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """Apply field values to a loaded instance and flush them.

        Args:
            instance: Persistent instance to modify
            **kwargs: Fields to update

        Returns:
            The refreshed instance
        """
        try:
            for field, value in kwargs.items():
                setattr(instance, field, value)
            await self.session.flush()
            await self.session.refresh(instance)
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        else:
            return instance

    async def delete(self, id_: IDType) -> bool:
        """Delete record by primary key.

        Returns:
            True if a row was deleted
        """
        try:
            result = await self.session.execute(delete(self.model).where(self.model.id == id_))
            await self.session.flush()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        else:
            return result.rowcount > 0

    async def exists(self, id_: IDType) -> bool:
        """Check if a record with this primary key exists."""
        result = await self.session.execute(select(self.model.id).where(self.model.id == id_))
        return result.scalar_one_or_none() is not None

    async def commit(self) -> None:
        """Commit current transaction."""
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
