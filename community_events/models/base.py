"""
Base declarative class and mixins for SQLAlchemy models.

Database connection logic lives in community_events.core.database.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    """Returns current UTC time with timezone awareness."""
    return datetime.now(UTC)


def new_id() -> str:
    """Store-generated identifier: 32 hex characters."""
    return uuid4().hex


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns to models.

    Usage:
        class MyModel(Base, TimestampMixin):
            __tablename__ = 'my_model'
            id = Column(String(32), primary_key=True, default=new_id)
    """

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
