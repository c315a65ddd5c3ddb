"""
EventJoin model: one row per user actively participating in an event.
"""

from typing import ClassVar

from sqlalchemy import Column, String, UniqueConstraint

from .base import Base, TimestampMixin, isoformat, new_id


class EventJoin(Base, TimestampMixin):
    """
    Participation record linking a user to an event.

    Neither reference is a foreign key: joins outlive a deleted event and
    resolve to no event afterwards.
    """

    __tablename__ = "event_joins"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_event_joins_user_event"),
    )

    id: ClassVar[Column] = Column(String(32), primary_key=True, default=new_id)
    user_id: ClassVar[Column] = Column(String(64), nullable=False, index=True)
    event_id: ClassVar[Column] = Column(String(32), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<EventJoin(user_id='{self.user_id}', event_id='{self.event_id}')>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user": self.user_id,
            "event": self.event_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
