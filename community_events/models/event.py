"""
Event model for storing event information.
"""

from typing import ClassVar

from sqlalchemy import Column, DateTime, String, Text

from .base import Base, TimestampMixin, isoformat, new_id


class Event(Base, TimestampMixin):
    """
    Event model representing a hosted community activity.

    Attributes:
        id: Store-generated identifier
        name: Name of the event (max 100 characters)
        code: Unique 8-character sharing code
        date: When the event takes place
        location: Where the event takes place (max 200 characters)
        description: Optional free text (max 1000 characters)
        category: One of EventCategory values
        image: Path of the uploaded image, relative to the storage root
        owner_id: Id of the user who created the event
        created_at: Timestamp when the event was created
        updated_at: Timestamp when the event was last updated
    """

    __tablename__ = "events"

    id: ClassVar[Column] = Column(String(32), primary_key=True, default=new_id)
    name: ClassVar[Column] = Column(String(100), nullable=False)
    code: ClassVar[Column] = Column(String(8), nullable=False, unique=True, index=True)
    date: ClassVar[Column] = Column(DateTime(timezone=True), nullable=False, index=True)
    location: ClassVar[Column] = Column(String(200), nullable=False)
    description: ClassVar[Column] = Column(Text, nullable=False, default="")
    category: ClassVar[Column] = Column(String(32), nullable=False)
    image: ClassVar[Column] = Column(String(255), nullable=False)
    # Plain reference: the user directory lives outside this schema
    owner_id: ClassVar[Column] = Column(String(64), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, code='{self.code}', date={self.date})>"

    def to_dict(self) -> dict:
        """Convert event object to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "date": isoformat(self.date),
            "location": self.location,
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "owner": self.owner_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
