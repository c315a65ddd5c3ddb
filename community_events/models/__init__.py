"""
SQLAlchemy models for the community events application.
"""

from .base import Base
from .event import Event
from .event_join import EventJoin
from .user import User

__all__: list[str] = ["Base", "Event", "EventJoin", "User"]
