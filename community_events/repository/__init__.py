"""Repository layer for database operations.

This module contains concrete repository implementations for
data access operations.
"""

from .event_join_repository import EventJoinRepository
from .event_repository import EventRepository
from .user_repository import UserRepository

__all__ = ["EventJoinRepository", "EventRepository", "UserRepository"]
