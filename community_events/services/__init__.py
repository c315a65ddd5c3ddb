"""
Service layer: business rules over the repositories.
"""

from .event_service import EventService, get_event_service
from .participation_service import ParticipationService, get_participation_service

__all__ = [
    "EventService",
    "ParticipationService",
    "get_event_service",
    "get_participation_service",
]
