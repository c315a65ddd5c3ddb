"""
Pydantic schemas package
"""

from .event import EventCreate, EventUpdate, describe_errors
from .event_join import JoinRequest

__all__ = ["EventCreate", "EventUpdate", "JoinRequest", "describe_errors"]
