"""
Join/leave request schema
"""

from pydantic import BaseModel, ConfigDict, Field


class JoinRequest(BaseModel):
    """Body of join-event and forfeit-event: ``{userId, eventId}``"""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    event_id: str = Field(..., alias="eventId", min_length=1)
