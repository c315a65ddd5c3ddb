"""Join / forfeit routes and joined-event queries."""

from fastapi import APIRouter, Depends

from community_events.schemas.event_join import JoinRequest
from community_events.services.participation_service import (
    ParticipationService,
    get_participation_service,
)

router = APIRouter(
    prefix="/api",
    tags=["event-joins"],
)


@router.post("/join-event", status_code=201)
async def join_event(
    request: JoinRequest, service: ParticipationService = Depends(get_participation_service)
):
    """Join an event."""
    join = await service.join(request.user_id, request.event_id)
    return {"success": True, "message": "Successfully joined the event", "join": join.to_dict()}


@router.delete("/forfeit-event")
async def forfeit_event(
    request: JoinRequest, service: ParticipationService = Depends(get_participation_service)
):
    """Leave a previously joined event."""
    await service.leave(request.user_id, request.event_id)
    return {"success": True, "message": "Successfully forfeited from the event"}


@router.get("/joined/{user_id}")
async def list_joined_events(
    user_id: str, service: ParticipationService = Depends(get_participation_service)
):
    """List a user's joins with the event and user resolved.

    An event deleted after the join comes back as ``null``.
    """
    rows = await service.list_joined_by_user(user_id)
    joined_events = [
        {
            **join.to_dict(),
            "event": event.to_dict() if event else None,
            "user": user.to_summary_dict() if user else None,
        }
        for join, event, user in rows
    ]
    return {
        "success": True,
        "message": "Joined events fetched successfully",
        "joinedEvents": joined_events,
    }


@router.get("/joined/{user_id}/{event_id}")
async def check_joined(
    user_id: str,
    event_id: str,
    service: ParticipationService = Depends(get_participation_service),
):
    """Whether the user has joined the event."""
    joined = await service.is_joined(user_id, event_id)
    return {"success": True, "message": "Join status retrieved", "joined": joined}
