"""Event routes for CRUD operations.

Create and update take multipart form data so the image can travel with
the fields.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from community_events.services.event_service import EventService, get_event_service

router = APIRouter(
    prefix="/api",
    tags=["events"],
)


@router.post("/event", status_code=201)
async def create_event(
    name: str | None = Form(None),
    code: str | None = Form(None),
    date: str | None = Form(None),
    location: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    user: str | None = Form(None, description="Id of the creating user"),
    owner: str | None = Form(None, description="Accepted in place of user"),
    image: UploadFile | None = File(None),
    service: EventService = Depends(get_event_service),
):
    """Create a new event with its image."""
    fields = {
        "name": name,
        "code": code,
        "date": date,
        "location": location,
        "description": description,
        "category": category,
    }
    event = await service.create(fields, image=image, owner_id=user or owner)
    return {"success": True, "message": "Event created successfully", "event": event.to_dict()}


@router.get("/events")
async def list_events(service: EventService = Depends(get_event_service)):
    """Get all events, soonest first."""
    events = await service.list_events()
    return {
        "success": True,
        "message": "All events retrieved successfully",
        "events": [event.to_dict() for event in events],
    }


@router.get("/events/user/{user_id}")
async def list_events_by_owner(user_id: str, service: EventService = Depends(get_event_service)):
    """Get the events a user created."""
    events = await service.list_by_owner(user_id)
    return {
        "success": True,
        "message": "Events retrieved",
        "events": [event.to_dict() for event in events],
    }


@router.get("/events/{event_id}")
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Get a specific event by ID."""
    event = await service.get_by_id(event_id)
    return {"success": True, "message": "Event retrieved", "event": event.to_dict()}


@router.get("/event/code/{code}")
async def get_event_by_code(code: str, service: EventService = Depends(get_event_service)):
    """Get a specific event by its sharing code."""
    event = await service.get_by_code(code)
    return {"success": True, "message": "Event retrieved", "event": event.to_dict()}


@router.put("/event/{event_id}")
async def update_event(
    event_id: str,
    name: str | None = Form(None),
    date: str | None = Form(None),
    location: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    image: UploadFile | None = File(None),
    service: EventService = Depends(get_event_service),
):
    """Update an existing event; only provided fields change."""
    fields = {
        "name": name,
        "date": date,
        "location": location,
        "description": description,
        "category": category,
    }
    event = await service.update(event_id, fields, image=image)
    return {"success": True, "message": "Event updated successfully", "event": event.to_dict()}


@router.delete("/event/{event_id}")
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Delete an event and its image."""
    await service.delete(event_id)
    return {"success": True, "message": "Event deleted successfully"}
