"""
Event service: create, read, update and delete events with their images.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from fastapi import Depends, UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from community_events.core.dependencies import get_db, get_image_storage
from community_events.core.exceptions import ConflictError, NotFoundError, ValidationError
from community_events.core.storage import ImageStorage
from community_events.main_config import EventsConfig, get_events_config
from community_events.models.event import Event
from community_events.repository.event_repository import EventRepository
from community_events.schemas.event import (
    REQUIRED_CREATE_FIELDS,
    EventCreate,
    EventUpdate,
    describe_errors,
    ensure_not_past,
)

logger = structlog.get_logger(__name__)

DUPLICATE_CODE_MESSAGE = "Event code already exists"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class EventService:
    """Business rules for events.

    The service owns the transaction: every write is committed here, and the
    image file is touched only around a successful commit (a new file before,
    an old file after).
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: ImageStorage,
        config: EventsConfig | None = None,
    ) -> None:
        self.session = session
        self.repo = EventRepository(session)
        self.storage = storage
        self.config = config or get_events_config()

    async def create(
        self, fields: Mapping[str, Any], image: UploadFile | None, owner_id: str | None
    ) -> Event:
        """Validate and persist a new event with its uploaded image.

        Raises:
            ValidationError: Missing field or image, or a field breaks a constraint
            ConflictError: Another event already uses the code
        """
        data = {key: value for key, value in fields.items() if value is not None}
        data["owner_id"] = owner_id

        missing = [name for name in REQUIRED_CREATE_FIELDS if _is_blank(data.get(name))]
        if missing:
            raise ValidationError(
                message="All required fields must be provided", detail={"missing": missing}
            )
        if not ImageStorage.is_provided(image):
            raise ValidationError(message="Event image is required")

        try:
            payload = EventCreate.model_validate(data)
        except PydanticValidationError as exc:
            message, detail = describe_errors(exc)
            raise ValidationError(message=message, detail=detail) from exc

        if await self.repo.code_exists(payload.code):
            raise ConflictError(message=DUPLICATE_CODE_MESSAGE, detail={"code": payload.code})

        image_path = await self.storage.save(image)
        try:
            event = await self.repo.create(
                **payload.model_dump(exclude={"category"}),
                category=payload.category.value,
                image=image_path,
            )
            await self.repo.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent create of the same code
            self.storage.delete(image_path)
            raise ConflictError(
                message=DUPLICATE_CODE_MESSAGE, detail={"code": payload.code}
            ) from exc

        logger.info("event_created", event_id=event.id, code=event.code, owner_id=event.owner_id)
        return event

    async def list_events(self) -> list[Event]:
        return await self.repo.list_by_date()

    async def get_by_id(self, event_id: str) -> Event:
        event = await self.repo.get_by_id(event_id)
        if event is None:
            raise NotFoundError(message="Event not found", detail={"event_id": event_id})
        return event

    async def get_by_code(self, code: str) -> Event:
        event = await self.repo.find_by_code(code)
        if event is None:
            raise NotFoundError(message="Event not found", detail={"code": code})
        return event

    async def list_by_owner(self, owner_id: str) -> list[Event]:
        return await self.repo.list_by_owner(owner_id)

    async def update(
        self, event_id: str, fields: Mapping[str, Any], image: UploadFile | None = None
    ) -> Event:
        """Apply the provided fields and optionally replace the image.

        Raises:
            NotFoundError: Unknown event id
            ValidationError: Nothing to update, or a provided field is invalid
        """
        event = await self.get_by_id(event_id)

        data = {key: value for key, value in fields.items() if value is not None}
        has_image = ImageStorage.is_provided(image)
        if not data and not has_image:
            raise ValidationError(message="No fields to update")

        try:
            payload = EventUpdate.model_validate(data)
            if payload.date is not None and self.config.validate_future_date_on_update:
                ensure_not_past(payload.date)
        except PydanticValidationError as exc:
            message, detail = describe_errors(exc)
            raise ValidationError(message=message, detail=detail) from exc
        except ValueError as exc:
            raise ValidationError(message=str(exc), detail={"field": "date"}) from exc

        changes = payload.model_dump(exclude_unset=True)
        if payload.category is not None:
            changes["category"] = payload.category.value

        previous_image = event.image
        if has_image:
            changes["image"] = await self.storage.save(image)

        event = await self.repo.update(event, **changes)
        await self.repo.commit()

        if has_image and previous_image != event.image:
            self.storage.delete(previous_image)

        logger.info("event_updated", event_id=event.id, fields=sorted(changes))
        return event

    async def delete(self, event_id: str) -> None:
        """Remove an event, then its image file (best-effort).

        Raises:
            NotFoundError: Unknown event id
        """
        event = await self.get_by_id(event_id)
        image_path = event.image

        deleted = await self.repo.delete(event_id)
        if not deleted:
            raise NotFoundError(message="Event not found", detail={"event_id": event_id})
        await self.repo.commit()

        self.storage.delete(image_path)
        logger.info("event_deleted", event_id=event_id)


def get_event_service(
    session: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
) -> EventService:
    """FastAPI dependency building an EventService per request."""
    return EventService(session, storage)
