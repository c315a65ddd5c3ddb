"""EventService behaviour against a real SQLite database."""

import pytest

from community_events.core.exceptions import ConflictError, NotFoundError, ValidationError
from community_events.main_config import EventsConfig
from community_events.services import EventService

from .factories import event_fields, in_days, make_image

pytestmark = pytest.mark.anyio


async def test_create_then_get_returns_same_event(event_service: EventService, storage) -> None:
    created = await event_service.create(event_fields(), make_image(), owner_id="U1")

    by_id = await event_service.get_by_id(created.id)
    by_code = await event_service.get_by_code("ABCD1234")

    assert by_id.to_dict() == created.to_dict()
    assert by_code.id == created.id
    assert created.category == "Cleaning"
    assert created.owner_id == "U1"
    assert created.image.startswith("uploads/events/")
    assert storage.resolve(created.image).exists()


async def test_create_strips_whitespace(event_service: EventService) -> None:
    event = await event_service.create(
        event_fields(name="  Beach Cleanup  ", location=" Pier "), make_image(), owner_id="U1"
    )

    assert event.name == "Beach Cleanup"
    assert event.location == "Pier"


async def test_duplicate_code_is_rejected(event_service: EventService) -> None:
    await event_service.create(event_fields(), make_image(), owner_id="U1")

    with pytest.raises(ConflictError) as exc_info:
        await event_service.create(event_fields(name="Other"), make_image(), owner_id="U2")

    assert exc_info.value.message == "Event code already exists"
    assert exc_info.value.status_code == 400


async def test_code_race_removes_orphan_image(
    event_service: EventService, storage, monkeypatch
) -> None:
    await event_service.create(event_fields(), make_image(), owner_id="U1")

    async def code_is_free(code: str) -> bool:
        return False

    monkeypatch.setattr(event_service.repo, "code_exists", code_is_free)

    with pytest.raises(ConflictError):
        await event_service.create(event_fields(), make_image(), owner_id="U2")

    assert len(list(storage.directory.iterdir())) == 1
    assert len(await event_service.list_events()) == 1


async def test_past_date_is_rejected(event_service: EventService, storage) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await event_service.create(event_fields(date=in_days(-1)), make_image(), owner_id="U1")

    assert "Event date must be in the future" in exc_info.value.message
    assert not storage.directory.exists()


async def test_unknown_category_is_rejected(event_service: EventService) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await event_service.create(event_fields(category="Sports"), make_image(), owner_id="U1")

    assert exc_info.value.message.startswith("category:")


@pytest.mark.parametrize("code", ["ABC", "ABCD12345"])
async def test_code_must_be_eight_characters(event_service: EventService, code: str) -> None:
    with pytest.raises(ValidationError, match="8 characters"):
        await event_service.create(event_fields(code=code), make_image(), owner_id="U1")


async def test_missing_fields_are_listed(event_service: EventService) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await event_service.create(
            event_fields(name="", location=None), make_image(), owner_id=None
        )

    assert exc_info.value.message == "All required fields must be provided"
    assert exc_info.value.error_detail == {"missing": ["name", "location", "owner_id"]}


async def test_missing_image_is_rejected(event_service: EventService) -> None:
    with pytest.raises(ValidationError, match="Event image is required"):
        await event_service.create(event_fields(), None, owner_id="U1")


async def test_list_events_orders_by_date(event_service: EventService) -> None:
    for code, days in (("LATE0003", 3), ("SOON0001", 1), ("MIDD0002", 2)):
        await event_service.create(
            event_fields(code=code, date=in_days(days)), make_image(), owner_id="U1"
        )

    events = await event_service.list_events()

    assert [event.code for event in events] == ["SOON0001", "MIDD0002", "LATE0003"]


async def test_list_by_owner(event_service: EventService) -> None:
    await event_service.create(event_fields(code="OWNED001"), make_image(), owner_id="U1")
    await event_service.create(event_fields(code="OTHER001"), make_image(), owner_id="U2")

    owned = await event_service.list_by_owner("U1")

    assert [event.code for event in owned] == ["OWNED001"]
    assert await event_service.list_by_owner("nobody") == []


async def test_get_unknown_event_raises_not_found(event_service: EventService) -> None:
    with pytest.raises(NotFoundError):
        await event_service.get_by_id("missing")
    with pytest.raises(NotFoundError):
        await event_service.get_by_code("ZZZZ9999")


async def test_update_changes_only_given_fields(event_service: EventService) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")

    updated = await event_service.update(
        event.id, {"name": "Harbour Cleanup", "category": "Tree Planting", "location": None}
    )

    assert updated.name == "Harbour Cleanup"
    assert updated.category == "Tree Planting"
    assert updated.location == "Pier"
    assert updated.code == "ABCD1234"


async def test_update_replaces_image(event_service: EventService, storage) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")
    old_path = storage.resolve(event.image)

    new_image = make_image("new.jpg", content_type="image/jpeg")
    updated = await event_service.update(event.id, {}, image=new_image)

    assert updated.image.endswith(".jpg")
    assert storage.resolve(updated.image).exists()
    assert not old_path.exists()


async def test_update_without_changes_is_rejected(event_service: EventService) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")

    with pytest.raises(ValidationError, match="No fields to update"):
        await event_service.update(event.id, {"name": None})


async def test_update_invalid_category_is_rejected(event_service: EventService) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")

    with pytest.raises(ValidationError):
        await event_service.update(event.id, {"category": "Sports"})


async def test_update_unknown_event_raises_not_found(event_service: EventService) -> None:
    with pytest.raises(NotFoundError):
        await event_service.update("missing", {"name": "x"})


async def test_update_past_date_allowed_by_default(event_service: EventService) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")

    updated = await event_service.update(event.id, {"date": in_days(-2)})

    assert updated.id == event.id


async def test_update_past_date_rejected_when_enabled(session, storage) -> None:
    service = EventService(session, storage, EventsConfig(validate_future_date_on_update=True))
    event = await service.create(event_fields(), make_image(), owner_id="U1")

    with pytest.raises(ValidationError, match="Event date must be in the future"):
        await service.update(event.id, {"date": in_days(-2)})


async def test_delete_removes_event_and_image(event_service: EventService, storage) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")
    image_path = storage.resolve(event.image)

    await event_service.delete(event.id)

    assert not image_path.exists()
    with pytest.raises(NotFoundError):
        await event_service.get_by_id(event.id)
    with pytest.raises(NotFoundError):
        await event_service.delete(event.id)


async def test_delete_succeeds_when_image_removal_fails(
    event_service: EventService, storage, monkeypatch
) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")

    def refuse(path):
        raise PermissionError(f"read-only: {path}")

    monkeypatch.setattr(storage, "_remove", refuse)

    await event_service.delete(event.id)

    assert await event_service.list_events() == []


async def test_update_succeeds_when_old_image_removal_fails(
    event_service: EventService, session_maker, storage, monkeypatch
) -> None:
    event = await event_service.create(event_fields(), make_image(), owner_id="U1")
    old_image = event.image

    def refuse(path):
        raise PermissionError(f"read-only: {path}")

    monkeypatch.setattr(storage, "_remove", refuse)

    updated = await event_service.update(event.id, {}, image=make_image("after.jpg"))

    assert updated.image != old_image
    assert updated.image.endswith(".jpg")
    assert storage.resolve(updated.image).exists()
    async with session_maker() as other_session:
        stored = await EventService(other_session, storage).get_by_id(event.id)
    assert stored.image == updated.image
