"""
Event-related Pydantic schemas
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from community_events.core.enums import EventCategory

REQUIRED_CREATE_FIELDS = ("name", "code", "date", "location", "category", "owner_id")
CODE_LENGTH = 8


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def ensure_not_past(value: datetime) -> datetime:
    if value < datetime.now(UTC):
        raise ValueError("Event date must be in the future")
    return value


class EventCreate(BaseModel):
    """Schema for creating an event"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    code: str
    date: datetime
    location: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    category: EventCategory
    owner_id: str = Field(..., min_length=1, max_length=64)

    @field_validator("code")
    @classmethod
    def _code_length(cls, value: str) -> str:
        if len(value) != CODE_LENGTH:
            raise ValueError(f"Event code must be {CODE_LENGTH} characters")
        return value

    @field_validator("date")
    @classmethod
    def _date_in_future(cls, value: datetime) -> datetime:
        return ensure_not_past(as_utc(value))


class EventUpdate(BaseModel):
    """Schema for updating an event; code and owner are fixed at creation"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    date: datetime | None = None
    location: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    category: EventCategory | None = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


def describe_errors(exc: PydanticValidationError) -> tuple[str, dict]:
    """Turn a pydantic error into a one-line message plus JSON-safe detail."""
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors
    )
    return message, {"errors": errors}
