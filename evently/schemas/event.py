"""Event schemas."""

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from evently.schemas.common import as_utc, isoformat_utc


# Calendar date with separators, optionally followed by a time part
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}([T ].+)?$")


def _require_date_string(value: Any) -> Any:
    # Lax datetime parsing would read "1735725600" as a Unix timestamp
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and ISO_DATE_PATTERN.match(value):
        return value
    raise ValueError("must be a valid ISO 8601 date string")


class EventCreate(BaseModel):
    """Create a new event."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    date: datetime
    description: str | None = Field(None, max_length=2000)
    place: str | None = Field(None, max_length=255)

    @field_validator("date", mode="before")
    @classmethod
    def date_must_be_string(cls, value: Any) -> Any:
        return _require_date_string(value)

    @field_validator("date")
    @classmethod
    def date_to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class EventUpdate(BaseModel):
    """Update an event. Only the fields present in the request change."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=255)
    date: datetime | None = None
    description: str | None = Field(None, max_length=2000)
    place: str | None = Field(None, max_length=255)

    @field_validator("name", "date")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        # Only runs for fields the client actually sent.
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def date_must_be_string(cls, value: Any) -> Any:
        if value is None:
            return value
        return _require_date_string(value)

    @field_validator("date")
    @classmethod
    def date_to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class EventResponse(BaseModel):
    """Event response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    date: datetime
    description: str | None
    place: str | None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @field_serializer("date", "created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return isoformat_utc(value)
