"""Shared response shapes and timestamp formatting."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def isoformat_utc(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class Meta(BaseModel):
    """Metadata attached to every successful response."""

    correlation_id: str | None = Field(serialization_alias="correlationId")
    timestamp: str


class Envelope(BaseModel):
    """Successful response wrapper: ``{data, meta}``."""

    data: Any
    meta: Meta


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers."""

    status_code: int = Field(serialization_alias="statusCode")
    message: str | list[str]
    error: str
