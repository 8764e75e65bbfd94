"""Event API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evently.api.dependencies import get_event_service
from evently.api.envelope import EnvelopeRoute
from evently.schemas.common import MessageResponse
from evently.schemas.event import EventCreate, EventResponse, EventUpdate
from evently.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"], route_class=EnvelopeRoute)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    event_data: EventCreate,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Create a new event."""
    return event_service.create(event_data)


@router.get("", response_model=list[EventResponse])
def get_events(
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Get all events."""
    return event_service.find_all()


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Get a single event."""
    return event_service.find_one(event_id)


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    event_data: EventUpdate,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Update an event. Omitted fields keep their current value."""
    return event_service.update(event_id, event_data)


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Delete an event."""
    return event_service.remove(event_id)
