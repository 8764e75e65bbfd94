"""Event service for CRUD operations."""

import logging

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from evently.exceptions import NotFoundError
from evently.models.event import Event
from evently.schemas.event import EventCreate, EventUpdate

logger = logging.getLogger(__name__)


class EventService:
    """Service for event-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, event_data: EventCreate) -> Event:
        """Persist a new event; id and timestamps are assigned here."""
        event = Event(**event_data.model_dump())
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        logger.info(f"Created event {event.id}")
        return event

    def find_all(self) -> list[Event]:
        """All events in insertion order."""
        return self.db.query(Event).order_by(Event.id).all()

    def find_one(self, event_id: int) -> Event:
        """Get an event or raise NotFoundError."""
        event = self.db.query(Event).filter(Event.id == event_id).first()
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    def update(self, event_id: int, event_data: EventUpdate) -> Event:
        """Apply only the fields present in ``event_data``."""
        event = self.find_one(event_id)

        for field, value in event_data.model_dump(exclude_unset=True).items():
            setattr(event, field, value)
        event.touch()

        try:
            self.db.commit()
        except StaleDataError:
            # Deleted by another request after the lookup above
            self.db.rollback()
            raise NotFoundError(f"Event with ID {event_id} not found") from None
        self.db.refresh(event)
        return event

    def remove(self, event_id: int) -> dict[str, str]:
        """Delete an event and return a confirmation message."""
        self.find_one(event_id)
        deleted = self.db.query(Event).filter(Event.id == event_id).delete()
        if not deleted:
            # Deleted by another request after the lookup above
            self.db.rollback()
            raise NotFoundError(f"Event with ID {event_id} not found")
        self.db.commit()
        logger.info(f"Deleted event {event_id}")
        return {"message": "Event deleted successfully"}
