"""Event service tests."""

from datetime import UTC, datetime
from unittest.mock import patch

import pytest
from sqlalchemy.orm import sessionmaker

from evently.exceptions import NotFoundError
from evently.models.event import Event
from evently.schemas.common import as_utc
from evently.schemas.event import EventCreate, EventUpdate
from evently.services.event_service import EventService


@pytest.fixture
def service(db):
    return EventService(db)


@pytest.fixture
def launch(service):
    return service.create(
        EventCreate(
            name="Launch",
            date="2025-01-01T10:00:00Z",
            description="Release party",
            place="Main Hall",
        )
    )


def test_create_then_find_one_round_trips(service, launch):
    """Test the stored record matches the input plus server fields."""
    found = service.find_one(launch.id)

    assert found.id == launch.id
    assert found.name == "Launch"
    assert as_utc(found.date) == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)
    assert found.description == "Release party"
    assert found.place == "Main Hall"
    assert found.created_at is not None
    assert found.updated_at is not None


def test_find_all_in_insertion_order(service, launch):
    """Test listing returns every event."""
    second = service.create(EventCreate(name="Second", date="2025-02-01T10:00:00Z"))

    assert [event.id for event in service.find_all()] == [launch.id, second.id]


def test_find_one_missing(service):
    """Test the not-found message names the id."""
    with pytest.raises(NotFoundError) as exc_info:
        service.find_one(999)
    assert exc_info.value.message == "Event with ID 999 not found"


def test_update_changes_only_given_field(service, launch):
    """Test partial update semantics and updated_at advancing."""
    before_updated_at = launch.updated_at
    before_created_at = launch.created_at

    updated = service.update(launch.id, EventUpdate(place="Rooftop"))

    assert updated.place == "Rooftop"
    assert updated.name == "Launch"
    assert updated.description == "Release party"
    assert as_utc(updated.date) == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)
    assert updated.created_at == before_created_at
    assert updated.updated_at > before_updated_at


def test_update_without_fields_still_advances_updated_at(service, launch):
    """Test that every update call bumps the timestamp."""
    before_updated_at = launch.updated_at

    updated = service.update(launch.id, EventUpdate())

    assert updated.updated_at > before_updated_at


def test_update_missing_creates_nothing(service, db):
    """Test updating an unknown id raises and leaves the table empty."""
    with pytest.raises(NotFoundError):
        service.update(999, EventUpdate(name="Ghost"))
    assert db.query(Event).count() == 0


def test_remove(service, launch, db):
    """Test delete returns a message and removes the row."""
    result = service.remove(launch.id)

    assert result == {"message": "Event deleted successfully"}
    assert db.query(Event).count() == 0


def test_remove_missing(service):
    """Test deleting an unknown id."""
    with pytest.raises(NotFoundError):
        service.remove(999)


def delete_elsewhere(db, event_id):
    """Delete a row through a separate session, as a concurrent request would."""
    other = sessionmaker(bind=db.get_bind())()
    try:
        other.query(Event).filter(Event.id == event_id).delete()
        other.commit()
    finally:
        other.close()


def test_update_after_concurrent_delete(service, launch, db):
    """Test a row removed between lookup and write is reported as not found."""
    delete_elsewhere(db, launch.id)

    with patch.object(service, "find_one", return_value=launch):
        with pytest.raises(NotFoundError) as exc_info:
            service.update(launch.id, EventUpdate(name="Renamed"))

    assert exc_info.value.message == f"Event with ID {launch.id} not found"
    assert db.query(Event).count() == 0


def test_remove_after_concurrent_delete(service, launch, db):
    """Test a delete that finds no row reports not found."""
    delete_elsewhere(db, launch.id)

    with patch.object(service, "find_one", return_value=launch):
        with pytest.raises(NotFoundError) as exc_info:
            service.remove(launch.id)

    assert exc_info.value.message == f"Event with ID {launch.id} not found"
