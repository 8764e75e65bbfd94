"""SQLAlchemy models."""

from evently.models.event import Event
from evently.models.user import User

__all__ = [
    "User",
    "Event",
]
