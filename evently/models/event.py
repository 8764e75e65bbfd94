"""Event model."""

from sqlalchemy import Column, DateTime, Integer, String

from evently.database import Base
from evently.models.mixins import TimestampMixin


class Event(Base, TimestampMixin):
    """A scheduled event with an optional description and place."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    description = Column(String, nullable=True)
    place = Column(String(255), nullable=True)
