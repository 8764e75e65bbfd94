"""Pydantic schemas for API requests and responses."""

from evently.schemas.auth import LoginResponse, UserLogin, UserRegister, UserResponse
from evently.schemas.common import Envelope, ErrorResponse, MessageResponse, Meta
from evently.schemas.event import EventCreate, EventResponse, EventUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "LoginResponse",
    "UserResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "MessageResponse",
    "Envelope",
    "Meta",
    "ErrorResponse",
]
