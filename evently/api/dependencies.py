"""FastAPI dependencies for authentication, services and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from evently.config import Settings
from evently.database import get_db
from evently.exceptions import UnauthorizedError
from evently.models.user import User
from evently.services.auth import AuthService, PasswordHasher, TokenIssuer
from evently.services.event_service import EventService

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, hasher, tokens)


def get_event_service(
    db: Annotated[Session, Depends(get_db)],
) -> EventService:
    """Get event service with dependencies."""
    return EventService(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return auth_service.get_current_user(credentials.credentials)
