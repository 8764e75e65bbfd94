"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evently.api.dependencies import get_auth_service, get_current_user
from evently.api.envelope import EnvelopeRoute
from evently.models.user import User
from evently.schemas.auth import LoginResponse, UserLogin, UserRegister, UserResponse
from evently.schemas.common import MessageResponse
from evently.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"], route_class=EnvelopeRoute)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    return auth_service.register(user_data.name, user_data.email, user_data.password)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    return auth_service.login(credentials.email, credentials.password)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
