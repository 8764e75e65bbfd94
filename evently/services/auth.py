"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evently.config import Settings
from evently.exceptions import ConflictError, UnauthorizedError
from evently.models.user import User
from evently.schemas.auth import UserResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class PasswordHasher:
    """Salted one-way password hashing (bcrypt)."""

    def __init__(self, rounds: int = 10):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self.context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self.context.verify(password, hashed_password)


class TokenIssuer:
    """Signs and verifies time-bound bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration_minutes = expiration_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, user_id: int, email: str) -> str:
        """Create a JWT access token."""
        expire = datetime.now(UTC) + timedelta(minutes=self.expiration_minutes)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a JWT token."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None


class AuthService:
    """Registration, login and bearer-token resolution."""

    def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenIssuer):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def register(self, name: str, email: str, password: str) -> dict[str, str]:
        """Create a new user. No token is issued."""
        if self.get_user_by_email(email):
            raise ConflictError("User already exists")

        user = User(name=name, email=email, password_hash=self.hasher.hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists") from None

        logger.info(f"Registered user {user.id}")
        return {"message": "User registered successfully"}

    def validate_user(self, email: str, password: str) -> UserResponse | None:
        """Return the user without its password hash, or None on any mismatch."""
        user = self.get_user_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            return None
        return UserResponse.model_validate(user)

    def login(self, email: str, password: str) -> dict[str, str]:
        """Check credentials and issue a bearer token."""
        user = self.validate_user(email, password)
        if user is None:
            logger.warning("Rejected login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return {
            "message": "Login successful",
            "access_token": self.tokens.issue(user.id, user.email),
        }

    def get_current_user(self, token: str) -> User:
        """Resolve the user a bearer token was issued to."""
        payload = self.tokens.decode(token)
        if payload is None or payload.get("sub") is None:
            raise UnauthorizedError("Invalid authentication credentials")

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise UnauthorizedError("Invalid authentication credentials") from None

        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise UnauthorizedError("User not found")
        return user
