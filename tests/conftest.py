"""Pytest configuration and fixtures."""

import os

# Settings are read when the app module is imported, so the environment goes first.
# Use PostgreSQL when TEST_DATABASE_URL is set, SQLite otherwise
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("NODE_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from evently.config import get_settings  # noqa: E402
from evently.database import Base, create_db_engine, create_session_factory, get_db  # noqa: E402
from evently.main import app  # noqa: E402
from evently.services.auth import PasswordHasher  # noqa: E402

engine = create_db_engine(get_settings())
TestingSessionLocal = create_session_factory(engine)

# Minimum bcrypt cost keeps the suite fast
app.state.password_hasher = PasswordHasher(rounds=4)

TEST_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's email."""

    def __init__(self, *args, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Register and log in a user; return bearer auth headers."""
    email = "test@example.com"
    response = client.post(
        "/auth/register",
        json={"name": "Test User", "email": email, "password": TEST_PASSWORD},
    )
    assert response.status_code == 201

    response = client.post("/auth/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200
    token = response.json()["data"]["access_token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, email=email)
