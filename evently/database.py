"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from evently.config import Settings

Base: Any = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database."""
    if settings.database_url.startswith("sqlite"):
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build the session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from evently import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def migration_url(database_url: str) -> str:
    """Escape ``%`` so Alembic's configparser keeps percent-encoded credentials intact."""
    return database_url.replace("%", "%%")
