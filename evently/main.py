"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from evently.api import auth, events
from evently.api.envelope import EnvelopeRoute
from evently.api.errors import register_exception_handlers
from evently.api.middleware import CorrelationIdMiddleware
from evently.config import Settings, get_settings
from evently.database import create_db_engine, create_session_factory
from evently.logging_config import configure_logging
from evently.services.auth import PasswordHasher, TokenIssuer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Evently API ({app.state.settings.node_env})")
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one immutable settings object."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Evently API",
        description="Event management with JWT authentication",
        version="0.1.0",
        lifespan=lifespan,
    )

    engine = create_db_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher()
    app.state.token_issuer = TokenIssuer.from_settings(settings)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-correlation-id"],
    )
    # Added last so it runs first: every later stage can read the correlation id
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)
    app.router.route_class = EnvelopeRoute

    # Register routers
    app.include_router(auth.router)
    app.include_router(events.router)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return {"status": "healthy", "environment": request.app.state.settings.node_env}

    return app


app = create_app()


def run() -> None:
    """Serve the application on the configured port."""
    settings = get_settings()
    uvicorn.run(
        "evently.main:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
        reload=settings.is_development,
    )
