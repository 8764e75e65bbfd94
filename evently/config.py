"""Configuration management for the application."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    # Server
    port: int = Field(default=3000, ge=1000)
    node_env: Literal["development", "production", "test"] = Field(default="development")
    cors_origin: str = Field(default="*")
    log_level: str = Field(default="INFO")

    # Database
    database_url: str

    # JWT
    jwt_secret: str = Field(..., min_length=8)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=60, gt=0)

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, value: str) -> str:
        """Reject values SQLAlchemy cannot parse as a database URL."""
        try:
            make_url(value)
        except ArgumentError as e:
            raise ValueError(f"DATABASE_URL is not a valid database URL: {e}") from e
        return value

    @property
    def cors_origins(self) -> list[str]:
        """CORS origins as a list; ``*`` stays a single wildcard entry."""
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.node_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.node_env == "development"


class ClientSettings(BaseSettings):
    """Settings for API consumers, kept apart from server secrets."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    public_api_url: AnyHttpUrl = Field(default="http://localhost:3000", validate_default=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance. Invalid environments abort startup."""
    try:
        return Settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]).upper()
            logger.error(f"Invalid environment variable {field}: {error['msg']}")
        raise


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings instance."""
    return ClientSettings()
