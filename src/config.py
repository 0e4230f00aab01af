"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/votify.db",
        description="SQLAlchemy async database URL",
    )
    database_create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup",
    )

    # API Configuration
    api_version: str = Field(default="v1", description="API version path segment")
    page_size: int = Field(
        default=10, ge=1, le=100, description="Number of sessions per page"
    )
    cors_origins: list[str] = Field(
        default=["*"], description="Origins allowed by the CORS middleware"
    )

    # Application Configuration
    app_host: str = Field(default="0.0.0.0", description="Application host")
    app_port: int = Field(default=8000, description="Application port")
    app_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    app_reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    # Bootstrap administrator
    admin_api_token: str | None = Field(
        default=None,
        description="If set, an admin user with this bearer token is ensured on startup",
    )
    admin_name: str = Field(default="Administrator", description="Bootstrap admin name")
    admin_email: str = Field(
        default="admin@votify.local", description="Bootstrap admin email"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
