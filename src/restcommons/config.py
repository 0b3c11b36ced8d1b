"""Service configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from restcommons.core.exceptions import SettingsLoadError


class Settings(BaseSettings):
    """Service settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="RESTCOMMONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    env: Literal["development", "production", "testing"] = "production"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_logs: bool = Field(default=False, description="Render logs as JSON lines")
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # Service identity
    service_name: str = Field(default="restcommons", min_length=1)
    service_version: str | None = Field(
        default=None, description="Version reported by the status endpoint (package version if unset)"
    )

    @property
    def docs_enabled(self) -> bool:
        """Whether interactive API docs are served."""
        return self.env != "production"


def load_settings() -> Settings:
    """
    Load and validate settings from environment and dotenv.

    Raises:
        SettingsLoadError: If any setting is missing or invalid.
    """
    try:
        return Settings()
    except ValidationError as error:
        raise SettingsLoadError(
            "Startup configuration validation failed. Update .env or environment variables.",
            details={"errors": error.errors(include_url=False, include_context=False)},
        ) from error


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
