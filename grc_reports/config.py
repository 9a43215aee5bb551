"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the GRC Report Builder."""

    # Application
    app_name: str = "GRC Report Builder"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    log_level: str = "INFO"
    log_format: str = Field(default="json", pattern=r"^(json|console)$")

    # API
    allowed_origins: str = "http://localhost:3000,http://localhost:5000"
    rate_limit_default: str = "100/minute"

    # Record store
    store_backend: str = Field(default="memory", pattern=r"^(memory|sql)$")
    database_url: str = "sqlite:///./grc_reports.db"
    database_echo: bool = False

    # Single implicit owner until authentication exists
    default_user_id: int = Field(default=1, ge=1)

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_prefix": "GRC_", "env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Return a settings instance built from the environment."""
    return Settings()
