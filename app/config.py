"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./documents.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    storage_dir: str = Field(
        default="uploads",
        description="Name of the directory holding uploaded blobs, relative to base_dir",
        min_length=1,
    )
    base_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory that stored file paths are resolved against",
    )
    host: str = Field(default="0.0.0.0", description="Interface the server binds to")
    port: int = Field(default=5000, description="Port the server listens on", gt=0)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for document creation timestamps",
    )
    reconcile_on_startup: bool = Field(
        default=False,
        description="Repair drift between stored blobs and document rows at startup",
    )

    @property
    def storage_path(self) -> Path:
        """Absolute location of the storage directory."""

        return (self.base_dir / self.storage_dir).resolve()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
