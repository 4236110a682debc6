"""Configuration management for CMSBase.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once and is
immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CMSBASE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "CMSBase"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Store Settings
    item_limit: int = Field(
        default=4000,
        description="Advertised item quota reported by the stats endpoint",
    )
    id_length: int = Field(
        default=13,
        description="Number of base-36 characters in generated identifiers",
    )
    seed_on_startup: bool = Field(
        default=True,
        description="Load the example collections when a store is created",
    )

    # Import/Export Settings
    csv_import_coerce: bool = Field(
        default=False,
        description="Coerce imported CSV cells using the target field type",
    )
    restore_name_suffix: str = " (Imported)"

    @field_validator("id_length")
    @classmethod
    def validate_id_length(cls, v: int) -> int:
        """Keep identifiers short but not trivially colliding."""
        if not 8 <= v <= 32:
            raise ValueError("id_length must be between 8 and 32")
        return v

    @field_validator("item_limit")
    @classmethod
    def validate_item_limit(cls, v: int) -> int:
        """Validate the item limit is positive."""
        if v <= 0:
            raise ValueError("item_limit must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
