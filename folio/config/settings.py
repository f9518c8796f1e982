"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "folio.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class SearchSettings(BaseSettings):
    """Search endpoint configuration."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    # Candidates fetched per category, as a multiple of the page limit
    overfetch_factor: int = 2


class RateLimitSettings(BaseSettings):
    """Rate limiter configuration."""

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_")

    enabled: bool = True

    # Preset names from RATE_LIMITS; explicit values replace the preset's
    search_preset: str = "api"
    search_max_requests: int | None = None
    search_window_ms: int | None = None

    click_preset: str = "strict"
    click_max_requests: int | None = None
    click_window_ms: int | None = None

    # Mixed into the client IP before hashing
    ip_hash_salt: str = ""

    sweep_interval_seconds: float = 300.0


class AnalyticsSettings(BaseSettings):
    """Search analytics configuration."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    enabled: bool = True

    # Seconds to wait for pending analytics writes on shutdown
    drain_timeout_seconds: float = 5.0

    top_searches: int = 15
    zero_result_searches: int = 10
    recent_searches: int = 20
    top_viewed: int = 5
    max_trend_days: int = 30


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Folio"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
