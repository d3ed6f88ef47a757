"""
Library settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.

Every field can be overridden with a METRICS_ prefixed variable, e.g.
METRICS_ENVIRONMENT=production or METRICS_DEFAULT_BUCKETS='[0.1, 1, 10]'.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metrics_core.core.constants import CONTENT_TYPE_LATEST, DEFAULT_BUCKETS


class Settings(BaseSettings):
    """Settings with defaults suitable for development."""

    model_config = SettingsConfigDict(
        env_prefix="METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Exposition
    metrics_path: str = "/metrics"
    content_type: str = CONTENT_TYPE_LATEST

    # Histogram ladder used when a histogram is declared without buckets
    default_buckets: tuple[float, ...] = DEFAULT_BUCKETS

    @field_validator("metrics_path")
    @classmethod
    def _path_has_leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            return "/" + value
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
