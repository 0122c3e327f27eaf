"""Configuration management for OmniSearch."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OMNISEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Search Behaviour
    # ==========================================================================
    debounce_ms: int = Field(
        default=300,
        ge=0,
        description="Delay before a remote search follows a local miss",
    )
    min_remote_query_length: int = Field(
        default=2,
        ge=0,
        description="Shortest query that may trigger a remote search",
    )

    # ==========================================================================
    # UI Configuration
    # ==========================================================================
    initial_show_local_list: bool = Field(
        default=True,
        description="Show the whole local list before the user types",
    )
    show_refresh_button: bool = Field(
        default=True,
        description="Offer a 'search remotely' action",
    )

    # ==========================================================================
    # Remote Search Configuration
    # ==========================================================================
    remote_url: Optional[str] = Field(
        default=None,
        description="Endpoint used by the CLI for remote lookups",
    )
    remote_query_param: str = Field(
        default="q",
        description="Query string parameter carrying the search text",
    )
    remote_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for remote lookups in seconds",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # ==========================================================================
    # Validators
    # ==========================================================================
    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v

    @property
    def debounce_seconds(self) -> float:
        """Debounce interval in seconds."""
        return self.debounce_ms / 1000

    def has_remote_url(self) -> bool:
        """Check if a remote endpoint is configured."""
        return bool(self.remote_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function to reload settings (clears cache)
def reload_settings() -> Settings:
    """Reload settings (useful after env changes)."""
    get_settings.cache_clear()
    return get_settings()
