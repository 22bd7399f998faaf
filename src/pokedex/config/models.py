"""Configuration models for the Pokédex.

This module contains the Pydantic models describing the YAML configuration file.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from pokedex.api.client import DEFAULT_BASE_URL


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect from environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "pokedex"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return level


class PokedexConfig(BaseModel):
    """Configuration settings for the Pokédex."""

    # Version tracking
    config_version: str = "1.0.0"

    # Remote API
    api_base_url: str = DEFAULT_BASE_URL
    list_limit: int = Field(default=151, ge=1, le=2000)  # Single bounded list fetch
    request_timeout: float = Field(default=10.0, gt=0)  # Seconds, per request
    max_connections: int = Field(default=10, ge=1)

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate the API root is an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid API base URL: {v}")
        return v.rstrip("/")
