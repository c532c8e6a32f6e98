"""Application configuration management.

This module provides configuration management using Pydantic settings
with environment variable support.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden using environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application settings
    app_name: str = Field(default="Directions Proxy", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment (development, staging, production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=3000, description="Port to bind to")
    workers: int = Field(default=1, description="Number of worker processes")
    reload: bool = Field(default=False, description="Enable auto-reload")

    # Upstream routing provider settings
    google_maps_api_key: str = Field(..., description="Google Maps API key used for upstream requests")
    directions_api_url: str = Field(
        default="https://maps.googleapis.com/maps/api/directions/json",
        description="Upstream directions endpoint"
    )
    directions_timeout: Optional[float] = Field(
        default=None,
        description="Upstream request timeout in seconds (unset means no timeout)"
    )
    directions_max_retries: int = Field(default=0, description="Retries on upstream transport errors")
    directions_retry_backoff: float = Field(default=0.5, description="Base retry backoff in seconds")
    strict_travel_modes: bool = Field(default=False, description="Reject travel modes the provider does not document")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_max_size: str = Field(default="10MB", description="Maximum log file size")
    log_backup_count: int = Field(default=5, description="Number of backup log files")

    # CORS settings, comma-separated
    cors_origins: str = Field(default="*", description="Allowed CORS origins")
    cors_allow_methods: str = Field(default="GET,OPTIONS", description="Allowed CORS methods")
    cors_allow_headers: str = Field(default="*", description="Allowed CORS headers")

    # Monitoring settings
    metrics_enabled: bool = Field(default=True, description="Enable Prometheus metrics")

    @validator("environment")
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()

    @validator("log_format")
    def validate_log_format(cls, v):
        """Validate log format."""
        allowed = ["json", "text"]
        if v not in allowed:
            raise ValueError(f"Log format must be one of {allowed}")
        return v

    @validator("directions_max_retries")
    def validate_max_retries(cls, v):
        """Validate retry count."""
        if v < 0:
            raise ValueError("directions_max_retries must not be negative")
        return v

    @validator("directions_api_url")
    def validate_directions_api_url(cls, v):
        """Strip a trailing query separator from the upstream URL."""
        return v.rstrip("?")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return _split_csv(self.cors_origins)

    @property
    def cors_allow_methods_list(self) -> List[str]:
        """Get CORS methods as a list."""
        return _split_csv(self.cors_allow_methods)

    @property
    def cors_allow_headers_list(self) -> List[str]:
        """Get CORS headers as a list."""
        return _split_csv(self.cors_allow_headers)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
