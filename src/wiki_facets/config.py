# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the API endpoint, transport tuning, and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="WIKI_FACETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # API Configuration
    api_url: str = Field(
        default="https://en.wikipedia.org/w/api.php", description="MediaWiki action API endpoint (api.php)"
    )
    user_agent: str = Field(
        default="wiki-facets/1.0 (https://github.com/wiki-facets/wiki-facets)",
        description="User-Agent header sent with every API request",
    )
    origin: str | None = Field(default=None, description="Value for the CORS 'origin' query parameter, if any")

    # Transport Configuration
    request_timeout: float = Field(default=30.0, description="Per-request timeout in seconds")
    retry_attempts: int = Field(
        default=3, ge=1, description="Attempts for transient transport failures (timeouts, connection errors, 429)"
    )
    retry_min_wait: float = Field(default=0.5, ge=0.0, description="Minimum backoff between transport attempts")
    retry_max_wait: float = Field(default=8.0, ge=0.0, description="Maximum backoff between transport attempts")

    # Pagination Configuration
    default_limit: int = Field(default=100, ge=1, description="Default number of items requested per batch")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
