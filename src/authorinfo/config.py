# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to Wikipedia endpoints, HTTP policy, and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="AUTHORINFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Wikipedia Configuration
    language: str = Field(default="en", description="Wikipedia language subdomain used for lookups")
    api_url_template: str = Field(
        default="https://{lang}.wikipedia.org/w/api.php",
        description="MediaWiki API endpoint; {lang} is replaced with the lookup language",
    )
    image_width: int = Field(default=150, ge=1, description="Thumbnail width requested with image metadata")
    max_redirects: int = Field(default=10, ge=0, description="Maximum redirect hops followed for one lookup")

    # HTTP Configuration
    user_agent: str = Field(
        default="authorinfo/0.1 (library catalog author information)",
        description="User-Agent header sent to Wikipedia",
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    http_max_attempts: int = Field(default=3, ge=1, description="Attempts made for transport-level failures")

    # Rendering Configuration
    search_base_url: str = Field(
        default="/Search/Results", description="Catalog search path substituted for the link placeholder"
    )
    translations: dict[str, str] = Field(
        default_factory=lambda: {"pronounced": "pronounced"},
        description="Translation strings used while sanitizing article text",
    )

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
