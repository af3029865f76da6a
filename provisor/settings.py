"""
Provisor Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProvisorSettings(BaseSettings):
    """
    Provisor configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="PV_",  # All Provisor env vars must start with PV_
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: PV_LOG_LEVEL)",
    )

    # Run Configuration
    cookbook_path: Path = Field(
        default=Path("cookbooks"),
        description="Directory holding one sub-directory per cookbook (env: PV_COOKBOOK_PATH)",
    )

    recipe_file: str = Field(
        default="recipe.py",
        description="Recipe file converged when none is given (env: PV_RECIPE_FILE)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the level name and reject unknown ones."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


# Global settings instance
_settings: ProvisorSettings | None = None


def get_settings() -> ProvisorSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        ProvisorSettings instance
    """
    global _settings
    if _settings is None:
        _settings = ProvisorSettings()
    return _settings


def reload_settings() -> ProvisorSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh ProvisorSettings instance
    """
    global _settings
    _settings = ProvisorSettings()
    return _settings
