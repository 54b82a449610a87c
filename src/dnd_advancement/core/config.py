"""Configuration management for the advancement engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from dnd_advancement.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.advancement.ruleset_version
    '5e-2024'

Environment Variables:
    DND_ADVANCEMENT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_ADVANCEMENT_JSON_LOGS: Emit JSON logs instead of console output
    DND_ADVANCEMENT_RULESET_VERSION: Ruleset used for advancement tables
    DND_ADVANCEMENT_ENFORCE_FEATURE_CHOICES: Block progress on incomplete feature choices
    DND_ADVANCEMENT_STORAGE_DATABASE_PATH: Path to the SQLite character store
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_advancement.core.constants import (
    ASI_POINT_BUDGET,
    DEFAULT_CONTENT_SOURCE,
    PC_ABILITY_SCORE_CAP,
)
from dnd_advancement.core.exceptions import ConfigurationError


class AdvancementSettings(BaseSettings):
    """Configuration for level-up rules behavior.

    Attributes:
        ruleset_version: Version of the rules tables to advance with.
        ability_score_cap: Highest score an ability increase may reach.
        asi_points: Points distributed by an ability score improvement.
        enforce_feature_choices: Require every feature choice before moving on.
        default_source: Source assumed for keys without a source suffix.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ADVANCEMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ruleset_version: str = Field(
        default="5e-2024",
        description="Ruleset version used for advancement tables",
    )
    ability_score_cap: int = Field(
        default=PC_ABILITY_SCORE_CAP,
        ge=1,
        le=30,
        description="Maximum ability score reachable through advancement",
    )
    asi_points: int = Field(
        default=ASI_POINT_BUDGET,
        ge=1,
        le=4,
        description="Points granted by an ability score improvement",
    )
    enforce_feature_choices: bool = Field(
        default=False,
        description="Block the feature choice stage until every choice is made",
    )
    default_source: str = Field(
        default=DEFAULT_CONTENT_SOURCE,
        description="Source assumed for keys without a source suffix",
    )

    @field_validator("default_source", mode="after")
    @classmethod
    def normalize_source(cls, value: str) -> str:
        """Normalize the default source abbreviation.

        Args:
            value: The configured source abbreviation.

        Returns:
            The upper-cased abbreviation.

        Raises:
            ConfigurationError: If the source is blank.
        """
        if not value.strip():
            raise ConfigurationError(
                "default_source must not be blank",
                config_key="default_source",
            )
        return value.strip().upper()


class StorageSettings(BaseSettings):
    """Configuration for the reference character store.

    Attributes:
        database_path: Path to the SQLite database file.
        lock_retry_attempts: Attempts made when the database is locked.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ADVANCEMENT_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/characters.db"),
        description="Path to SQLite database",
    )
    lock_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Write attempts when the database is locked",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON logs.
        advancement: Level-up rules settings.
        storage: Character store settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ADVANCEMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D Character Advancement",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON formatted logs",
    )

    advancement: AdvancementSettings = Field(default_factory=AdvancementSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.

    Example:
        >>> settings = get_settings()
        >>> settings.advancement.ability_score_cap
        20
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "AdvancementSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
