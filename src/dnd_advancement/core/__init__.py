"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndAdvancementError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        AdvancementValidationError: Incomplete advancement stage.
        DataUnavailableError: Missing rules content for a stage.
        PersistenceError: Rejected character update.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        character_context: Bind a character id for a block.
"""

from __future__ import annotations

from dnd_advancement.core.config import (
    AdvancementSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_advancement.core.exceptions import (
    AdvancementError,
    AdvancementValidationError,
    ConfigurationError,
    DataUnavailableError,
    DiceRollError,
    DndAdvancementError,
    InvalidAdvancementError,
    PersistenceError,
    SessionStateError,
    ValidationError,
)
from dnd_advancement.core.logging import (
    bind_context,
    character_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "DndAdvancementError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Advancement exceptions
    "AdvancementError",
    "AdvancementValidationError",
    "InvalidAdvancementError",
    "SessionStateError",
    "DataUnavailableError",
    "DiceRollError",
    # Persistence exceptions
    "PersistenceError",
    # Configuration
    "Settings",
    "AdvancementSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "character_context",
]
