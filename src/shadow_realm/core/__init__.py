"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        ShadowRealmError: Base exception for all application errors.
        (plus the battle, stage and storage subclasses)

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from shadow_realm.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from shadow_realm.core.exceptions import (
    BattleError,
    BattleInProgressError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InsufficientCurrencyError,
    InsufficientManaError,
    InvalidGameStateError,
    InvalidTurnError,
    NoActiveBattleError,
    NotAuthenticatedError,
    NPCNotFoundError,
    ShadowNotFoundError,
    ShadowRealmError,
    SkillNotFoundError,
    StageError,
    StageLockedError,
    StageNotFoundError,
    StorageError,
    UnsupportedBattleModeError,
    ValidationError,
)
from shadow_realm.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


__all__ = [
    # Base exception
    "ShadowRealmError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "NotAuthenticatedError",
    "ShadowNotFoundError",
    "InsufficientCurrencyError",
    "BattleError",
    "NoActiveBattleError",
    "InvalidTurnError",
    "InsufficientManaError",
    "SkillNotFoundError",
    "BattleInProgressError",
    "UnsupportedBattleModeError",
    "StageError",
    "StageNotFoundError",
    "StageLockedError",
    "NPCNotFoundError",
    "DiceRollError",
    "StorageError",
    # Configuration
    "Settings",
    "GameSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
]
