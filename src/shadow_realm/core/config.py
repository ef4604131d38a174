"""Configuration management for the Shadow Realm game core.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.
Every gameplay constant (starting balance, creation cost, reward ranges,
opponent delay) lives here so balancing never requires a code change.

Example:
    >>> from shadow_realm.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.shadow_creation_cost
    20

Environment Variables:
    SHADOW_REALM_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SHADOW_REALM_JSON_LOGS: Emit JSON logs instead of console output
    SHADOW_REALM_GAME_STARTING_TOKENS: Shadow tokens granted to a new user
    SHADOW_REALM_GAME_OPPONENT_TURN_DELAY: Seconds before the opponent acts
    SHADOW_REALM_STORAGE_DATABASE_PATH: Path to the snapshot database
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shadow_realm.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Gameplay balancing constants.

    Attributes:
        starting_tokens: Shadow tokens granted to a freshly created user.
        shadow_creation_cost: Token cost of forging one shadow.
        opponent_turn_delay: Seconds between a player action and the
            automatic opponent reply.
        attack_bonus_die: Attack damage bonus is uniform in [0, die - 1].
        heal_base: Flat healing of heal-type skills.
        heal_bonus_die: Healing bonus is uniform in [0, die - 1].
        reward_experience_min: Lowest experience granted for a victory.
        reward_experience_max: Highest experience granted for a victory.
        reward_tokens_min: Lowest token reward for a victory.
        reward_tokens_max: Highest token reward for a victory.
        stage_battles_won_increment: battlesWon credited per completed stage.
        stage_shadows_discovered_increment: shadowsDiscovered credited per
            completed stage.
        auto_login_guest: Create a guest user when no user snapshot exists.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHADOW_REALM_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    starting_tokens: int = Field(default=100, ge=0, description="Tokens for a new user")
    shadow_creation_cost: int = Field(default=20, ge=0, description="Cost to forge a shadow")
    opponent_turn_delay: float = Field(
        default=2.0,
        ge=0,
        le=60,
        description="Seconds before the opponent acts",
    )
    attack_bonus_die: int = Field(default=10, ge=1, description="Attack bonus die size")
    heal_base: int = Field(default=30, ge=0, description="Flat healing of heal skills")
    heal_bonus_die: int = Field(default=20, ge=1, description="Healing bonus die size")
    reward_experience_min: int = Field(default=50, ge=0)
    reward_experience_max: int = Field(default=79, ge=0)
    reward_tokens_min: int = Field(default=10, ge=0)
    reward_tokens_max: int = Field(default=24, ge=0)
    stage_battles_won_increment: int = Field(default=2, ge=0)
    stage_shadows_discovered_increment: int = Field(default=1, ge=0)
    auto_login_guest: bool = Field(
        default=True,
        description="Create a guest user when no user snapshot exists",
    )

    @model_validator(mode="after")
    def validate_reward_ranges(self) -> "GameSettings":
        """Ensure every reward range has min <= max.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If a minimum exceeds its maximum.
        """
        if self.reward_experience_min > self.reward_experience_max:
            raise ConfigurationError(
                f"reward_experience_min ({self.reward_experience_min}) must not exceed "
                f"reward_experience_max ({self.reward_experience_max})",
                config_key="reward_experience_min",
            )
        if self.reward_tokens_min > self.reward_tokens_max:
            raise ConfigurationError(
                f"reward_tokens_min ({self.reward_tokens_min}) must not exceed "
                f"reward_tokens_max ({self.reward_tokens_max})",
                config_key="reward_tokens_min",
            )
        return self


class StorageSettings(BaseSettings):
    """Configuration for the local snapshot store.

    Attributes:
        database_path: Path to the SQLite file holding snapshots.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHADOW_REALM_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/shadow_realm.db"),
        description="Path to the SQLite snapshot database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def ensure_parent_exists(cls, value: Path) -> Path:
        """Create the database directory if necessary."""
        value.parent.mkdir(parents=True, exist_ok=True)
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        game: Gameplay settings.
        storage: Snapshot storage settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHADOW_REALM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Shadow Realm", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
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
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
