"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from shadow_realm.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from shadow_realm.core.exceptions import ConfigurationError


class TestGameSettings:
    """Tests for GameSettings configuration."""

    def test_default_values(self) -> None:
        """Test default balancing constants."""
        settings = GameSettings()

        assert settings.starting_tokens == 100
        assert settings.shadow_creation_cost == 20
        assert settings.opponent_turn_delay == 2.0
        assert settings.attack_bonus_die == 10
        assert settings.heal_base == 30
        assert settings.heal_bonus_die == 20
        assert (settings.reward_experience_min, settings.reward_experience_max) == (50, 79)
        assert (settings.reward_tokens_min, settings.reward_tokens_max) == (10, 24)
        assert settings.stage_battles_won_increment == 2
        assert settings.stage_shadows_discovered_increment == 1
        assert settings.auto_login_guest is True

    def test_env_override(self, mock_env_vars: dict[str, str]) -> None:
        """Test values are read from prefixed environment variables."""
        settings = GameSettings()

        assert settings.starting_tokens == 250
        assert settings.opponent_turn_delay == 0.5

    def test_reward_range_validation(self) -> None:
        """Test that a reward minimum may not exceed its maximum."""
        with pytest.raises(ConfigurationError) as exc_info:
            GameSettings(reward_experience_min=90, reward_experience_max=80)

        assert exc_info.value.details["config_key"] == "reward_experience_min"

    def test_token_range_validation(self) -> None:
        """Test token reward range ordering."""
        with pytest.raises(ConfigurationError) as exc_info:
            GameSettings(reward_tokens_min=30, reward_tokens_max=10)

        assert "reward_tokens_min" in str(exc_info.value)

    def test_degenerate_range_allowed(self) -> None:
        """Test that min == max is a valid range."""
        settings = GameSettings(reward_tokens_min=15, reward_tokens_max=15)

        assert settings.reward_tokens_min == settings.reward_tokens_max


class TestStorageSettings:
    """Tests for StorageSettings configuration."""

    def test_default_path_created(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default database directory is created."""
        monkeypatch.chdir(tmp_path)

        settings = StorageSettings()

        assert settings.database_path == Path("data/shadow_realm.db")
        assert (tmp_path / "data").is_dir()

    def test_custom_path(self, tmp_path: Path) -> None:
        """Test custom database path."""
        custom = tmp_path / "nested" / "realm.db"

        settings = StorageSettings(database_path=custom)

        assert settings.database_path == custom
        assert custom.parent.exists()


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "Shadow Realm"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.json_logs is False
        assert isinstance(settings.game, GameSettings)

    def test_debug_mode(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test debug mode setting."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.is_production is False

    def test_is_production_property(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test is_production property."""
        monkeypatch.setenv("SHADOW_REALM_DEBUG", "false")
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.is_production is True


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_caching(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)
        clear_settings_cache()

        assert get_settings() is get_settings()

    def test_cache_clear(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that cache can be cleared."""
        monkeypatch.chdir(tmp_path)

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_configuration_wrapped(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that invalid values surface as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SHADOW_REALM_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
