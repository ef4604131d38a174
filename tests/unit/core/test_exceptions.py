"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestShadowRealmError:
    """Tests for the base ShadowRealmError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = ShadowRealmError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = ShadowRealmError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(ShadowRealmError("Test", details={"x": 1}))
        assert "ShadowRealmError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestContextualExceptions:
    """Tests for exceptions that record context in their details."""

    def test_configuration_error_key(self) -> None:
        exc = ConfigurationError("Bad value", config_key="heal_base")
        assert exc.details["config_key"] == "heal_base"

    def test_validation_error_field(self) -> None:
        exc = ValidationError("Empty", field_name="name", invalid_value="")
        assert exc.details["field_name"] == "name"
        assert exc.details["invalid_value"] == ""

    def test_currency_error_amounts(self) -> None:
        exc = InsufficientCurrencyError("Too poor", cost=20, balance=5)
        assert exc.details == {"cost": 20, "balance": 5}

    def test_battle_error_context(self) -> None:
        exc = InvalidTurnError("Wait", battle_id="b1", turn_number=3)
        assert exc.details["battle_id"] == "b1"
        assert exc.details["turn_number"] == 3
        assert "turn_number=3" in str(exc)

    def test_stage_error_context(self) -> None:
        exc = StageLockedError("Locked", stage_id="blood_moon_peaks")
        assert exc.details["stage_id"] == "blood_moon_peaks"

    def test_shadow_not_found_id(self) -> None:
        exc = ShadowNotFoundError("Missing", shadow_id="abc")
        assert exc.details["shadow_id"] == "abc"

    def test_storage_error_key(self) -> None:
        exc = StorageError("Disk full", key="shadowmage_user")
        assert exc.details["key"] == "shadowmage_user"

    def test_dice_error_expression(self) -> None:
        exc = DiceRollError("Bad dice", expression="1dX")
        assert exc.details["expression"] == "1dX"

    def test_invalid_state_lists(self) -> None:
        exc = InvalidGameStateError(
            "Nope",
            current_state="map",
            expected_states=["exploring"],
        )
        assert exc.details["expected_states"] == ["exploring"]

    def test_caller_details_preserved(self) -> None:
        exc = SkillNotFoundError("Unknown", battle_id="b1", details={"skill_id": "zap"})
        assert exc.details == {"skill_id": "zap", "battle_id": "b1"}


class TestHierarchy:
    """Tests for the exception inheritance chain."""

    @pytest.mark.parametrize(
        "exc_type",
        [
            NoActiveBattleError,
            InvalidTurnError,
            InsufficientManaError,
            SkillNotFoundError,
            BattleInProgressError,
            UnsupportedBattleModeError,
        ],
    )
    def test_battle_errors(self, exc_type: type[BattleError]) -> None:
        exc = exc_type("Error")
        assert isinstance(exc, BattleError)
        assert isinstance(exc, GameEngineError)
        assert isinstance(exc, ShadowRealmError)

    @pytest.mark.parametrize("exc_type", [StageNotFoundError, StageLockedError, NPCNotFoundError])
    def test_stage_errors(self, exc_type: type[StageError]) -> None:
        assert isinstance(exc_type("Error"), StageError)

    def test_engine_errors(self) -> None:
        for exc_type in (NotAuthenticatedError, ShadowNotFoundError, DiceRollError):
            assert issubclass(exc_type, GameEngineError)

    def test_storage_is_not_engine_error(self) -> None:
        exc = StorageError("Error")
        assert isinstance(exc, ShadowRealmError)
        assert not isinstance(exc, GameEngineError)
