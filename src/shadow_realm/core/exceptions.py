"""Custom exception hierarchy for the Shadow Realm game core.

Every error raised by the core inherits from ShadowRealmError so the
presentation layer can catch one type at its boundary and still show a
domain-specific message. All of these are local, recoverable conditions.

Example:
    >>> from shadow_realm.core.exceptions import ShadowNotFoundError
    >>> raise ShadowNotFoundError("Unknown shadow", shadow_id="abc123")
"""

from __future__ import annotations

from typing import Any


class ShadowRealmError(Exception):
    """Base exception for all Shadow Realm errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(ShadowRealmError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(ShadowRealmError):
    """Raised when user input fails validation (empty names and the like)."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(ShadowRealmError):
    """Base exception for battle, progression and exploration errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when an operation is attempted from a state that forbids it."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class NotAuthenticatedError(GameEngineError):
    """Raised when an operation requires a logged-in user."""


class ShadowNotFoundError(GameEngineError):
    """Raised for an unknown shadow id or one not owned by the current user."""

    def __init__(
        self,
        message: str,
        *,
        shadow_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending shadow id.

        Args:
            message: Human-readable error description.
            shadow_id: The shadow id that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if shadow_id:
            combined_details["shadow_id"] = shadow_id
        super().__init__(message, details=combined_details)


class InsufficientCurrencyError(GameEngineError):
    """Raised when a purchase costs more shadow tokens than the user holds."""

    def __init__(
        self,
        message: str,
        *,
        cost: int | None = None,
        balance: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with cost and balance context.

        Args:
            message: Human-readable error description.
            cost: Token cost of the attempted operation.
            balance: The user's current token balance.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if cost is not None:
            combined_details["cost"] = cost
        if balance is not None:
            combined_details["balance"] = balance
        super().__init__(message, details=combined_details)


class BattleError(GameEngineError):
    """Base exception for battle resolution errors."""

    def __init__(
        self,
        message: str,
        *,
        battle_id: str | None = None,
        turn_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize battle error with battle context.

        Args:
            message: Human-readable error description.
            battle_id: Identifier of the battle involved.
            turn_number: Turn number when the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if battle_id:
            combined_details["battle_id"] = battle_id
        if turn_number is not None:
            combined_details["turn_number"] = turn_number
        super().__init__(message, details=combined_details)


class NoActiveBattleError(BattleError):
    """Raised when a battle operation is attempted with no battle in progress."""


class InvalidTurnError(BattleError):
    """Raised when the player acts out of turn or after the battle finished."""


class InsufficientManaError(BattleError):
    """Raised when a skill costs more mana than the shadow has left."""


class SkillNotFoundError(BattleError):
    """Raised when a skill id is not part of the acting shadow's kit."""


class BattleInProgressError(BattleError):
    """Raised when a battle is started while another one is unfinished."""


class UnsupportedBattleModeError(BattleError):
    """Raised for battle modes that are reserved but not implemented (pvp)."""


class StageError(GameEngineError):
    """Base exception for adventure stage errors."""

    def __init__(
        self,
        message: str,
        *,
        stage_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize stage error with the stage id.

        Args:
            message: Human-readable error description.
            stage_id: Identifier of the stage involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if stage_id:
            combined_details["stage_id"] = stage_id
        super().__init__(message, details=combined_details)


class StageNotFoundError(StageError):
    """Raised for an unknown stage id."""


class StageLockedError(StageError):
    """Raised when entering a stage whose prerequisites are not completed."""


class NPCNotFoundError(StageError):
    """Raised when talking to an NPC that is not present in the stage."""


class DiceRollError(GameEngineError):
    """Raised when a dice expression cannot be rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(ShadowRealmError):
    """Raised when a snapshot cannot be read from or written to the store."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with the snapshot key.

        Args:
            message: Human-readable error description.
            key: Snapshot key involved in the failed operation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if key:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


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
    # Storage exceptions
    "StorageError",
]
