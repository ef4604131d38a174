"""Dice rolling for the Shadow Realm engine.

Every random number the game uses (rarity draws, damage bonuses, healing,
rewards, opponent class) is a dice roll made through the d20 library, so a
single seeded DiceRoller makes a whole session reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import d20

from shadow_realm.core.exceptions import DiceRollError
from shadow_realm.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        detail: d20's rendering of the individual dice.
    """

    expression: str
    total: int
    detail: str


class DiceRoller:
    """Dice rolling built on d20 notation.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> 0 <= roller.roll_bonus(10) <= 9
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d10-1', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        logger.debug("Dice rolled", expression=expression, total=result.total)
        return DiceExpression(
            expression=expression,
            total=result.total,
            detail=str(result),
        )

    def roll_bonus(self, die: int) -> int:
        """Roll a zero-based bonus, uniform in [0, die - 1].

        Args:
            die: Number of faces.

        Raises:
            DiceRollError: If die is smaller than 1.
        """
        if die < 1:
            raise DiceRollError(f"Die must have at least one face, got {die}")
        return self.roll(f"1d{die}-1").total

    def roll_range(self, low: int, high: int) -> int:
        """Roll an integer uniform in [low, high].

        Raises:
            DiceRollError: If low exceeds high.
        """
        if low > high:
            raise DiceRollError(f"Empty range [{low}, {high}]")
        return low + self.roll_bonus(high - low + 1)


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def roll(expression: str) -> DiceExpression:
    """Convenience function to roll dice.

    Example:
        >>> result = roll("1d20+5")
        >>> print(result.total)
    """
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller.roll(expression)


__all__ = [
    "DiceExpression",
    "DiceRoller",
    "roll",
]
