"""Pydantic V2 schemas for battles.

A Battle owns deep copies of both participants, so damage and mana spent
during the fight never alias back into the user's collection. Actions are
a tagged union discriminated by ``kind``: each variant carries only the
fields its kind needs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from shadow_realm.models.enums import (
    BattleMode,
    BattleStatus,
    Side,
    StatusEffectType,
)
from shadow_realm.models.shadow import NonNegativeInt, Shadow, new_id


class StatusEffect(BaseModel):
    """A status effect attached to a turn result (reserved)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: StatusEffectType
    duration: NonNegativeInt = 0
    value: int = 0


# =============================================================================
# Actions
# =============================================================================


class AttackAction(BaseModel):
    """Plain attack: the actor's attack stat plus a small random bonus."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["attack"] = "attack"


class SkillAction(BaseModel):
    """Use a named skill from the actor's kit."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["skill"] = "skill"
    skill_id: str = Field(min_length=1, description="Skill to use")


class DefendAction(BaseModel):
    """Defend. Reserved: resolves with no numeric effect."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["defend"] = "defend"


BattleAction = Annotated[
    Union[AttackAction, SkillAction, DefendAction],
    Field(discriminator="kind"),
]


# =============================================================================
# Turns and results
# =============================================================================


class BattleReward(BaseModel):
    """Payload granted to the winner of a PvE battle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    experience: NonNegativeInt = 0
    shadow_tokens: NonNegativeInt = 0


class BattleTurn(BaseModel):
    """Immutable record of one resolved action.

    Attributes:
        turn_number: Monotonic, starting at 1.
        actor: Who acted.
        action: What was done.
        damage: Health removed from the target.
        healing: Health restored to the actor.
        mana_spent: Mana consumed by the action.
        status_effects: Effects applied (reserved, always empty).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    turn_number: int = Field(ge=1)
    actor: Side
    action: BattleAction
    damage: NonNegativeInt = 0
    healing: NonNegativeInt = 0
    mana_spent: NonNegativeInt = 0
    status_effects: tuple[StatusEffect, ...] = ()


class Battle(BaseModel):
    """An ephemeral battle between a player shadow and a generated opponent.

    Attributes:
        id: Unique battle id.
        mode: Battle mode.
        player_shadow: Snapshot copy of the player's shadow.
        opponent_shadow: Generated opponent.
        status: Lifecycle state.
        current_turn: Whose move it is.
        turns: Append-only turn log.
        winner: Winning side once finished.
        rewards: Reward payload for a player victory.
        created_at: Creation timestamp.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: str = Field(default_factory=new_id, description="Unique battle ID")
    mode: BattleMode = BattleMode.PVE
    player_shadow: Shadow
    opponent_shadow: Shadow
    status: BattleStatus = BattleStatus.PREPARATION
    current_turn: Side = Side.PLAYER
    turns: list[BattleTurn] = Field(default_factory=list)
    winner: Side | None = None
    rewards: BattleReward | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_finished(self) -> bool:
        """True once a winner has been decided."""
        return self.status == BattleStatus.FINISHED

    @property
    def next_turn_number(self) -> int:
        """Number the next resolved turn will carry."""
        return len(self.turns) + 1

    def shadow_for(self, side: Side) -> Shadow:
        """Participant on the given side."""
        return self.player_shadow if side == Side.PLAYER else self.opponent_shadow


__all__ = [
    "StatusEffect",
    "AttackAction",
    "SkillAction",
    "DefendAction",
    "BattleAction",
    "BattleReward",
    "BattleTurn",
    "Battle",
]
