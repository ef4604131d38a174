"""Pydantic V2 schemas for shadows, their skills, and the owning user.

A Shadow is the collectible combat unit. Its stat block enforces the
health and mana bounds on every assignment, so no engine code can leave
a shadow with more health than its maximum or with negative mana.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from shadow_realm.models.enums import Rarity, ShadowClass, SkillType


EXPERIENCE_PER_LEVEL = 100

NonNegativeInt = Annotated[int, Field(ge=0)]


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid4().hex


class Stats(BaseModel):
    """Combat stat block.

    Attributes:
        health: Current health, within [0, max_health].
        max_health: Maximum health.
        attack: Base damage of a plain attack.
        defense: Defensive rating (carried, not used by damage formulas).
        speed: Speed rating (carried, not used for turn order).
        mana: Current mana, within [0, max_mana].
        max_mana: Maximum mana.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    health: NonNegativeInt = Field(description="Current health")
    max_health: NonNegativeInt = Field(description="Maximum health")
    attack: NonNegativeInt = Field(description="Attack rating")
    defense: NonNegativeInt = Field(description="Defense rating")
    speed: NonNegativeInt = Field(description="Speed rating")
    mana: NonNegativeInt = Field(description="Current mana")
    max_mana: NonNegativeInt = Field(description="Maximum mana")

    @model_validator(mode="after")
    def check_pools(self) -> Self:
        """Reject health or mana above their maximums."""
        if self.health > self.max_health:
            raise ValueError(
                f"health ({self.health}) exceeds max_health ({self.max_health})"
            )
        if self.mana > self.max_mana:
            raise ValueError(f"mana ({self.mana}) exceeds max_mana ({self.max_mana})")
        return self

    def take_damage(self, amount: int) -> int:
        """Reduce health, clamped at zero.

        Returns:
            Health actually lost.
        """
        lost = min(self.health, max(0, amount))
        self.health -= lost
        return lost

    def restore_health(self, amount: int) -> int:
        """Increase health, clamped at max_health.

        Returns:
            Health actually restored.
        """
        gained = min(self.max_health - self.health, max(0, amount))
        self.health += gained
        return gained

    def spend_mana(self, amount: int) -> None:
        """Consume mana. Callers check availability first."""
        self.mana = self.mana - amount


class Skill(BaseModel):
    """Static per-class ability.

    Attributes:
        id: Stable skill identifier.
        name: Display name.
        description: Flavor text.
        damage: Base damage of attack skills; None for buffs and heals.
        mana_cost: Mana consumed on use.
        cooldown: Declared cooldown in turns (not enforced).
        type: Effect category.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Skill identifier")
    name: str = Field(min_length=1, description="Display name")
    description: str = Field(default="", description="Flavor text")
    damage: int | None = Field(default=None, ge=0, description="Base damage")
    mana_cost: NonNegativeInt = Field(default=0, description="Mana cost")
    cooldown: NonNegativeInt = Field(default=0, description="Declared cooldown")
    type: SkillType = Field(description="Effect category")


class Shadow(BaseModel):
    """A collectible combat unit owned by a user (or, in battle, the AI).

    Attributes:
        id: Unique shadow id.
        name: Name given at forge time.
        shadow_class: Archetype.
        rarity: Rarity tier rolled at forge time.
        level: Current level (>= 1).
        experience: Experience toward the next level.
        stats: Stat block.
        skills: Skill kit, fixed per class.
        owner_id: Id of the owning user, or "ai" for generated opponents.
        created_at: Forge timestamp.
    """

    # Computed fields appear in dumps; ignore them when reloading a snapshot.
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: str = Field(default_factory=new_id, description="Unique shadow ID")
    name: str = Field(min_length=1, max_length=50, description="Shadow name")
    shadow_class: ShadowClass = Field(description="Archetype")
    rarity: Rarity = Field(description="Rarity tier")
    level: int = Field(default=1, ge=1, description="Level")
    experience: NonNegativeInt = Field(default=0, description="Experience")
    stats: Stats
    skills: list[Skill] = Field(default_factory=list, description="Skill kit")
    owner_id: str = Field(description="Owning user ID")
    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def experience_to_next_level(self) -> int:
        """Experience threshold for the next level (level * 100)."""
        return self.level * EXPERIENCE_PER_LEVEL

    @property
    def is_defeated(self) -> bool:
        """True once health has reached zero."""
        return self.stats.health <= 0

    def get_skill(self, skill_id: str) -> Skill | None:
        """Find a skill in this shadow's kit."""
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None


class User(BaseModel):
    """The logged-in player.

    Attributes:
        id: Unique user id.
        username: Display name.
        email: Contact address (guest accounts use a placeholder).
        level: Account level.
        experience: Account experience accumulated from stage rewards.
        shadow_tokens: Currency balance.
        created_at: Account creation timestamp.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: str = Field(default_factory=lambda: f"guest_{new_id()}")
    username: str = Field(default="Shadow Mage", min_length=1, max_length=50)
    email: str = Field(default="guest@shadowrealm.com")
    level: int = Field(default=1, ge=1)
    experience: NonNegativeInt = 0
    shadow_tokens: NonNegativeInt = 0
    created_at: datetime = Field(default_factory=datetime.now)


__all__ = [
    "EXPERIENCE_PER_LEVEL",
    "new_id",
    "Stats",
    "Skill",
    "Shadow",
    "User",
]
