"""Pydantic V2 schemas for adventure mode.

Stages form a static dependency graph through ``unlock_requirements``.
Enemies, NPCs and rewards are opaque generated content: they are filled in
lazily on a stage's first visit and are never interpreted by the battle
engine.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from shadow_realm.models.enums import (
    NPCRole,
    NPCServiceType,
    ShopItemType,
    StageRewardType,
)
from shadow_realm.models.shadow import NonNegativeInt


class ShopItem(BaseModel):
    """An item sold by a merchant NPC."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str = ""
    cost: NonNegativeInt = 0
    type: ShopItemType
    effect: str | None = None


class NPCService(BaseModel):
    """A service an NPC offers."""

    model_config = ConfigDict(extra="allow")

    type: NPCServiceType
    cost: NonNegativeInt | None = None
    items: list[ShopItem] = Field(default_factory=list)


class AdventureEnemy(BaseModel):
    """A stage antagonist with canned battle banter."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str = ""
    avatar: str = ""
    level: int = Field(default=1, ge=1)
    personality: str = ""
    battle_dialogue: list[str] = Field(default_factory=list)
    defeat_dialogue: list[str] = Field(default_factory=list)


class AdventureNPC(BaseModel):
    """A non-combat character the player can talk to."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str = ""
    avatar: str = ""
    role: NPCRole = NPCRole.GUIDE
    dialogue: list[str] = Field(default_factory=list)
    personality: str = ""
    services: list[NPCService] = Field(default_factory=list)


class StageReward(BaseModel):
    """One reward line granted on stage completion.

    Item and shadow rewards are carried as opaque payloads.
    """

    model_config = ConfigDict(extra="allow")

    type: StageRewardType
    amount: NonNegativeInt = 0
    item: ShopItem | None = None
    shadow: dict[str, Any] | None = None


class AdventureStage(BaseModel):
    """A node of the adventure graph.

    Attributes:
        id: Stable stage id.
        name: Display name.
        description: Flavor text.
        background: Presentation hint.
        unlock_requirements: Stage ids that must all be completed first.
        is_completed: Whether the stage has been completed.
        enemies: Generated enemies (empty until first visit).
        npcs: Generated NPCs (empty until first visit).
        rewards: Completion rewards (empty until first visit).
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    background: str = ""
    unlock_requirements: list[str] = Field(default_factory=list)
    is_completed: bool = False
    enemies: list[AdventureEnemy] = Field(default_factory=list)
    npcs: list[AdventureNPC] = Field(default_factory=list)
    rewards: list[StageReward] = Field(default_factory=list)

    @property
    def has_content(self) -> bool:
        """True once enemies, NPCs and rewards have all been generated."""
        return bool(self.enemies and self.npcs and self.rewards)

    def reward_total(self, reward_type: StageRewardType) -> int:
        """Sum the amounts of all rewards of one type."""
        return sum(r.amount for r in self.rewards if r.type == reward_type)

    def get_npc(self, npc_id: str) -> AdventureNPC | None:
        """Find an NPC present in this stage."""
        for npc in self.npcs:
            if npc.id == npc_id:
                return npc
        return None


class Achievement(BaseModel):
    """A tracked achievement."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    icon: str = ""
    progress: NonNegativeInt = 0
    target: int = Field(default=1, ge=1)
    is_completed: bool = False
    reward: StageReward | None = None


class AdventureProgress(BaseModel):
    """Per-user adventure progress.

    Completed and unlocked stages are kept as ordered, duplicate-free lists
    so the snapshot preserves discovery order.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    current_stage: str = ""
    completed_stages: list[str] = Field(default_factory=list)
    unlocked_stages: list[str] = Field(default_factory=list)
    total_experience: NonNegativeInt = 0
    total_shadow_tokens: NonNegativeInt = 0
    shadows_discovered: NonNegativeInt = 0
    battles_won: NonNegativeInt = 0
    achievements: list[Achievement] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stages_completed(self) -> int:
        """Number of distinct completed stages."""
        return len(self.completed_stages)

    def is_completed(self, stage_id: str) -> bool:
        return stage_id in self.completed_stages

    def is_unlocked(self, stage_id: str) -> bool:
        return stage_id in self.unlocked_stages


# =============================================================================
# Default adventure graph
# =============================================================================

DEFAULT_STAGE_BACKGROUND = (
    "linear-gradient(135deg, #1a3a1a 0%, #2d5a2d 50%, #1a2a3a 100%)"
)


def default_stages() -> list[AdventureStage]:
    """Build the seeded stage list, ordered for unlock resolution."""
    return [
        AdventureStage(
            id="mystical_forest_1",
            name="Whispering Woods",
            description="Ancient forest where shadows first learned to dance with moonlight",
            background=DEFAULT_STAGE_BACKGROUND,
        ),
        AdventureStage(
            id="shadow_caverns_1",
            name="Echoing Caverns",
            description="Deep underground caves where shadow magic resonates",
            background="linear-gradient(135deg, #2a1a3a 0%, #3a2a5a 50%, #1a1a2a 100%)",
            unlock_requirements=["mystical_forest_1"],
        ),
        AdventureStage(
            id="blood_moon_peaks",
            name="Blood Moon Peaks",
            description="Treacherous mountains where the blood moon rises",
            background="linear-gradient(135deg, #3a1a1a 0%, #5a2a2a 50%, #2a1a3a 100%)",
            unlock_requirements=["shadow_caverns_1"],
        ),
    ]


def initial_progress(stages: list[AdventureStage]) -> AdventureProgress:
    """Seed progress: every stage without prerequisites starts unlocked."""
    return AdventureProgress(
        current_stage=stages[0].id if stages else "",
        unlocked_stages=[s.id for s in stages if not s.unlock_requirements],
    )


__all__ = [
    "ShopItem",
    "NPCService",
    "AdventureEnemy",
    "AdventureNPC",
    "StageReward",
    "AdventureStage",
    "Achievement",
    "AdventureProgress",
    "DEFAULT_STAGE_BACKGROUND",
    "default_stages",
    "initial_progress",
]
