"""Pydantic V2 schemas for the Shadow Realm game core.

Submodules:
    enums: Enumeration types (ShadowClass, Rarity, BattleStatus, etc.)
    shadow: Shadows, stats, skills and the owning user
    battle: Battles, actions, turns and rewards
    adventure: Stages, NPCs, enemies and adventure progress
    state: RealmState, the aggregate store shared by the engine

Example:
    >>> from shadow_realm.models import RealmState, AttackAction
    >>> state = RealmState.fresh()
    >>> [s.id for s in state.stages]
    ['mystical_forest_1', 'shadow_caverns_1', 'blood_moon_peaks']
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from shadow_realm.models.enums import (
    ActionKind,
    BattleMode,
    BattleStatus,
    NPCRole,
    NPCServiceType,
    Rarity,
    ShadowClass,
    ShopItemType,
    Side,
    SkillType,
    StageRewardType,
    StatusEffectType,
)

# =============================================================================
# Shadows and users
# =============================================================================
from shadow_realm.models.shadow import (
    EXPERIENCE_PER_LEVEL,
    Shadow,
    Skill,
    Stats,
    User,
    new_id,
)

# =============================================================================
# Battles
# =============================================================================
from shadow_realm.models.battle import (
    AttackAction,
    Battle,
    BattleAction,
    BattleReward,
    BattleTurn,
    DefendAction,
    SkillAction,
    StatusEffect,
)

# =============================================================================
# Adventure
# =============================================================================
from shadow_realm.models.adventure import (
    Achievement,
    AdventureEnemy,
    AdventureNPC,
    AdventureProgress,
    AdventureStage,
    NPCService,
    ShopItem,
    StageReward,
    default_stages,
    initial_progress,
)

# =============================================================================
# Aggregate state
# =============================================================================
from shadow_realm.models.state import RealmState


__all__ = [
    # Enums
    "ActionKind",
    "BattleMode",
    "BattleStatus",
    "NPCRole",
    "NPCServiceType",
    "Rarity",
    "ShadowClass",
    "ShopItemType",
    "Side",
    "SkillType",
    "StageRewardType",
    "StatusEffectType",
    # Shadows
    "EXPERIENCE_PER_LEVEL",
    "Shadow",
    "Skill",
    "Stats",
    "User",
    "new_id",
    # Battles
    "AttackAction",
    "Battle",
    "BattleAction",
    "BattleReward",
    "BattleTurn",
    "DefendAction",
    "SkillAction",
    "StatusEffect",
    # Adventure
    "Achievement",
    "AdventureEnemy",
    "AdventureNPC",
    "AdventureProgress",
    "AdventureStage",
    "NPCService",
    "ShopItem",
    "StageReward",
    "default_stages",
    "initial_progress",
    # State
    "RealmState",
]
