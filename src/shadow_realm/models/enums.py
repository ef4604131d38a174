"""Enumeration types for the Shadow Realm game core.

String-valued enums serialize to the same literals the snapshot format
uses, so persisted data stays readable and stable across versions.
"""

from __future__ import annotations

from enum import StrEnum


class ShadowClass(StrEnum):
    """Shadow archetypes, each with its own base stats and skill kit."""

    WARRIOR = "warrior"
    MAGE = "mage"
    ARCHER = "archer"
    ASSASSIN = "assassin"

    @property
    def display_name(self) -> str:
        """Capitalized name, e.g. 'Warrior'."""
        return self.value.capitalize()


class Rarity(StrEnum):
    """Ordered quality tier of a shadow.

    Members are declared from lowest to highest; ``rank`` exposes that
    ordering for comparisons.
    """

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        """Position in the tier order (common=0 ... legendary=3)."""
        return list(Rarity).index(self)


class SkillType(StrEnum):
    """Effect category of a skill."""

    ATTACK = "attack"
    DEFENSE = "defense"
    HEAL = "heal"
    BUFF = "buff"
    DEBUFF = "debuff"


class BattleMode(StrEnum):
    """Battle modes. Only PVE is playable; PVP is reserved."""

    PVE = "pve"
    PVP = "pvp"


class BattleStatus(StrEnum):
    """Battle lifecycle: preparation -> active -> finished (terminal)."""

    PREPARATION = "preparation"
    ACTIVE = "active"
    FINISHED = "finished"


class Side(StrEnum):
    """Which participant acts or won."""

    PLAYER = "player"
    OPPONENT = "opponent"


class ActionKind(StrEnum):
    """Discriminator of battle actions."""

    ATTACK = "attack"
    SKILL = "skill"
    DEFEND = "defend"


class StatusEffectType(StrEnum):
    """Status effects a turn may carry. Reserved; not applied by the engine."""

    POISON = "poison"
    BURN = "burn"
    FREEZE = "freeze"
    STUN = "stun"
    BOOST = "boost"
    SHIELD = "shield"


class StageRewardType(StrEnum):
    """Kinds of stage rewards."""

    EXPERIENCE = "experience"
    SHADOW_TOKENS = "shadowTokens"
    ITEM = "item"
    SHADOW = "shadow"


class NPCRole(StrEnum):
    """Roles an adventure NPC can play."""

    MERCHANT = "merchant"
    TRAINER = "trainer"
    GUIDE = "guide"
    QUESTGIVER = "questgiver"


class NPCServiceType(StrEnum):
    """Services offered by an NPC."""

    HEAL = "heal"
    SHOP = "shop"
    TRAIN = "train"
    EVOLVE = "evolve"
    QUEST = "quest"


class ShopItemType(StrEnum):
    """Categories of items sold by merchants."""

    POTION = "potion"
    EQUIPMENT = "equipment"
    EVOLUTION_STONE = "evolution_stone"
    SHADOW_EGG = "shadow_egg"


__all__ = [
    "ShadowClass",
    "Rarity",
    "SkillType",
    "BattleMode",
    "BattleStatus",
    "Side",
    "ActionKind",
    "StatusEffectType",
    "StageRewardType",
    "NPCRole",
    "NPCServiceType",
    "ShopItemType",
]
