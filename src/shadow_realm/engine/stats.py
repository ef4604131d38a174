"""Shadow stat generation and growth tables.

This module holds the static balancing data for shadows:
- Base stats by class
- Rarity multipliers and the weighted rarity draw
- The per-class skill catalog
- Level-up stat growth

Stats are computed with integer-percent arithmetic so the same
(class, rarity) pair always yields the same stat block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shadow_realm.models.enums import Rarity, ShadowClass, SkillType
from shadow_realm.models.shadow import Skill, Stats


if TYPE_CHECKING:
    from shadow_realm.engine.dice import DiceRoller
    from shadow_realm.models.shadow import Shadow


# =============================================================================
# Base Stats by Class
# =============================================================================

BASE_STATS: dict[ShadowClass, dict[str, int]] = {
    ShadowClass.WARRIOR: {"health": 120, "attack": 25, "defense": 20, "speed": 15, "mana": 50},
    ShadowClass.MAGE: {"health": 80, "attack": 30, "defense": 10, "speed": 20, "mana": 100},
    ShadowClass.ARCHER: {"health": 100, "attack": 28, "defense": 15, "speed": 25, "mana": 70},
    ShadowClass.ASSASSIN: {"health": 90, "attack": 32, "defense": 12, "speed": 30, "mana": 60},
}


# =============================================================================
# Rarity
# =============================================================================

RARITY_MULTIPLIER_PERCENT: dict[Rarity, int] = {
    Rarity.COMMON: 100,
    Rarity.RARE: 120,
    Rarity.EPIC: 150,
    Rarity.LEGENDARY: 200,
}

# Cumulative upper bounds of the rarity draw, in percent.
RARITY_THRESHOLDS: tuple[tuple[int, Rarity], ...] = (
    (50, Rarity.COMMON),
    (80, Rarity.RARE),
    (95, Rarity.EPIC),
)


def generate_stats(shadow_class: ShadowClass, rarity: Rarity) -> Stats:
    """Compute the starting stat block for a class and rarity.

    Every base value is scaled by the rarity multiplier and floored.
    Health and mana start full.
    """
    base = BASE_STATS[shadow_class]
    percent = RARITY_MULTIPLIER_PERCENT[rarity]

    def scaled(key: str) -> int:
        return base[key] * percent // 100

    health = scaled("health")
    mana = scaled("mana")
    return Stats(
        health=health,
        max_health=health,
        attack=scaled("attack"),
        defense=scaled("defense"),
        speed=scaled("speed"),
        mana=mana,
        max_mana=mana,
    )


def rarity_for_draw(draw: float) -> Rarity:
    """Map a uniform draw in [0, 1) onto a rarity tier.

    Common below 0.5, rare below 0.8, epic below 0.95, legendary otherwise.
    """
    for bound, rarity in RARITY_THRESHOLDS:
        if draw < bound / 100:
            return rarity
    return Rarity.LEGENDARY


def roll_rarity(dice: DiceRoller) -> Rarity:
    """Draw a rarity tier with the configured weights."""
    return rarity_for_draw(dice.roll_bonus(100) / 100)


# =============================================================================
# Skill Catalog
# =============================================================================

SHADOW_SKILLS: dict[ShadowClass, tuple[Skill, ...]] = {
    ShadowClass.WARRIOR: (
        Skill(id="slash", name="Slash", description="Basic sword attack",
              damage=25, mana_cost=10, cooldown=0, type=SkillType.ATTACK),
        Skill(id="shield_bash", name="Shield Bash", description="Stun enemy and deal damage",
              damage=20, mana_cost=15, cooldown=2, type=SkillType.ATTACK),
        Skill(id="berserker_rage", name="Berserker Rage", description="Increase attack for 3 turns",
              mana_cost=20, cooldown=4, type=SkillType.BUFF),
    ),
    ShadowClass.MAGE: (
        Skill(id="fireball", name="Fireball", description="Cast a fireball",
              damage=30, mana_cost=15, cooldown=0, type=SkillType.ATTACK),
        Skill(id="ice_shard", name="Ice Shard", description="Freeze enemy for 1 turn",
              damage=20, mana_cost=18, cooldown=3, type=SkillType.ATTACK),
        Skill(id="heal", name="Heal", description="Restore health",
              mana_cost=12, cooldown=2, type=SkillType.HEAL),
    ),
    ShadowClass.ARCHER: (
        Skill(id="arrow_shot", name="Arrow Shot", description="Precise ranged attack",
              damage=22, mana_cost=8, cooldown=0, type=SkillType.ATTACK),
        Skill(id="poison_arrow", name="Poison Arrow", description="Poison enemy for 3 turns",
              damage=15, mana_cost=15, cooldown=3, type=SkillType.ATTACK),
        Skill(id="multi_shot", name="Multi Shot", description="Attack multiple times",
              damage=18, mana_cost=20, cooldown=4, type=SkillType.ATTACK),
    ),
    ShadowClass.ASSASSIN: (
        Skill(id="backstab", name="Backstab", description="Critical stealth attack",
              damage=35, mana_cost=12, cooldown=0, type=SkillType.ATTACK),
        Skill(id="smoke_bomb", name="Smoke Bomb", description="Become invisible for 2 turns",
              mana_cost=18, cooldown=5, type=SkillType.BUFF),
        Skill(id="poison_blade", name="Poison Blade", description="Poison on hit",
              damage=20, mana_cost=15, cooldown=3, type=SkillType.ATTACK),
    ),
}


def skills_for(shadow_class: ShadowClass) -> list[Skill]:
    """Get the skill kit of a class."""
    return list(SHADOW_SKILLS[shadow_class])


# =============================================================================
# Level Growth
# =============================================================================


def growth_increase(new_level: int) -> int:
    """Stat growth step for reaching a level (zero below level 10)."""
    return new_level // 10


def apply_level_growth(shadow: Shadow) -> int:
    """Raise a shadow one level and grow its stats.

    Experience is left untouched; callers decide whether it resets or
    carries over. Health and mana are restored to their new maximums.

    Returns:
        The new level.
    """
    new_level = shadow.level + 1
    increase = growth_increase(new_level)
    stats = shadow.stats

    max_health = stats.max_health + 10 * increase
    max_mana = stats.max_mana + 5 * increase
    shadow.stats = Stats(
        health=max_health,
        max_health=max_health,
        attack=stats.attack + 2 * increase,
        defense=stats.defense + 2 * increase,
        speed=stats.speed + increase,
        mana=max_mana,
        max_mana=max_mana,
    )
    shadow.level = new_level
    return new_level


__all__ = [
    "BASE_STATS",
    "RARITY_MULTIPLIER_PERCENT",
    "RARITY_THRESHOLDS",
    "SHADOW_SKILLS",
    "generate_stats",
    "rarity_for_draw",
    "roll_rarity",
    "skills_for",
    "growth_increase",
    "apply_level_growth",
]
