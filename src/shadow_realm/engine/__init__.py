"""Game engine module for Shadow Realm.

Submodules:
    dice: Dice rolling on d20 notation
    stats: Stat tables, rarity draw, skill catalog and level growth
    scheduler: Cancellable delayed callbacks (manual and asyncio)
    battle: Battle state machine with the scheduled opponent turn
    progression: Rewards, level-ups and the stage unlock graph
    content: Stage content generation seam
    exploration: Stage progress meter and NPC dialogue

Example:
    >>> from shadow_realm.engine import BattleEngine, ManualScheduler
    >>> scheduler = ManualScheduler()
    >>> engine = BattleEngine(state, scheduler=scheduler)
    >>> engine.start_battle(shadow.id)
    >>> engine.perform_action(AttackAction())
    >>> scheduler.advance(2.0)  # opponent replies
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from shadow_realm.engine.dice import (
    DiceExpression,
    DiceRoller,
    roll,
)

# =============================================================================
# Stats
# =============================================================================
from shadow_realm.engine.stats import (
    BASE_STATS,
    RARITY_MULTIPLIER_PERCENT,
    SHADOW_SKILLS,
    apply_level_growth,
    generate_stats,
    rarity_for_draw,
    roll_rarity,
    skills_for,
)

# =============================================================================
# Scheduling
# =============================================================================
from shadow_realm.engine.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    ScheduledHandle,
    TurnScheduler,
)

# =============================================================================
# Battles and progression
# =============================================================================
from shadow_realm.engine.progression import (
    ProgressionTracker,
    StageCompletion,
    is_unlockable,
)
from shadow_realm.engine.battle import OPPONENT_OWNER_ID, BattleEngine

# =============================================================================
# Exploration
# =============================================================================
from shadow_realm.engine.content import (
    ContentGenerator,
    PlaceholderContentGenerator,
    populate_stage,
)
from shadow_realm.engine.exploration import DialogueSession, StageRun


__all__ = [
    # Dice
    "DiceExpression",
    "DiceRoller",
    "roll",
    # Stats
    "BASE_STATS",
    "RARITY_MULTIPLIER_PERCENT",
    "SHADOW_SKILLS",
    "apply_level_growth",
    "generate_stats",
    "rarity_for_draw",
    "roll_rarity",
    "skills_for",
    # Scheduling
    "AsyncioScheduler",
    "ManualScheduler",
    "ScheduledHandle",
    "TurnScheduler",
    # Battles and progression
    "OPPONENT_OWNER_ID",
    "BattleEngine",
    "ProgressionTracker",
    "StageCompletion",
    "is_unlockable",
    # Exploration
    "ContentGenerator",
    "PlaceholderContentGenerator",
    "populate_stage",
    "DialogueSession",
    "StageRun",
]
