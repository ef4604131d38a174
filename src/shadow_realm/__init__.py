"""Shadow Realm - collectible shadow battler game core.

Users forge shadow companions with rolled rarity and stats, explore a
graph of adventure stages, talk to NPCs and fight turn-based battles
against generated opponents. State lives in a local SQLite snapshot store.

Example:
    >>> from shadow_realm import ShadowRealmGame, AttackAction
    >>> game = ShadowRealmGame()
    >>> game.load()
    >>> shadow = game.create_shadow("Umbra", "assassin")
    >>> game.start_battle(shadow.id)
    >>> game.perform_battle_action(AttackAction())
"""

from __future__ import annotations

from shadow_realm.core import (
    ShadowRealmError,
    configure_logging,
    get_logger,
    get_settings,
)
from shadow_realm.game import ShadowRealmGame
from shadow_realm.models import (
    AttackAction,
    BattleMode,
    DefendAction,
    Rarity,
    RealmState,
    ShadowClass,
    SkillAction,
)


__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ShadowRealmGame",
    "ShadowRealmError",
    "configure_logging",
    "get_logger",
    "get_settings",
    "AttackAction",
    "BattleMode",
    "DefendAction",
    "Rarity",
    "RealmState",
    "ShadowClass",
    "SkillAction",
]
