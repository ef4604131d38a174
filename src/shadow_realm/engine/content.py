"""Stage content generation.

Stages ship without enemies, NPCs or rewards; the first visit asks a
ContentGenerator to fill them in. The placeholder generator returns the
same canned cast for every stage, with ids derived from the stage id.
"""

from __future__ import annotations

from typing import Protocol

from shadow_realm.models.adventure import (
    AdventureEnemy,
    AdventureNPC,
    AdventureStage,
    NPCService,
    ShopItem,
    StageReward,
)
from shadow_realm.models.enums import (
    NPCRole,
    NPCServiceType,
    ShopItemType,
    StageRewardType,
)


class ContentGenerator(Protocol):
    """Produces the cast and rewards of a stage."""

    def enemies_for(self, stage: AdventureStage) -> list[AdventureEnemy]: ...

    def npcs_for(self, stage: AdventureStage) -> list[AdventureNPC]: ...

    def rewards_for(self, stage: AdventureStage) -> list[StageReward]: ...


class PlaceholderContentGenerator:
    """Canned content used until a real generator is plugged in."""

    def enemies_for(self, stage: AdventureStage) -> list[AdventureEnemy]:
        return [
            AdventureEnemy(
                id=f"enemy_{stage.id}_1",
                name="Shadow Sentinel",
                description="A guardian of the ancient forest, corrupted by dark magic.",
                avatar="sentinel",
                level=5,
                personality="Stoic and determined",
                battle_dialogue=[
                    "You dare enter these sacred grounds?",
                    "The shadows will consume you!",
                    "Your journey ends here, mortal.",
                ],
                defeat_dialogue=[
                    "How... is this possible?",
                    "The darkness... it fades...",
                    "Perhaps you are the one foretold...",
                ],
            ),
            AdventureEnemy(
                id=f"enemy_{stage.id}_2",
                name="Mist Weaver",
                description="A mysterious entity that manipulates the mists and shadows.",
                avatar="weaver",
                level=6,
                personality="Enigmatic and cunning",
                battle_dialogue=[
                    "The mist reveals all truths...",
                    "Your fears will become reality!",
                    "Dance with the shadows, if you dare.",
                ],
                defeat_dialogue=[
                    "The mist... it clears...",
                    "You have strength I did not foresee.",
                    "This is but one battle in a greater war.",
                ],
            ),
        ]

    def npcs_for(self, stage: AdventureStage) -> list[AdventureNPC]:
        return [
            AdventureNPC(
                id=f"npc_{stage.id}_1",
                name="Elder Whisper",
                description="An ancient keeper of forest lore and shadow magic.",
                avatar="elder",
                role=NPCRole.GUIDE,
                dialogue=[
                    "Welcome, shadow walker. Few venture this deep into the Whispering Woods.",
                    "The shadows here have grown restless since the Blood Moon appeared.",
                    "If you seek to restore balance, you must first defeat the corrupted guardians.",
                    "Take this knowledge with you: shadows fear not the light, but the truth it reveals.",
                ],
                personality="Wise and mysterious",
            ),
            AdventureNPC(
                id=f"npc_{stage.id}_2",
                name="Raven Merchant",
                description="A traveling merchant who deals in rare shadow artifacts.",
                avatar="merchant",
                role=NPCRole.MERCHANT,
                dialogue=[
                    "Ah, a customer! Rare to find the living in these parts.",
                    "I have wares from across the shadow realms. What catches your eye?",
                    "These potions? Made from the essence of moonlight and shadow. Very potent.",
                    "Return when you have more shadow tokens. I might have... special items "
                    "for a discerning collector.",
                ],
                personality="Shrewd and knowledgeable",
                services=[
                    NPCService(
                        type=NPCServiceType.SHOP,
                        items=[
                            ShopItem(
                                id="health_potion",
                                name="Shadow Essence Potion",
                                description="Restores 50 health to a shadow",
                                cost=15,
                                type=ShopItemType.POTION,
                                effect="heal_50",
                            ),
                            ShopItem(
                                id="mana_potion",
                                name="Moonlight Vial",
                                description="Restores 30 mana to a shadow",
                                cost=12,
                                type=ShopItemType.POTION,
                                effect="mana_30",
                            ),
                        ],
                    )
                ],
            ),
        ]

    def rewards_for(self, stage: AdventureStage) -> list[StageReward]:
        return [
            StageReward(type=StageRewardType.EXPERIENCE, amount=100),
            StageReward(type=StageRewardType.SHADOW_TOKENS, amount=25),
        ]


def populate_stage(stage: AdventureStage, generator: ContentGenerator) -> bool:
    """Fill whatever content a stage is missing.

    Returns:
        True if anything was generated.
    """
    changed = False
    if not stage.enemies:
        stage.enemies = generator.enemies_for(stage)
        changed = True
    if not stage.npcs:
        stage.npcs = generator.npcs_for(stage)
        changed = True
    if not stage.rewards:
        stage.rewards = generator.rewards_for(stage)
        changed = True
    return changed


__all__ = [
    "ContentGenerator",
    "PlaceholderContentGenerator",
    "populate_stage",
]
