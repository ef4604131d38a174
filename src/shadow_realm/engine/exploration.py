"""Stage visits: the progress meter and NPC conversations.

A StageRun tracks how far the player has got in the stage being visited.
Attacks, skills and finished conversations each push the meter up, capped
at 100. A DialogueSession steps through an NPC's canned lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from shadow_realm.core.exceptions import ValidationError
from shadow_realm.core.logging import get_logger
from shadow_realm.models.adventure import AdventureNPC
from shadow_realm.models.battle import AttackAction, BattleAction, SkillAction


logger = get_logger(__name__)

MAX_STAGE_PROGRESS = 100
ATTACK_PROGRESS = 10
SKILL_PROGRESS = 15
DIALOGUE_PROGRESS = 20


@dataclass
class StageRun:
    """Progress meter of one stage visit.

    Attributes:
        stage_id: The stage being visited.
        progress: Meter value in [0, 100].
    """

    stage_id: str
    progress: int = 0

    @property
    def is_ready(self) -> bool:
        """True once the meter is full."""
        return self.progress >= MAX_STAGE_PROGRESS

    def advance(self, amount: int) -> int:
        """Add to the meter, capped at 100.

        Returns:
            The new meter value.
        """
        self.progress = min(self.progress + max(0, amount), MAX_STAGE_PROGRESS)
        logger.debug("Stage progress", stage_id=self.stage_id, progress=self.progress)
        return self.progress

    def credit_action(self, action: BattleAction) -> int:
        """Credit a player battle action."""
        if isinstance(action, AttackAction):
            return self.advance(ATTACK_PROGRESS)
        if isinstance(action, SkillAction):
            return self.advance(SKILL_PROGRESS)
        return self.progress

    def credit_dialogue(self) -> int:
        """Credit a finished conversation."""
        return self.advance(DIALOGUE_PROGRESS)


@dataclass
class DialogueSession:
    """Conversation with one NPC.

    Attributes:
        npc: The NPC being talked to.
        index: Position of the current line.
    """

    npc: AdventureNPC
    index: int = 0
    completions: int = 0

    def __post_init__(self) -> None:
        if not self.npc.dialogue:
            raise ValidationError(
                "NPC has nothing to say",
                field_name="dialogue",
                details={"npc_id": self.npc.id},
            )

    @property
    def current_line(self) -> str:
        return self.npc.dialogue[self.index]

    @property
    def is_last_line(self) -> bool:
        return self.index >= len(self.npc.dialogue) - 1

    def advance(self) -> bool:
        """Move to the next line.

        Past the last line the conversation rewinds to the start.

        Returns:
            True if this call finished the conversation.
        """
        if not self.is_last_line:
            self.index += 1
            return False
        self.index = 0
        self.completions += 1
        logger.info("Conversation finished", npc_id=self.npc.id)
        return True


__all__ = [
    "MAX_STAGE_PROGRESS",
    "ATTACK_PROGRESS",
    "SKILL_PROGRESS",
    "DIALOGUE_PROGRESS",
    "StageRun",
    "DialogueSession",
]
