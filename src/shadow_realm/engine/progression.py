"""Rewards, levelling and the stage unlock graph.

The ProgressionTracker is the only component that changes a user's
balance outside of shadow creation, a shadow's experience and level, or
adventure progress. It mutates the RealmState it was given and leaves
persistence to its caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shadow_realm.core.config import GameSettings
from shadow_realm.core.exceptions import ShadowNotFoundError
from shadow_realm.core.logging import get_logger
from shadow_realm.engine.stats import apply_level_growth
from shadow_realm.models.enums import StageRewardType


if TYPE_CHECKING:
    from shadow_realm.models.adventure import AdventureStage
    from shadow_realm.models.battle import BattleReward
    from shadow_realm.models.shadow import Shadow
    from shadow_realm.models.state import RealmState

logger = get_logger(__name__)


@dataclass(frozen=True)
class StageCompletion:
    """Outcome of completing a stage.

    Attributes:
        stage_id: The completed stage.
        already_completed: True when the stage had been completed before
            and nothing changed.
        newly_unlocked: Stage ids unlocked by this completion.
        experience: Experience granted.
        shadow_tokens: Tokens granted.
    """

    stage_id: str
    already_completed: bool = False
    newly_unlocked: tuple[str, ...] = field(default_factory=tuple)
    experience: int = 0
    shadow_tokens: int = 0


def is_unlockable(stage: AdventureStage, completed: set[str] | list[str]) -> bool:
    """Whether every prerequisite of a stage has been completed."""
    return all(req in completed for req in stage.unlock_requirements)


class ProgressionTracker:
    """Apply rewards and evaluate the stage graph.

    Example:
        >>> tracker = ProgressionTracker(state, settings.game)
        >>> tracker.complete_stage("mystical_forest_1").newly_unlocked
        ('shadow_caverns_1',)
    """

    def __init__(self, state: RealmState, settings: GameSettings | None = None) -> None:
        """Initialize the tracker.

        Args:
            state: The store to mutate.
            settings: Gameplay settings. Defaults to GameSettings().
        """
        self._state = state
        self._settings = settings or GameSettings()

    @property
    def state(self) -> RealmState:
        return self._state

    # -------------------------------------------------------------------------
    # Rewards and levelling
    # -------------------------------------------------------------------------

    def apply_reward(self, user_id: str, shadow_id: str, reward: BattleReward) -> Shadow:
        """Commit a battle reward.

        Tokens go to the user, experience to the shadow. The shadow levels
        up as many times as its experience allows, carrying the remainder.

        Raises:
            ShadowNotFoundError: If the shadow is unknown.

        Returns:
            The updated shadow.
        """
        user = self._state.user
        if user is not None and user.id == user_id:
            user.shadow_tokens = user.shadow_tokens + reward.shadow_tokens
        else:
            logger.warning("Reward user is not logged in, tokens dropped", user_id=user_id)

        shadow = self._state.get_shadow(shadow_id)
        shadow.experience = shadow.experience + reward.experience
        while shadow.experience >= shadow.experience_to_next_level:
            carry = shadow.experience - shadow.experience_to_next_level
            apply_level_growth(shadow)
            shadow.experience = carry
            logger.info("Shadow levelled up", shadow_id=shadow.id, level=shadow.level)

        logger.info(
            "Reward applied",
            user_id=user_id,
            shadow_id=shadow_id,
            experience=reward.experience,
            shadow_tokens=reward.shadow_tokens,
        )
        return shadow

    def level_up(self, shadow_id: str) -> Shadow:
        """Raise a shadow one level and reset its experience.

        Raises:
            ShadowNotFoundError: If the shadow is unknown.
        """
        try:
            shadow = self._state.get_shadow(shadow_id)
        except ShadowNotFoundError:
            logger.warning("Level up requested for unknown shadow", shadow_id=shadow_id)
            raise

        apply_level_growth(shadow)
        shadow.experience = 0
        logger.info("Shadow levelled up", shadow_id=shadow.id, level=shadow.level)
        return shadow

    # -------------------------------------------------------------------------
    # Stage graph
    # -------------------------------------------------------------------------

    def complete_stage(self, stage_id: str) -> StageCompletion:
        """Mark a stage completed and unlock what it opens.

        Completing an already completed stage changes nothing.

        Raises:
            StageNotFoundError: If the stage id is unknown.
        """
        stage = self._state.get_stage(stage_id)
        progress = self._state.progress

        if progress.is_completed(stage_id):
            logger.info("Stage already completed", stage_id=stage_id)
            return StageCompletion(stage_id=stage_id, already_completed=True)

        stage.is_completed = True
        progress.completed_stages = [*progress.completed_stages, stage_id]

        completed = set(progress.completed_stages)
        newly_unlocked = [
            s.id
            for s in self._state.stages
            if not progress.is_unlocked(s.id) and is_unlockable(s, completed)
        ]
        if newly_unlocked:
            progress.unlocked_stages = [*progress.unlocked_stages, *newly_unlocked]
            progress.current_stage = newly_unlocked[0]

        experience = stage.reward_total(StageRewardType.EXPERIENCE)
        tokens = stage.reward_total(StageRewardType.SHADOW_TOKENS)
        progress.total_experience = progress.total_experience + experience
        progress.total_shadow_tokens = progress.total_shadow_tokens + tokens
        progress.battles_won = progress.battles_won + self._settings.stage_battles_won_increment
        progress.shadows_discovered = (
            progress.shadows_discovered + self._settings.stage_shadows_discovered_increment
        )

        user = self._state.user
        if user is not None:
            user.experience = user.experience + experience
            user.shadow_tokens = user.shadow_tokens + tokens

        logger.info(
            "Stage completed",
            stage_id=stage_id,
            unlocked=newly_unlocked,
            experience=experience,
            shadow_tokens=tokens,
        )
        return StageCompletion(
            stage_id=stage_id,
            newly_unlocked=tuple(newly_unlocked),
            experience=experience,
            shadow_tokens=tokens,
        )


__all__ = [
    "StageCompletion",
    "ProgressionTracker",
    "is_unlockable",
]
