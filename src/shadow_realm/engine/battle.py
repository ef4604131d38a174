"""Turn-based battle resolution.

The BattleEngine runs at most one battle at a time, stored on the shared
RealmState. A battle moves preparation -> active -> finished. The player
acts through perform_action; the opponent's reply is scheduled on a
TurnScheduler after a short delay and can be cancelled. A scheduled reply
that finds its battle ended, replaced or already finished does nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shadow_realm.core.config import GameSettings
from shadow_realm.core.exceptions import (
    BattleInProgressError,
    InsufficientManaError,
    InvalidTurnError,
    NoActiveBattleError,
    SkillNotFoundError,
    UnsupportedBattleModeError,
)
from shadow_realm.core.logging import bind_context, get_logger, unbind_context
from shadow_realm.engine.dice import DiceRoller
from shadow_realm.engine.progression import ProgressionTracker
from shadow_realm.engine.scheduler import ManualScheduler
from shadow_realm.engine.stats import apply_level_growth, generate_stats, skills_for
from shadow_realm.models.battle import (
    AttackAction,
    Battle,
    BattleAction,
    BattleReward,
    BattleTurn,
    DefendAction,
    SkillAction,
)
from shadow_realm.models.enums import BattleMode, BattleStatus, ShadowClass, Side, SkillType
from shadow_realm.models.shadow import Shadow


if TYPE_CHECKING:
    from shadow_realm.engine.scheduler import ScheduledHandle, TurnScheduler
    from shadow_realm.models.state import RealmState

logger = get_logger(__name__)

OPPONENT_OWNER_ID = "ai"


class BattleEngine:
    """Resolve battles between a player shadow and a generated opponent.

    Example:
        >>> engine = BattleEngine(state, dice=DiceRoller(seed=1))
        >>> battle = engine.start_battle(shadow.id)
        >>> turn = engine.perform_action(AttackAction())
    """

    def __init__(
        self,
        state: RealmState,
        *,
        dice: DiceRoller | None = None,
        scheduler: TurnScheduler | None = None,
        progression: ProgressionTracker | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        """Initialize the battle engine.

        Args:
            state: The store holding the user, shadows and active battle.
            dice: Source of randomness.
            scheduler: Runs the delayed opponent turn.
            progression: Commits rewards when a won battle is ended.
            settings: Gameplay settings.
        """
        self._state = state
        self._settings = settings or GameSettings()
        self._dice = dice or DiceRoller()
        self._scheduler: TurnScheduler = scheduler or ManualScheduler()
        self._progression = progression or ProgressionTracker(state, self._settings)
        self._pending: ScheduledHandle | None = None
        logger.debug("BattleEngine initialized")

    @property
    def current_battle(self) -> Battle | None:
        """The active battle, if any."""
        return self._state.battle

    @property
    def has_pending_opponent_turn(self) -> bool:
        return self._pending is not None and not self._pending.cancelled()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_battle(self, shadow_id: str, mode: BattleMode = BattleMode.PVE) -> Battle:
        """Start a battle with one of the user's shadows.

        Args:
            shadow_id: Shadow to fight with; must belong to the current user.
            mode: Battle mode. Only PVE is supported.

        Returns:
            The new battle, in preparation with the player to move.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            ShadowNotFoundError: If the shadow is unknown or not owned.
            UnsupportedBattleModeError: For PVP.
            BattleInProgressError: If an unfinished battle exists.
        """
        shadow = self._state.get_owned_shadow(shadow_id)
        try:
            mode = BattleMode(mode)
        except ValueError as exc:
            raise UnsupportedBattleModeError(
                f"Unknown battle mode '{mode}'",
                details={"mode": str(mode)},
            ) from exc
        if mode != BattleMode.PVE:
            raise UnsupportedBattleModeError(
                f"Battle mode '{mode}' is not supported",
                details={"mode": str(mode)},
            )

        existing = self._state.battle
        if existing is not None:
            if not existing.is_finished:
                raise BattleInProgressError(
                    "A battle is already in progress",
                    battle_id=existing.id,
                    turn_number=existing.next_turn_number,
                )
            logger.info(
                "Finished battle discarded, rewards forfeited",
                battle_id=existing.id,
            )
            self.abandon()

        battle = Battle(
            mode=mode,
            player_shadow=shadow.model_copy(deep=True),
            opponent_shadow=self._generate_opponent(shadow),
        )
        self._state.battle = battle
        bind_context(battle_id=battle.id)
        logger.info(
            "Battle started",
            player=battle.player_shadow.name,
            opponent=battle.opponent_shadow.name,
            level=shadow.level,
        )
        return battle

    def end_battle(self) -> BattleReward | None:
        """Close the current battle.

        A finished battle won by the player commits its rewards. Ending an
        unfinished battle forfeits everything.

        Returns:
            The committed reward, or None.

        Raises:
            NoActiveBattleError: If there is no battle.
        """
        battle = self._require_battle()
        self._cancel_pending()

        reward: BattleReward | None = None
        if battle.is_finished and battle.winner == Side.PLAYER and battle.rewards:
            user = self._state.require_user()
            self._progression.apply_reward(user.id, battle.player_shadow.id, battle.rewards)
            reward = battle.rewards
            logger.info("Battle ended with rewards", reward=reward.model_dump())
        else:
            logger.info("Battle ended without rewards", status=str(battle.status))

        self._state.battle = None
        unbind_context("battle_id")
        return reward

    def abandon(self) -> None:
        """Drop the current battle, if any, without rewards."""
        self._cancel_pending()
        if self._state.battle is not None:
            logger.debug("Battle abandoned", battle_id=self._state.battle.id)
        self._state.battle = None
        unbind_context("battle_id")

    # -------------------------------------------------------------------------
    # Turns
    # -------------------------------------------------------------------------

    def perform_action(self, action: BattleAction) -> BattleTurn:
        """Resolve a player action.

        Raises:
            NoActiveBattleError: If there is no battle.
            InvalidTurnError: If the battle is finished or it is not the
                player's turn.
            SkillNotFoundError: If the skill is not in the shadow's kit.
            InsufficientManaError: If the shadow lacks mana for the skill.
        """
        battle = self._require_battle()
        if battle.is_finished:
            raise InvalidTurnError(
                "Battle is already finished",
                battle_id=battle.id,
                turn_number=battle.next_turn_number,
            )
        if battle.current_turn != Side.PLAYER:
            raise InvalidTurnError(
                "It is not the player's turn",
                battle_id=battle.id,
                turn_number=battle.next_turn_number,
            )

        turn = self._resolve(battle, Side.PLAYER, action)
        if not battle.is_finished:
            battle.current_turn = Side.OPPONENT
            self._schedule_opponent_turn(battle.id)
        return turn

    def resolve_opponent_turn(self) -> BattleTurn:
        """Run the pending opponent turn immediately.

        Raises:
            NoActiveBattleError: If there is no battle.
            InvalidTurnError: If it is not the opponent's turn.
        """
        battle = self._require_battle()
        if battle.is_finished or battle.current_turn != Side.OPPONENT:
            raise InvalidTurnError(
                "It is not the opponent's turn",
                battle_id=battle.id,
                turn_number=battle.next_turn_number,
            )
        self._cancel_pending()
        return self._opponent_turn(battle)

    def _schedule_opponent_turn(self, battle_id: str) -> None:
        self._cancel_pending()
        self._pending = self._scheduler.call_later(
            self._settings.opponent_turn_delay,
            lambda: self._on_opponent_timer(battle_id),
        )

    def _on_opponent_timer(self, battle_id: str) -> None:
        battle = self._state.battle
        if (
            battle is None
            or battle.id != battle_id
            or battle.is_finished
            or battle.current_turn != Side.OPPONENT
        ):
            logger.debug("Stale opponent turn discarded", battle_id=battle_id)
            return
        self._pending = None
        self._opponent_turn(battle)

    def _opponent_turn(self, battle: Battle) -> BattleTurn:
        turn = self._resolve(battle, Side.OPPONENT, AttackAction())
        if not battle.is_finished:
            battle.current_turn = Side.PLAYER
        return turn

    def _resolve(self, battle: Battle, actor: Side, action: BattleAction) -> BattleTurn:
        attacker = battle.shadow_for(actor)
        target_side = Side.OPPONENT if actor == Side.PLAYER else Side.PLAYER
        target = battle.shadow_for(target_side)

        damage = 0
        healing = 0
        mana_spent = 0

        if isinstance(action, AttackAction):
            damage = attacker.stats.attack + self._dice.roll_bonus(self._settings.attack_bonus_die)
        elif isinstance(action, SkillAction):
            skill = attacker.get_skill(action.skill_id)
            if skill is None:
                raise SkillNotFoundError(
                    f"Skill '{action.skill_id}' is not known by {attacker.name}",
                    battle_id=battle.id,
                    turn_number=battle.next_turn_number,
                    details={"skill_id": action.skill_id},
                )
            if attacker.stats.mana < skill.mana_cost:
                raise InsufficientManaError(
                    f"Not enough mana for {skill.name}",
                    battle_id=battle.id,
                    turn_number=battle.next_turn_number,
                    details={"mana": attacker.stats.mana, "mana_cost": skill.mana_cost},
                )
            attacker.stats.spend_mana(skill.mana_cost)
            mana_spent = skill.mana_cost
            if skill.type == SkillType.ATTACK and skill.damage is not None:
                damage = skill.damage + self._dice.roll_bonus(self._settings.attack_bonus_die)
            elif skill.type == SkillType.HEAL:
                healing = self._settings.heal_base + self._dice.roll_bonus(
                    self._settings.heal_bonus_die
                )
        elif isinstance(action, DefendAction):
            pass

        if battle.status == BattleStatus.PREPARATION:
            battle.status = BattleStatus.ACTIVE

        dealt = target.stats.take_damage(damage)
        healed = attacker.stats.restore_health(healing)
        turn = BattleTurn(
            turn_number=battle.next_turn_number,
            actor=actor,
            action=action,
            damage=dealt,
            healing=healed,
            mana_spent=mana_spent,
        )
        battle.turns = [*battle.turns, turn]
        logger.info(
            "Turn resolved",
            turn=turn.turn_number,
            actor=str(actor),
            action=action.kind,
            damage=dealt,
            healing=healed,
            target_health=target.stats.health,
        )

        self._check_finished(battle)
        return turn

    def _check_finished(self, battle: Battle) -> None:
        if battle.opponent_shadow.is_defeated:
            battle.rewards = BattleReward(
                experience=self._dice.roll_range(
                    self._settings.reward_experience_min,
                    self._settings.reward_experience_max,
                ),
                shadow_tokens=self._dice.roll_range(
                    self._settings.reward_tokens_min,
                    self._settings.reward_tokens_max,
                ),
            )
            battle.winner = Side.PLAYER
            battle.status = BattleStatus.FINISHED
            logger.info("Battle won", rewards=battle.rewards.model_dump())
        elif battle.player_shadow.is_defeated:
            battle.winner = Side.OPPONENT
            battle.status = BattleStatus.FINISHED
            logger.info("Battle lost")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _generate_opponent(self, player: Shadow) -> Shadow:
        classes = list(ShadowClass)
        shadow_class = classes[self._dice.roll_bonus(len(classes))]
        opponent = Shadow(
            name=f"Dark {shadow_class.display_name}",
            shadow_class=shadow_class,
            rarity=player.rarity,
            stats=generate_stats(shadow_class, player.rarity),
            skills=skills_for(shadow_class),
            owner_id=OPPONENT_OWNER_ID,
        )
        while opponent.level < player.level:
            apply_level_growth(opponent)
        return opponent

    def _require_battle(self) -> Battle:
        battle = self._state.battle
        if battle is None:
            raise NoActiveBattleError("No battle in progress")
        return battle

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


__all__ = [
    "OPPONENT_OWNER_ID",
    "BattleEngine",
]
