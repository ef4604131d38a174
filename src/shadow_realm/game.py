"""Game facade.

ShadowRealmGame is the surface a presentation layer talks to. It owns the
RealmState, wires the engine components around it, and pushes snapshots
to storage after every change. Saving is best-effort: a failed write is
logged and play continues.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from pydantic import ValidationError as PydanticValidationError

from shadow_realm.core.config import Settings, get_settings
from shadow_realm.core.exceptions import (
    InsufficientCurrencyError,
    InvalidGameStateError,
    NPCNotFoundError,
    StageLockedError,
    StorageError,
    ValidationError,
)
from shadow_realm.core.logging import get_logger
from shadow_realm.engine.battle import BattleEngine
from shadow_realm.engine.content import (
    ContentGenerator,
    PlaceholderContentGenerator,
    populate_stage,
)
from shadow_realm.engine.dice import DiceRoller
from shadow_realm.engine.exploration import DialogueSession, StageRun
from shadow_realm.engine.progression import ProgressionTracker, StageCompletion
from shadow_realm.engine.scheduler import ManualScheduler, TurnScheduler
from shadow_realm.engine.stats import generate_stats, roll_rarity, skills_for
from shadow_realm.models.adventure import AdventureStage, default_stages, initial_progress
from shadow_realm.models.battle import Battle, BattleAction, BattleReward, BattleTurn
from shadow_realm.models.enums import BattleMode, ShadowClass
from shadow_realm.models.shadow import Shadow, User
from shadow_realm.models.state import RealmState
from shadow_realm.storage.database import get_database
from shadow_realm.storage.snapshots import SnapshotGateway


logger = get_logger(__name__)

T = TypeVar("T")


class ShadowRealmGame:
    """Session-level entry point of the game core.

    Example:
        >>> game = ShadowRealmGame()
        >>> game.load()
        >>> shadow = game.create_shadow("Umbra", "warrior")
        >>> game.start_battle(shadow.id)
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        gateway: SnapshotGateway | None = None,
        dice: DiceRoller | None = None,
        scheduler: TurnScheduler | None = None,
        content: ContentGenerator | None = None,
        state: RealmState | None = None,
    ) -> None:
        """Initialize the game.

        Args:
            settings: Application settings. Defaults to get_settings().
            gateway: Snapshot storage. Defaults to the configured database.
            dice: Source of randomness.
            scheduler: Runs the delayed opponent turn.
            content: Generates stage content on first visit.
            state: Initial state. Defaults to a fresh logged-out state.
        """
        self._settings = settings or get_settings()
        self._gateway = gateway or SnapshotGateway(get_database())
        self._dice = dice or DiceRoller()
        self._scheduler: TurnScheduler = scheduler or ManualScheduler()
        self._content: ContentGenerator = content or PlaceholderContentGenerator()
        self._state = state if state is not None else RealmState.fresh()

        game_settings = self._settings.game
        self._progression = ProgressionTracker(self._state, game_settings)
        self._battles = BattleEngine(
            self._state,
            dice=self._dice,
            scheduler=self._scheduler,
            progression=self._progression,
            settings=game_settings,
        )
        self._stage_run: StageRun | None = None
        self._dialogue: DialogueSession | None = None
        logger.info("Game initialized", version=self._settings.app_version)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> RealmState:
        return self._state

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def current_battle(self) -> Battle | None:
        return self._state.battle

    @property
    def stage_run(self) -> StageRun | None:
        """Progress meter of the stage being visited."""
        return self._stage_run

    @property
    def dialogue(self) -> DialogueSession | None:
        return self._dialogue

    @property
    def battles(self) -> BattleEngine:
        return self._battles

    @property
    def progression(self) -> ProgressionTracker:
        return self._progression

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def load(self) -> RealmState:
        """Restore state from snapshots, falling back to defaults.

        Unreadable snapshots are logged and replaced. Without a stored user
        a guest is logged in when auto_login_guest is enabled.
        """
        state = self._state
        state.user = self._load_or_default("user", self._gateway.load_user, lambda: None)
        state.shadows = self._load_or_default("shadows", self._gateway.load_shadows, list)
        state.stages = self._load_or_default("stages", self._gateway.load_stages, default_stages)
        state.progress = self._load_or_default(
            "progress",
            self._gateway.load_progress,
            lambda: initial_progress(state.stages),
        )

        if state.user is None and self._settings.game.auto_login_guest:
            self.login()

        logger.info(
            "State loaded",
            user_id=state.user.id if state.user else None,
            shadows=len(state.shadows),
            completed_stages=len(state.progress.completed_stages),
        )
        return state

    def login(self) -> User:
        """Log in as a guest, or return the user already logged in."""
        if self._state.user is not None:
            return self._state.user
        user = User(shadow_tokens=self._settings.game.starting_tokens)
        self._state.user = user
        logger.info("Guest logged in", user_id=user.id)
        self._save_user()
        return user

    def register(self, username: str, email: str) -> User:
        """Create and log in a named user.

        Raises:
            InvalidGameStateError: If a user is already logged in.
            ValidationError: If the username or email is unusable.
        """
        if self._state.user is not None:
            raise InvalidGameStateError(
                "Log out before registering a new user",
                current_state="logged_in",
                expected_states=["logged_out"],
            )
        username = username.strip()
        email = email.strip()
        if not email:
            raise ValidationError("Email must not be empty", field_name="email")
        try:
            user = User(
                username=username,
                email=email,
                shadow_tokens=self._settings.game.starting_tokens,
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid username",
                field_name="username",
                invalid_value=username,
            ) from exc

        self._state.user = user
        logger.info("User registered", user_id=user.id, username=username)
        self._save_user()
        return user

    def logout(self) -> None:
        """Forget the user and everything they own, here and in storage."""
        self._battles.abandon()
        self._stage_run = None
        self._dialogue = None

        fresh = RealmState.fresh()
        self._state.user = None
        self._state.shadows = []
        self._state.stages = fresh.stages
        self._state.progress = fresh.progress

        try:
            self._gateway.clear()
        except StorageError as exc:
            logger.warning("Failed to clear snapshots", error=str(exc))
        logger.info("Logged out")

    # -------------------------------------------------------------------------
    # Shadows
    # -------------------------------------------------------------------------

    def create_shadow(self, name: str, shadow_class: ShadowClass | str) -> Shadow:
        """Forge a new shadow for the current user.

        The rarity is rolled; the creation cost is taken from the balance.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            ValidationError: For an empty or overlong name or unknown class.
            InsufficientCurrencyError: If the balance is below the cost.
        """
        user = self._state.require_user()
        name = name.strip()
        if not name:
            raise ValidationError("Shadow name must not be empty", field_name="name")
        if len(name) > 50:
            raise ValidationError(
                "Shadow name is too long",
                field_name="name",
                invalid_value=name,
            )
        try:
            shadow_class = ShadowClass(shadow_class)
        except ValueError as exc:
            raise ValidationError(
                "Unknown shadow class",
                field_name="shadow_class",
                invalid_value=shadow_class,
            ) from exc

        cost = self._settings.game.shadow_creation_cost
        if user.shadow_tokens < cost:
            raise InsufficientCurrencyError(
                "Not enough shadow tokens to forge a shadow",
                cost=cost,
                balance=user.shadow_tokens,
            )

        rarity = roll_rarity(self._dice)
        shadow = Shadow(
            name=name,
            shadow_class=shadow_class,
            rarity=rarity,
            stats=generate_stats(shadow_class, rarity),
            skills=skills_for(shadow_class),
            owner_id=user.id,
        )
        user.shadow_tokens = user.shadow_tokens - cost
        self._state.shadows = [*self._state.shadows, shadow]

        logger.info(
            "Shadow created",
            shadow_id=shadow.id,
            shadow_class=str(shadow_class),
            rarity=str(rarity),
        )
        self._save_user()
        self._save_shadows()
        return shadow

    def list_owned_shadows(self) -> list[Shadow]:
        return self._state.owned_shadows()

    def level_up_shadow(self, shadow_id: str) -> Shadow:
        """Level up one of the current user's shadows."""
        self._state.get_owned_shadow(shadow_id)
        shadow = self._progression.level_up(shadow_id)
        self._save_shadows()
        return shadow

    # -------------------------------------------------------------------------
    # Battles
    # -------------------------------------------------------------------------

    def start_battle(self, shadow_id: str, mode: BattleMode | str = BattleMode.PVE) -> Battle:
        return self._battles.start_battle(shadow_id, mode)

    def perform_battle_action(self, action: BattleAction) -> BattleTurn:
        """Resolve a player action and credit the stage being visited."""
        turn = self._battles.perform_action(action)
        if self._stage_run is not None:
            self._stage_run.credit_action(action)
        return turn

    def resolve_opponent_turn(self) -> BattleTurn:
        return self._battles.resolve_opponent_turn()

    def end_battle(self) -> BattleReward | None:
        """End the battle, committing rewards of a victory."""
        reward = self._battles.end_battle()
        if reward is not None:
            self._save_user()
            self._save_shadows()
        return reward

    # -------------------------------------------------------------------------
    # Adventure
    # -------------------------------------------------------------------------

    def enter_stage(self, stage_id: str) -> StageRun:
        """Visit an unlocked stage, generating its content on first visit.

        Raises:
            NotAuthenticatedError: If no user is logged in.
            StageNotFoundError: If the stage is unknown.
            StageLockedError: If the stage is not unlocked yet.
        """
        self._state.require_user()
        self._unlocked_stage(stage_id)
        self._stage_run = StageRun(stage_id=stage_id)
        self._dialogue = None
        logger.info("Stage entered", stage_id=stage_id)
        return self._stage_run

    def leave_stage(self) -> None:
        self._stage_run = None
        self._dialogue = None

    def talk_to_npc(self, npc_id: str) -> DialogueSession:
        """Start a conversation with an NPC of the current stage.

        Raises:
            InvalidGameStateError: If no stage is being visited.
            NPCNotFoundError: If the NPC is not in the stage.
        """
        run = self._require_stage_run()
        npc = self._state.get_stage(run.stage_id).get_npc(npc_id)
        if npc is None:
            raise NPCNotFoundError(
                "NPC not found in stage",
                stage_id=run.stage_id,
                details={"npc_id": npc_id},
            )
        self._dialogue = DialogueSession(npc=npc)
        return self._dialogue

    def advance_dialogue(self) -> bool:
        """Step the conversation; finishing it credits stage progress.

        Returns:
            True if the conversation just finished.

        Raises:
            InvalidGameStateError: If no conversation is open.
        """
        if self._dialogue is None:
            raise InvalidGameStateError(
                "No conversation in progress",
                current_state="exploring",
                expected_states=["dialogue"],
            )
        finished = self._dialogue.advance()
        if finished:
            self._require_stage_run().credit_dialogue()
        return finished

    def complete_stage(self, stage_id: str) -> StageCompletion:
        """Complete an unlocked stage and persist the new progress.

        Raises:
            NotAuthenticatedError: If no user is logged in.
            StageNotFoundError: If the stage is unknown.
            StageLockedError: If the stage is not unlocked yet.
        """
        self._state.require_user()
        self._unlocked_stage(stage_id)
        completion = self._progression.complete_stage(stage_id)
        if not completion.already_completed:
            self._save_progress()
            self._save_stages()
            self._save_user()
        if self._stage_run is not None and self._stage_run.stage_id == stage_id:
            self._stage_run = None
            self._dialogue = None
        return completion

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _unlocked_stage(self, stage_id: str) -> AdventureStage:
        """Return an unlocked stage, generating its content if still empty."""
        stage = self._state.get_stage(stage_id)
        if not self._state.progress.is_unlocked(stage_id):
            raise StageLockedError(
                "Stage is locked",
                stage_id=stage_id,
                details={"requires": stage.unlock_requirements},
            )
        if populate_stage(stage, self._content):
            logger.info("Stage content generated", stage_id=stage_id)
            self._save_stages()
        return stage

    def _require_stage_run(self) -> StageRun:
        if self._stage_run is None:
            raise InvalidGameStateError(
                "No stage is being visited",
                current_state="map",
                expected_states=["exploring"],
            )
        return self._stage_run

    def _load_or_default(
        self,
        what: str,
        loader: Callable[[], T | None],
        default: Callable[[], T],
    ) -> T:
        try:
            value = loader()
        except StorageError as exc:
            logger.warning(
                "Unreadable snapshot replaced with defaults",
                snapshot=what,
                error=str(exc),
            )
            return default()
        return default() if value is None else value

    def _save_user(self) -> None:
        if self._state.user is not None:
            self._save("user", self._gateway.save_user, self._state.user)

    def _save_shadows(self) -> None:
        self._save("shadows", self._gateway.save_shadows, self._state.shadows)

    def _save_progress(self) -> None:
        self._save("progress", self._gateway.save_progress, self._state.progress)

    def _save_stages(self) -> None:
        self._save("stages", self._gateway.save_stages, self._state.stages)

    def _save(self, what: str, saver: Callable[[T], None], value: T) -> None:
        try:
            saver(value)
        except StorageError as exc:
            logger.warning("Failed to save snapshot", snapshot=what, error=str(exc))


__all__ = ["ShadowRealmGame"]
