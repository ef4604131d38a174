"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Shadow Realm test suite.
"""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from shadow_realm.engine.dice import DiceRoller


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Dice Doubles
# =============================================================================


class StubDiceRoller(DiceRoller):
    """DiceRoller returning scripted bonuses.

    Queued values are consumed first; afterwards every roll returns
    ``default``. Values are clamped into [0, die - 1] so a script can never
    produce an impossible roll.
    """

    def __init__(self, *values: int, default: int = 0) -> None:
        super().__init__()
        self._values: deque[int] = deque(values)
        self.default = default
        self.calls: list[int] = []

    def queue(self, *values: int) -> None:
        self._values.extend(values)

    def roll_bonus(self, die: int) -> int:
        self.calls.append(die)
        value = self._values.popleft() if self._values else self.default
        return max(0, min(value, die - 1))


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from shadow_realm.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "SHADOW_REALM_DEBUG": "true",
        "SHADOW_REALM_LOG_LEVEL": "DEBUG",
        "SHADOW_REALM_GAME_STARTING_TOKENS": "250",
        "SHADOW_REALM_GAME_OPPONENT_TURN_DELAY": "0.5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def game_settings() -> Any:
    """Default gameplay settings."""
    from shadow_realm.core.config import GameSettings

    return GameSettings()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Application settings pointing at a temporary database.

    Also moves the working directory to tmp_path so no stray data
    directory is created in the repository.
    """
    from shadow_realm.core.config import Settings, StorageSettings

    monkeypatch.chdir(tmp_path)
    return Settings(storage=StorageSettings(database_path=tmp_path / "shadow_realm.db"))


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def stub_dice() -> StubDiceRoller:
    """Dice that always roll the lowest value.

    With every bonus at zero the opponent is a warrior, attacks deal
    exactly their base damage and rewards sit at their minimums.
    """
    return StubDiceRoller()


@pytest.fixture
def manual_scheduler() -> Any:
    """Scheduler on a virtual clock."""
    from shadow_realm.engine.scheduler import ManualScheduler

    return ManualScheduler()


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def guest_user() -> Any:
    """A guest user holding the default starting balance."""
    from shadow_realm.models.shadow import User

    return User(shadow_tokens=100)


@pytest.fixture
def realm_state(guest_user: Any) -> Any:
    """Fresh state with a logged-in guest and the default stages."""
    from shadow_realm.models.state import RealmState

    return RealmState.fresh(guest_user)


def _make_shadow(
    owner_id: str,
    shadow_class: str = "warrior",
    rarity: str = "common",
    *,
    name: str = "Umbra",
    level: int = 1,
) -> Any:
    """Build a shadow with generated stats and its class kit."""
    from shadow_realm.engine.stats import generate_stats, skills_for
    from shadow_realm.models.enums import Rarity, ShadowClass
    from shadow_realm.models.shadow import Shadow

    cls = ShadowClass(shadow_class)
    tier = Rarity(rarity)
    return Shadow(
        name=name,
        shadow_class=cls,
        rarity=tier,
        level=level,
        stats=generate_stats(cls, tier),
        skills=skills_for(cls),
        owner_id=owner_id,
    )


@pytest.fixture
def shadow_factory() -> Any:
    """Factory building shadows: (owner_id, class, rarity, *, name, level)."""
    return _make_shadow


@pytest.fixture
def warrior_shadow(realm_state: Any) -> Any:
    """A common warrior owned by the guest and stored in the state."""
    shadow = _make_shadow(realm_state.user.id, "warrior")
    realm_state.shadows = [*realm_state.shadows, shadow]
    return shadow


@pytest.fixture
def mage_shadow(realm_state: Any) -> Any:
    """A common mage owned by the guest and stored in the state."""
    shadow = _make_shadow(realm_state.user.id, "mage", name="Nyx")
    realm_state.shadows = [*realm_state.shadows, shadow]
    return shadow


@pytest.fixture
def battle_engine(
    realm_state: Any,
    stub_dice: StubDiceRoller,
    manual_scheduler: Any,
    game_settings: Any,
) -> Any:
    """BattleEngine wired to the stub dice and manual scheduler."""
    from shadow_realm.engine.battle import BattleEngine
    from shadow_realm.engine.progression import ProgressionTracker

    return BattleEngine(
        realm_state,
        dice=stub_dice,
        scheduler=manual_scheduler,
        progression=ProgressionTracker(realm_state, game_settings),
        settings=game_settings,
    )


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Any:
    """Snapshot database in a temporary directory."""
    from shadow_realm.storage.database import SnapshotDatabase

    return SnapshotDatabase(tmp_path / "snapshots.db")


@pytest.fixture
def gateway(database: Any) -> Any:
    """Typed snapshot gateway over the temporary database."""
    from shadow_realm.storage.snapshots import SnapshotGateway

    return SnapshotGateway(database)


@pytest.fixture
def game(settings: Any, gateway: Any, stub_dice: StubDiceRoller, manual_scheduler: Any) -> Any:
    """Loaded game facade with a guest logged in."""
    from shadow_realm.game import ShadowRealmGame

    game = ShadowRealmGame(
        settings=settings,
        gateway=gateway,
        dice=stub_dice,
        scheduler=manual_scheduler,
    )
    game.load()
    return game
