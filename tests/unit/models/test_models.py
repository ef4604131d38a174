"""Tests for the Pydantic domain models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shadow_realm.core.exceptions import (
    NotAuthenticatedError,
    ShadowNotFoundError,
    StageNotFoundError,
)
from shadow_realm.models import (
    AdventureProgress,
    AdventureStage,
    AttackAction,
    Battle,
    BattleAction,
    BattleTurn,
    DefendAction,
    RealmState,
    Shadow,
    Skill,
    SkillAction,
    StageReward,
    Stats,
    User,
)
from shadow_realm.models.enums import (
    Rarity,
    ShadowClass,
    Side,
    SkillType,
    StageRewardType,
)


def _stats(**overrides: int) -> Stats:
    values = {
        "health": 100,
        "max_health": 100,
        "attack": 10,
        "defense": 10,
        "speed": 10,
        "mana": 50,
        "max_mana": 50,
    }
    values.update(overrides)
    return Stats(**values)


class TestEnums:
    """Tests for enum helpers."""

    def test_rarity_rank_order(self) -> None:
        assert [r.rank for r in Rarity] == [0, 1, 2, 3]
        assert Rarity.LEGENDARY.rank > Rarity.COMMON.rank

    def test_class_display_name(self) -> None:
        assert ShadowClass.ASSASSIN.display_name == "Assassin"

    def test_reward_type_wire_value(self) -> None:
        assert StageRewardType.SHADOW_TOKENS == "shadowTokens"


class TestStats:
    """Tests for the stat block."""

    def test_health_above_max_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            _stats(health=101)

    def test_assignment_validated(self) -> None:
        stats = _stats()

        with pytest.raises(PydanticValidationError):
            stats.mana = 51
        with pytest.raises(PydanticValidationError):
            stats.health = -1

    def test_take_damage_clamps(self) -> None:
        stats = _stats(health=30)

        assert stats.take_damage(50) == 30
        assert stats.health == 0

    def test_take_negative_damage_ignored(self) -> None:
        stats = _stats()

        assert stats.take_damage(-5) == 0
        assert stats.health == 100

    def test_restore_health_clamps(self) -> None:
        stats = _stats(health=90)

        assert stats.restore_health(30) == 10
        assert stats.health == 100

    def test_spend_mana(self) -> None:
        stats = _stats()

        stats.spend_mana(20)

        assert stats.mana == 30

    def test_overspending_mana_rejected(self) -> None:
        stats = _stats(mana=5)

        with pytest.raises(PydanticValidationError):
            stats.spend_mana(10)


class TestShadow:
    """Tests for the Shadow model."""

    def test_defaults(self, shadow_factory: Any) -> None:
        shadow = shadow_factory("u1")

        assert shadow.level == 1
        assert shadow.experience == 0
        assert shadow.experience_to_next_level == 100
        assert len(shadow.id) == 32
        assert not shadow.is_defeated

    def test_name_length(self) -> None:
        with pytest.raises(PydanticValidationError):
            Shadow(
                name="x" * 51,
                shadow_class=ShadowClass.MAGE,
                rarity=Rarity.COMMON,
                stats=_stats(),
                owner_id="u1",
            )

    def test_get_skill(self, shadow_factory: Any) -> None:
        shadow = shadow_factory("u1", "archer")

        assert shadow.get_skill("arrow_shot").damage == 22
        assert shadow.get_skill("fireball") is None

    def test_defeated(self, shadow_factory: Any) -> None:
        shadow = shadow_factory("u1")
        shadow.stats.health = 0

        assert shadow.is_defeated

    def test_dump_reloads(self, shadow_factory: Any) -> None:
        shadow = shadow_factory("u1", "mage", "epic", level=4)

        data = shadow.model_dump(mode="json")
        restored = Shadow.model_validate(data)

        assert data["experience_to_next_level"] == 400
        assert data["shadow_class"] == "mage"
        assert restored.model_dump() == shadow.model_dump()

    def test_skill_is_frozen(self) -> None:
        skill = Skill(id="s", name="S", type=SkillType.BUFF)

        with pytest.raises(PydanticValidationError):
            skill.mana_cost = 3


class TestUser:
    """Tests for the User model."""

    def test_guest_defaults(self) -> None:
        user = User()

        assert user.id.startswith("guest_")
        assert user.username == "Shadow Mage"
        assert user.email == "guest@shadowrealm.com"
        assert user.shadow_tokens == 0

    def test_negative_balance_rejected(self) -> None:
        user = User(shadow_tokens=10)

        with pytest.raises(PydanticValidationError):
            user.shadow_tokens = -1

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            User(nickname="x")


class TestBattleModels:
    """Tests for actions, turns and battles."""

    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"kind": "attack"}, AttackAction),
            ({"kind": "skill", "skill_id": "slash"}, SkillAction),
            ({"kind": "defend"}, DefendAction),
        ],
    )
    def test_action_discriminator(self, payload: dict[str, str], expected: type) -> None:
        action = TypeAdapter(BattleAction).validate_python(payload)

        assert isinstance(action, expected)

    def test_skill_action_requires_id(self) -> None:
        with pytest.raises(PydanticValidationError):
            TypeAdapter(BattleAction).validate_python({"kind": "skill"})

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            TypeAdapter(BattleAction).validate_python({"kind": "flee"})

    def test_turn_number_starts_at_one(self) -> None:
        with pytest.raises(PydanticValidationError):
            BattleTurn(turn_number=0, actor=Side.PLAYER, action=AttackAction())

    def test_battle_helpers(self, shadow_factory: Any) -> None:
        player = shadow_factory("u1")
        opponent = shadow_factory("ai", name="Dark Warrior")
        battle = Battle(player_shadow=player, opponent_shadow=opponent)

        assert not battle.is_finished
        assert battle.next_turn_number == 1
        assert battle.shadow_for(Side.PLAYER) is player
        assert battle.shadow_for(Side.OPPONENT) is opponent


class TestAdventureModels:
    """Tests for stages and progress."""

    def test_reward_total(self) -> None:
        stage = AdventureStage(
            id="s",
            name="S",
            rewards=[
                StageReward(type=StageRewardType.EXPERIENCE, amount=60),
                StageReward(type=StageRewardType.EXPERIENCE, amount=40),
                StageReward(type=StageRewardType.SHADOW_TOKENS, amount=25),
            ],
        )

        assert stage.reward_total(StageRewardType.EXPERIENCE) == 100
        assert stage.reward_total(StageRewardType.ITEM) == 0
        assert not stage.has_content

    def test_reward_type_from_wire(self) -> None:
        reward = StageReward.model_validate({"type": "shadowTokens", "amount": 25})

        assert reward.type == StageRewardType.SHADOW_TOKENS

    def test_progress_counts(self) -> None:
        progress = AdventureProgress(completed_stages=["a", "b"], unlocked_stages=["a", "b", "c"])

        assert progress.stages_completed == 2
        assert progress.is_completed("a")
        assert progress.is_unlocked("c")
        assert not progress.is_completed("c")


class TestRealmState:
    """Tests for the aggregate state lookups."""

    def test_fresh(self) -> None:
        state = RealmState.fresh()

        assert state.user is None
        assert [s.id for s in state.stages] == [
            "mystical_forest_1",
            "shadow_caverns_1",
            "blood_moon_peaks",
        ]
        assert state.progress.unlocked_stages == ["mystical_forest_1"]
        assert state.battle is None

    def test_require_user(self, realm_state: Any) -> None:
        assert realm_state.require_user() is realm_state.user

        realm_state.user = None
        with pytest.raises(NotAuthenticatedError):
            realm_state.require_user()

    def test_shadow_lookups(self, realm_state: Any, warrior_shadow: Any, shadow_factory: Any) -> None:
        stranger = shadow_factory("other")
        realm_state.shadows = [*realm_state.shadows, stranger]

        assert realm_state.get_shadow(stranger.id) is stranger
        assert realm_state.owned_shadows() == [warrior_shadow]
        with pytest.raises(ShadowNotFoundError):
            realm_state.get_owned_shadow(stranger.id)
        with pytest.raises(ShadowNotFoundError):
            realm_state.get_shadow("missing")

    def test_stage_lookup(self, realm_state: Any) -> None:
        assert realm_state.get_stage("blood_moon_peaks").name == "Blood Moon Peaks"
        with pytest.raises(StageNotFoundError):
            realm_state.get_stage("atlantis")
