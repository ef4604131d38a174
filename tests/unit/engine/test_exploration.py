"""Tests for stage visits, NPC conversations and content generation."""

from __future__ import annotations

import pytest

from shadow_realm.core.exceptions import ValidationError
from shadow_realm.engine.content import PlaceholderContentGenerator, populate_stage
from shadow_realm.engine.exploration import (
    MAX_STAGE_PROGRESS,
    DialogueSession,
    StageRun,
)
from shadow_realm.models.adventure import AdventureEnemy, AdventureNPC, AdventureStage
from shadow_realm.models.battle import AttackAction, DefendAction, SkillAction
from shadow_realm.models.enums import NPCRole, StageRewardType


class TestStageRun:
    """Tests for the stage progress meter."""

    def test_credits(self) -> None:
        run = StageRun(stage_id="mystical_forest_1")

        assert run.credit_action(AttackAction()) == 10
        assert run.credit_action(SkillAction(skill_id="slash")) == 25
        assert run.credit_action(DefendAction()) == 25
        assert run.credit_dialogue() == 45

    def test_capped(self) -> None:
        run = StageRun(stage_id="s", progress=95)

        run.credit_dialogue()

        assert run.progress == MAX_STAGE_PROGRESS
        assert run.is_ready

    def test_negative_amount_ignored(self) -> None:
        run = StageRun(stage_id="s", progress=30)

        assert run.advance(-10) == 30
        assert not run.is_ready


class TestDialogueSession:
    """Tests for stepping through NPC dialogue."""

    @pytest.fixture
    def npc(self) -> AdventureNPC:
        return AdventureNPC(id="n1", name="Elder", dialogue=["one", "two", "three"])

    def test_steps_through_lines(self, npc: AdventureNPC) -> None:
        session = DialogueSession(npc)

        assert session.current_line == "one"
        assert session.advance() is False
        assert session.current_line == "two"
        assert session.advance() is False
        assert session.is_last_line

    def test_wraps_after_last_line(self, npc: AdventureNPC) -> None:
        session = DialogueSession(npc)
        session.advance()
        session.advance()

        assert session.advance() is True
        assert session.current_line == "one"
        assert session.completions == 1

    def test_single_line_finishes_immediately(self) -> None:
        session = DialogueSession(AdventureNPC(id="n2", name="Mute", dialogue=["..."]))

        assert session.is_last_line
        assert session.advance() is True

    def test_empty_dialogue_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DialogueSession(AdventureNPC(id="n3", name="Silent"))


class TestContentGeneration:
    """Tests for filling stage content on first visit."""

    def test_populates_empty_stage(self) -> None:
        stage = AdventureStage(id="mystical_forest_1", name="Whispering Woods")

        assert populate_stage(stage, PlaceholderContentGenerator()) is True

        assert stage.has_content
        assert [e.name for e in stage.enemies] == ["Shadow Sentinel", "Mist Weaver"]
        assert stage.enemies[0].id == "enemy_mystical_forest_1_1"
        assert [n.role for n in stage.npcs] == [NPCRole.GUIDE, NPCRole.MERCHANT]
        assert stage.reward_total(StageRewardType.EXPERIENCE) == 100
        assert stage.reward_total(StageRewardType.SHADOW_TOKENS) == 25

    def test_merchant_sells_potions(self) -> None:
        stage = AdventureStage(id="s", name="S")
        populate_stage(stage, PlaceholderContentGenerator())

        merchant = stage.get_npc("npc_s_2")

        assert merchant is not None
        items = merchant.services[0].items
        assert {i.id for i in items} == {"health_potion", "mana_potion"}

    def test_existing_content_kept(self) -> None:
        enemy = AdventureEnemy(id="boss", name="Custom Boss")
        stage = AdventureStage(id="s", name="S", enemies=[enemy])

        populate_stage(stage, PlaceholderContentGenerator())

        assert [e.id for e in stage.enemies] == ["boss"]
        assert stage.npcs
        assert stage.rewards

    def test_second_visit_generates_nothing(self) -> None:
        stage = AdventureStage(id="s", name="S")
        generator = PlaceholderContentGenerator()
        populate_stage(stage, generator)

        assert populate_stage(stage, generator) is False
