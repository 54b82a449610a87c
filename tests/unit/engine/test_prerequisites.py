"""Tests for feat prerequisite validation."""

from __future__ import annotations

from typing import Any

import pytest

from dnd_advancement.engine.prerequisites import (
    ALREADY_TAKEN,
    check_prerequisites,
    format_prerequisites,
    is_feat_available,
)
from dnd_advancement.models.character import AbilityScores
from dnd_advancement.models.feats import FeatDefinition


def _feat(**raw: Any) -> FeatDefinition:
    return FeatDefinition.from_raw({"name": "Test Feat", "source": "XPHB", **raw})


@pytest.fixture
def actor() -> FeatDefinition:
    """Feat requiring level 4 and Charisma 13."""
    return FeatDefinition.from_raw(
        {
            "name": "Actor",
            "source": "XPHB",
            "prerequisite": [{"level": 4, "ability": [{"cha": 13}]}],
            "ability": [{"cha": 1}],
        }
    )


class TestCheckPrerequisites:
    """Tests for check_prerequisites."""

    def test_two_reasons(self, actor: FeatDefinition, snapshot_factory: Any) -> None:
        """Test every unmet condition is reported."""
        snapshot = snapshot_factory("fighter", 3, ability_scores=AbilityScores(charisma=10))

        result = check_prerequisites(actor, snapshot)

        assert result.valid is False
        assert result.reasons == (
            "Requires level 4 (you are level 3)",
            "Requires Charisma 13 (you have 10)",
        )

    def test_satisfied(self, actor: FeatDefinition, snapshot_factory: Any) -> None:
        """Test a qualifying character passes."""
        snapshot = snapshot_factory("fighter", 4, ability_scores=AbilityScores(charisma=13))

        result = check_prerequisites(actor, snapshot)

        assert result.valid is True
        assert result.reasons == ()

    def test_character_level_override(self, actor: FeatDefinition, snapshot_factory: Any) -> None:
        """Test level minimums can be checked against the target level."""
        snapshot = snapshot_factory("fighter", 3, ability_scores=AbilityScores(charisma=14))

        assert check_prerequisites(actor, snapshot, character_level=4).valid

    def test_monotonic(self, actor: FeatDefinition, snapshot_factory: Any) -> None:
        """Test raising level and ability never invalidates a feat."""
        for level in range(4, 8):
            for charisma in range(13, 16):
                snapshot = snapshot_factory(
                    "fighter", level, ability_scores=AbilityScores(charisma=charisma)
                )
                assert check_prerequisites(actor, snapshot).valid

    def test_lowering_ability_invalidates(
        self, actor: FeatDefinition, snapshot_factory: Any
    ) -> None:
        """Test dropping below a minimum closes the feat again."""
        for level in range(4, 8):
            qualified = snapshot_factory(
                "fighter", level, ability_scores=AbilityScores(charisma=13)
            )
            lowered = snapshot_factory(
                "fighter", level, ability_scores=AbilityScores(charisma=12)
            )

            assert check_prerequisites(actor, qualified).valid
            result = check_prerequisites(actor, lowered)
            assert not result.valid
            assert result.reasons == ("Requires Charisma 13 (you have 12)",)

    def test_each_ability_in_group_checked(self, snapshot_factory: Any) -> None:
        """Test every ability of a group must meet its minimum."""
        feat = _feat(prerequisite=[{"ability": [{"str": 13, "dex": 13}]}])
        strong_only = snapshot_factory(
            "fighter", 4, ability_scores=AbilityScores(strength=13, dexterity=8)
        )
        weak = snapshot_factory("fighter", 4, ability_scores=AbilityScores(dexterity=12))
        both = snapshot_factory(
            "fighter", 4, ability_scores=AbilityScores(strength=13, dexterity=13)
        )

        assert check_prerequisites(feat, strong_only).reasons == (
            "Requires Dexterity 13 (you have 8)",
        )
        assert check_prerequisites(feat, weak).reasons == (
            "Requires Strength 13 (you have 10)",
            "Requires Dexterity 13 (you have 12)",
        )
        assert check_prerequisites(feat, both).valid

    def test_feature_requirement(self, snapshot_factory: Any) -> None:
        """Test missing features are listed."""
        feat = _feat(prerequisite=[{"feature": ["Fighting Style"]}])
        without = snapshot_factory("wizard", 4)
        with_style = snapshot_factory("fighter", 4, features=("Fighting Style: Archery",))

        assert check_prerequisites(feat, without).reasons == ("Requires: Fighting Style",)
        assert check_prerequisites(feat, with_style).valid

    def test_other_summary_always_reported(self, snapshot_factory: Any) -> None:
        """Test free-text conditions are always reasons."""
        feat = _feat(prerequisite=[{"level": 4, "otherSummary": {"entry": "Spellcasting Feature"}}])
        snapshot = snapshot_factory("wizard", 8)

        assert check_prerequisites(feat, snapshot).reasons == ("Spellcasting Feature",)

    def test_reasons_accumulate_across_entries(self, snapshot_factory: Any) -> None:
        """Test every entry must be satisfied."""
        feat = _feat(prerequisite=[{"level": 8}, {"ability": [{"wis": 13}]}])
        snapshot = snapshot_factory("cleric", 4, ability_scores=AbilityScores(wisdom=15))

        assert check_prerequisites(feat, snapshot).reasons == (
            "Requires level 8 (you are level 4)",
        )

    def test_no_prerequisites(self, snapshot_factory: Any) -> None:
        """Test feats without prerequisites are always valid."""
        assert check_prerequisites(_feat(), snapshot_factory("fighter", 1)).valid


class TestIsFeatAvailable:
    """Tests for is_feat_available."""

    def test_already_taken(self, actor: FeatDefinition, snapshot_factory: Any) -> None:
        """Test a non-repeatable feat cannot be taken twice."""
        snapshot = snapshot_factory(
            "fighter", 8, ability_scores=AbilityScores(charisma=14), feats=("actor|XPHB",)
        )

        result = is_feat_available(actor, snapshot)

        assert result.valid is False
        assert result.reasons == (ALREADY_TAKEN,)

    def test_repeatable(self, snapshot_factory: Any) -> None:
        """Test repeatable feats stay available."""
        feat = _feat(name="Elemental Adept", repeatable=True)
        snapshot = snapshot_factory("wizard", 8, feats=("elemental-adept|XPHB",))

        assert is_feat_available(feat, snapshot).valid


class TestFormatPrerequisites:
    """Tests for format_prerequisites."""

    def test_summary(self) -> None:
        """Test entries render as a compact summary."""
        feat = _feat(prerequisite=[{"level": 4, "ability": [{"str": 13, "dex": 13}]}])

        assert format_prerequisites(feat) == "Level 4, STR 13, DEX 13"

    def test_entries_joined_as_all_required(self) -> None:
        """Test separate entries are not presented as alternatives."""
        feat = _feat(prerequisite=[{"level": 8}, {"ability": [{"wis": 13}]}])

        assert format_prerequisites(feat) == "Level 8; WIS 13"

    def test_none(self) -> None:
        """Test feats without prerequisites."""
        assert format_prerequisites(_feat()) == "None"
