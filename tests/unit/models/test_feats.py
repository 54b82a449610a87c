"""Tests for feat definition parsing."""

from __future__ import annotations

import pytest

from dnd_advancement.core.exceptions import ValidationError
from dnd_advancement.models.enums import Ability
from dnd_advancement.models.feats import AbilityBonus, FeatDefinition, FeatPrerequisite


class TestFeatPrerequisite:
    """Tests for prerequisite entry parsing."""

    def test_level_and_ability(self) -> None:
        """Test level and ability minimums are parsed."""
        entry = FeatPrerequisite.from_raw({"level": 4, "ability": [{"cha": 13}]})

        assert entry.level == 4
        assert entry.ability == ({Ability.CHA: 13},)

    def test_nested_level(self) -> None:
        """Test class-scoped level objects use their level."""
        entry = FeatPrerequisite.from_raw({"level": {"level": 4, "class": {"name": "Fighter"}}})

        assert entry.level == 4

    def test_other_summary_dict(self) -> None:
        """Test free-text prerequisites keep their entry text."""
        entry = FeatPrerequisite.from_raw(
            {"otherSummary": {"entry": "Spellcasting Feature", "entrySummary": "Spellcasting"}}
        )

        assert entry.other_summary == "Spellcasting Feature"

    def test_unknown_keys_ignored(self) -> None:
        """Test race and proficiency entries do not fail parsing."""
        entry = FeatPrerequisite.from_raw({"race": [{"name": "elf"}], "feature": ["Fighting Style"]})

        assert entry.feature == ("Fighting Style",)
        assert entry.ability == ()


class TestAbilityBonus:
    """Tests for ability bonus parsing."""

    def test_fixed_increase(self) -> None:
        """Test fixed increases keyed by ability."""
        bonus = AbilityBonus.from_raw({"str": 1})

        assert bonus.increases == {Ability.STR: 1}
        assert bonus.choose is None

    def test_choose_defaults(self) -> None:
        """Test a choosable increase defaults to +1 once."""
        bonus = AbilityBonus.from_raw({"choose": {"from": ["str", "dex"]}})

        assert bonus.choose is not None
        assert bonus.choose.from_ == (Ability.STR, Ability.DEX)
        assert bonus.choose.amount == 1
        assert bonus.choose.count == 1

    def test_hidden_flag(self) -> None:
        """Test the hidden marker is kept."""
        bonus = AbilityBonus.from_raw({"choose": {"from": ["str"], "count": 2}, "hidden": True})

        assert bonus.hidden is True


class TestFeatDefinition:
    """Tests for FeatDefinition."""

    def test_from_raw(self) -> None:
        """Test a full raw entry."""
        feat = FeatDefinition.from_raw(
            {
                "name": "Actor",
                "source": "XPHB",
                "category": "G",
                "prerequisite": [{"level": 4, "ability": [{"cha": 13}]}],
                "ability": [{"cha": 1}],
                "entries": ["Mimicry and disguise.", {"type": "list"}],
            }
        )

        assert feat.key == "actor|XPHB"
        assert feat.description == "Mimicry and disguise."
        assert len(feat.prerequisites) == 1
        assert feat.repeatable is False

    def test_list_category(self) -> None:
        """Test list categories use their first entry."""
        feat = FeatDefinition.from_raw({"name": "Archery", "category": ["FS"]})

        assert feat.category == "FS"

    def test_missing_name(self) -> None:
        """Test an entry without a name is rejected."""
        with pytest.raises(ValidationError):
            FeatDefinition.from_raw({"source": "XPHB"})

    def test_hidden_bonus_not_visible(self) -> None:
        """Test hidden bonuses are excluded from applied bonuses."""
        feat = FeatDefinition.from_raw(
            {
                "name": "Ability Score Improvement",
                "ability": [{"choose": {"from": ["str", "dex"], "count": 2}, "hidden": True}],
            }
        )

        assert feat.visible_bonuses == ()
        assert feat.choosable_bonus is None
