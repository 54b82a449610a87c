"""Tests for the advancement calculator."""

from __future__ import annotations

from typing import Any

import pytest

from dnd_advancement.core.exceptions import InvalidAdvancementError
from dnd_advancement.engine.calculator import (
    average_hp_gain,
    compute_requirement,
    provider_lookup,
    rolled_hp_gain,
)
from dnd_advancement.models.character import AbilityScores, CharacterSnapshot, ClassLevel
from dnd_advancement.rules.provider import StaticRulesProvider
from dnd_advancement.rules.tables import DEFAULT_RULESET


class TestComputeRequirement:
    """Tests for compute_requirement."""

    def test_fighter_level_two(
        self,
        fighter_snapshot: CharacterSnapshot,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test a fighter gaining level 2 needs only hit points."""
        requirement = compute_requirement(fighter_snapshot, 2, static_provider)

        assert requirement.class_id == "fighter"
        assert requirement.hit_die == 10
        assert requirement.con_modifier == 2
        assert requirement.needs_subclass is False
        assert requirement.is_asi_level is False
        assert requirement.new_cantrips_count == 0
        assert requirement.new_spells_count == 0
        assert [f.name for f in requirement.class_features] == ["Action Surge", "Tactical Mind"]
        assert requirement.feature_choices == ()
        assert requirement.warnings == ()

    def test_subclass_threshold(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test a subclass is needed exactly at the class threshold."""
        fighter = snapshot_factory("fighter", 2)
        wizard = snapshot_factory("wizard", 1)

        assert compute_requirement(fighter, 3, static_provider).needs_subclass
        assert compute_requirement(wizard, 2, static_provider).needs_subclass

    def test_subclass_already_chosen(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test a chosen subclass is never asked for again."""
        fighter = snapshot_factory("fighter", 2, subclass_id="champion|XPHB")

        assert not compute_requirement(fighter, 3, static_provider).needs_subclass

    def test_subclass_never_asked_again(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test no later level asks for a subclass once one is set."""
        for class_id, subclass_id in [
            ("fighter", "champion|XPHB"),
            ("wizard", "evoker|XPHB"),
            ("rogue", "thief|XPHB"),
        ]:
            for level in range(3, 20):
                snapshot = snapshot_factory(class_id, level, subclass_id=subclass_id)

                requirement = compute_requirement(snapshot, level + 1, static_provider)

                assert not requirement.needs_subclass, (class_id, level + 1)

    def test_wizard_cantrip_delta(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test cantrip deltas follow the cumulative table."""
        level_one = snapshot_factory("wizard", 1)
        level_three = snapshot_factory("wizard", 3, subclass_id="evoker|XPHB")

        assert compute_requirement(level_one, 2, static_provider).new_cantrips_count == 0
        assert compute_requirement(level_three, 4, static_provider).new_cantrips_count == 1

    def test_prepared_caster_learns_no_spells(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test prepared casters get new spell levels but no spell count."""
        wizard = snapshot_factory("wizard", 2, subclass_id="evoker|XPHB")
        requirement = compute_requirement(wizard, 3, static_provider)

        assert requirement.new_spells_count == 0
        assert requirement.max_spell_level == 2
        assert requirement.new_spell_level_unlocked is True

    def test_sorcerer_new_spell(
        self,
        sorcerer_snapshot: CharacterSnapshot,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test known casters learn the spells-known delta."""
        requirement = compute_requirement(sorcerer_snapshot, 2, static_provider)

        assert requirement.new_spells_count == 1
        assert requirement.new_cantrips_count == 0
        assert requirement.is_asi_level is False
        assert requirement.new_spell_level_unlocked is False

    def test_fighter_asi_override(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test the fighter's extra ASI at level 6."""
        fighter = snapshot_factory("fighter", 5, subclass_id="champion|XPHB")

        assert compute_requirement(fighter, 6, static_provider).is_asi_level

    def test_multiclass_advances_primary(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test tables are read from the first class entry only."""
        snapshot = snapshot_factory(
            "fighter|XPHB",
            3,
            subclass_id="champion|XPHB",
            extra_classes=[ClassLevel(class_id="wizard|XPHB", level=2)],
        )
        requirement = compute_requirement(snapshot, 4, static_provider)

        assert requirement.class_id == "fighter"
        assert requirement.current_level == 3
        assert requirement.is_asi_level is True
        assert requirement.new_cantrips_count == 0

    def test_feature_choices_for_subclass(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test subclass feature choices use the snapshot's subclass."""
        snapshot = snapshot_factory("fighter", 6, subclass_id="battle-master|XPHB")
        requirement = compute_requirement(snapshot, 7, static_provider)

        assert [c.feature_name for c in requirement.feature_choices] == [
            "Maneuvers (Additional)"
        ]

    @pytest.mark.parametrize("target", [1, 3, 4])
    def test_target_must_be_next_level(
        self,
        fighter_snapshot: CharacterSnapshot,
        static_provider: StaticRulesProvider,
        target: int,
    ) -> None:
        """Test multi-level jumps and non-advancing targets are rejected."""
        with pytest.raises(InvalidAdvancementError):
            compute_requirement(fighter_snapshot, target, static_provider)

    def test_level_cap(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test a level 20 character cannot advance."""
        snapshot = snapshot_factory("fighter", 20, subclass_id="champion|XPHB")

        with pytest.raises(InvalidAdvancementError):
            compute_requirement(snapshot, 21, static_provider)

    def test_character_level_cap_with_multiclass(
        self,
        snapshot_factory: Any,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test the total character level also caps advancement."""
        snapshot = snapshot_factory(
            "fighter",
            10,
            subclass_id="champion|XPHB",
            extra_classes=[ClassLevel(class_id="wizard", level=10)],
        )

        with pytest.raises(InvalidAdvancementError):
            compute_requirement(snapshot, 11, static_provider)

    def test_provider_failure_becomes_warning(
        self,
        fighter_snapshot: CharacterSnapshot,
        failing_provider_factory: Any,
    ) -> None:
        """Test provider errors degrade to warnings."""
        provider = failing_provider_factory("class_features")

        requirement = compute_requirement(fighter_snapshot, 2, provider)

        assert requirement.class_features == ()
        assert len(requirement.warnings) == 1
        assert "class features" in requirement.warnings[0]
        assert requirement.hit_die == 10

    def test_deterministic(
        self,
        fighter_snapshot: CharacterSnapshot,
        static_provider: StaticRulesProvider,
    ) -> None:
        """Test identical inputs give identical requirements."""
        first = compute_requirement(fighter_snapshot, 2, static_provider, ruleset=DEFAULT_RULESET)
        second = compute_requirement(fighter_snapshot, 2, static_provider, ruleset=DEFAULT_RULESET)

        assert first == second


class TestHitPointGain:
    """Tests for hit point gain formulas."""

    def _requirement(self, snapshot_factory: Any, class_id: str, con: int) -> Any:
        snapshot = snapshot_factory(class_id, 1, ability_scores=AbilityScores(constitution=con))
        return compute_requirement(snapshot, 2, StaticRulesProvider())

    def test_average(self, snapshot_factory: Any) -> None:
        """Test ceil(die / 2) + 1 + CON."""
        assert average_hp_gain(self._requirement(snapshot_factory, "fighter", 14)) == 8
        assert average_hp_gain(self._requirement(snapshot_factory, "sorcerer", 10)) == 4

    @pytest.mark.parametrize("class_id", ["barbarian", "fighter", "rogue", "wizard"])
    def test_average_matches_ruleset(self, snapshot_factory: Any, class_id: str) -> None:
        """Test the gain is the ruleset's fixed value plus CON."""
        requirement = self._requirement(snapshot_factory, class_id, 12)

        assert average_hp_gain(requirement) == DEFAULT_RULESET.average_hit_die(class_id) + 1

    def test_rolled(self, snapshot_factory: Any) -> None:
        """Test die result + CON."""
        assert rolled_hp_gain(self._requirement(snapshot_factory, "fighter", 14), 7) == 9

    def test_minimum_one(self, snapshot_factory: Any) -> None:
        """Test a negative CON modifier never drops the gain below 1."""
        requirement = self._requirement(snapshot_factory, "wizard", 3)

        assert rolled_hp_gain(requirement, 1) == 1
        assert average_hp_gain(requirement) == 1


class TestProviderLookup:
    """Tests for provider_lookup."""

    def test_success(self) -> None:
        """Test results pass through untouched."""
        warnings: list[str] = []

        assert provider_lookup("things", lambda: [1, 2], warnings) == [1, 2]
        assert warnings == []

    def test_failure(self) -> None:
        """Test failures return an empty list and record a warning."""
        warnings: list[str] = []

        def fail() -> list[int]:
            raise ConnectionError("offline")

        assert provider_lookup("subclasses", fail, warnings) == []
        assert warnings == ["Could not load subclasses: offline"]
