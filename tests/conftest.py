"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the character advancement engine test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from dnd_advancement.core.config import clear_settings_cache
from dnd_advancement.engine.dice import DiceRoller
from dnd_advancement.models.character import (
    AbilityScores,
    CharacterSnapshot,
    ClassLevel,
    SpellsKnown,
)
from dnd_advancement.rules.provider import RulesCache, StaticRulesProvider
from dnd_advancement.storage.database import CharacterDatabase


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
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
        "DND_ADVANCEMENT_DEBUG": "true",
        "DND_ADVANCEMENT_LOG_LEVEL": "DEBUG",
        "DND_ADVANCEMENT_ENFORCE_FEATURE_CHOICES": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Snapshot Fixtures
# =============================================================================


def make_snapshot(
    class_id: str,
    level: int,
    *,
    subclass_id: str | None = None,
    extra_classes: list[ClassLevel] | None = None,
    **overrides: Any,
) -> CharacterSnapshot:
    """Build a snapshot with one primary class and sensible defaults."""
    class_levels = [ClassLevel(class_id=class_id, level=level, subclass_id=subclass_id)]
    class_levels.extend(extra_classes or [])
    data: dict[str, Any] = {
        "character_id": f"{class_id.split('|')[0]}-{level}",
        "name": "Test Character",
        "level": sum(cl.level for cl in class_levels),
        "class_levels": class_levels,
        "max_hp": 10 * level,
    }
    data.update(overrides)
    return CharacterSnapshot(**data)


@pytest.fixture
def snapshot_factory() -> Any:
    """Factory building snapshots for any class and level."""
    return make_snapshot


@pytest.fixture
def fighter_snapshot() -> CharacterSnapshot:
    """Level 1 fighter with CON 14."""
    return make_snapshot(
        "fighter|XPHB",
        1,
        character_id="thorin",
        name="Thorin",
        max_hp=12,
        ability_scores=AbilityScores(strength=16, dexterity=12, constitution=14),
        features=("Fighting Style: Defense", "Second Wind", "Weapon Mastery"),
    )


@pytest.fixture
def fighter_level3_snapshot() -> CharacterSnapshot:
    """Level 3 Champion fighter about to reach an ASI level."""
    return make_snapshot(
        "fighter|XPHB",
        3,
        subclass_id="champion|XPHB",
        character_id="brienne",
        max_hp=28,
        ability_scores=AbilityScores(
            strength=17, dexterity=13, constitution=14, charisma=10
        ),
        features=("Fighting Style: Defense", "Second Wind", "Action Surge"),
    )


@pytest.fixture
def wizard_snapshot() -> CharacterSnapshot:
    """Level 3 wizard knowing three cantrips."""
    return make_snapshot(
        "wizard|XPHB",
        3,
        subclass_id="evoker|XPHB",
        character_id="elminster",
        max_hp=14,
        ability_scores=AbilityScores(intelligence=17, constitution=12),
        spells_known=SpellsKnown(
            cantrips=("Fire Bolt", "Light", "Mage Hand"),
            spells=("Magic Missile", "Shield", "Mage Armor"),
        ),
    )


@pytest.fixture
def sorcerer_snapshot() -> CharacterSnapshot:
    """Level 1 sorcerer knowing four cantrips and two spells."""
    return make_snapshot(
        "sorcerer|XPHB",
        1,
        subclass_id="draconic-sorcery|XPHB",
        character_id="sorcha",
        max_hp=7,
        ability_scores=AbilityScores(constitution=13, charisma=16),
        spells_known=SpellsKnown(
            cantrips=("Fire Bolt", "Light", "Prestidigitation", "Minor Illusion"),
            spells=("Magic Missile", "Shield"),
        ),
    )


# =============================================================================
# Rules Fixtures
# =============================================================================


@pytest.fixture
def static_provider() -> StaticRulesProvider:
    """Provider over the bundled reference data."""
    return StaticRulesProvider()


@pytest.fixture
def rules_cache(static_provider: StaticRulesProvider) -> RulesCache:
    """Cache wrapped around the bundled reference data."""
    return RulesCache(static_provider)


class FailingProvider(StaticRulesProvider):
    """Provider whose selected lookups raise."""

    def __init__(self, *failing: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.failing = set(failing)
        self.calls: list[str] = []

    def _check(self, lookup: str) -> None:
        self.calls.append(lookup)
        if lookup in self.failing:
            raise ConnectionError(f"{lookup} backend offline")

    def class_features_at(self, class_id: str, level: int) -> list[Any]:
        self._check("class_features")
        return super().class_features_at(class_id, level)

    def subclasses_of(self, class_id: str) -> list[Any]:
        self._check("subclasses")
        return super().subclasses_of(class_id)

    def spells_of(self, class_id: str) -> list[Any]:
        self._check("spells")
        return super().spells_of(class_id)

    def all_feats(self) -> list[Any]:
        self._check("feats")
        return super().all_feats()

    def feature_choices_at(
        self,
        class_id: str,
        level: int,
        subclass_id: str | None = None,
    ) -> list[Any]:
        self._check("feature_choices")
        return super().feature_choices_at(class_id, level, subclass_id)


@pytest.fixture
def failing_provider_factory() -> type[FailingProvider]:
    """Factory for providers with failing lookups."""
    return FailingProvider


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    return DiceRoller(seed=42)


class FixedRoller(DiceRoller):
    """Roller whose hit die always shows the same face."""

    def __init__(self, face: int) -> None:
        super().__init__()
        self.face = face

    def roll_hit_die(self, hit_die: int) -> Any:
        from dnd_advancement.engine.dice import DiceResult

        return DiceResult(
            expression=f"1d{hit_die}",
            total=self.face,
            dice=[self.face],
            modifier=0,
        )


@pytest.fixture
def fixed_roller_factory() -> type[FixedRoller]:
    """Factory for rollers with a fixed hit die face."""
    return FixedRoller


# =============================================================================
# Storage Fixtures
# =============================================================================


class RecordingStore:
    """In-memory character store recording every payload."""

    def __init__(self, *, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.payloads: list[tuple[str, dict[str, Any]]] = []

    def apply_update(self, character_id: str, payload: dict[str, Any]) -> bool:
        self.payloads.append((character_id, payload))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def recording_store() -> RecordingStore:
    """Store accepting every update."""
    return RecordingStore()


@pytest.fixture
def recording_store_factory() -> type[RecordingStore]:
    """Factory for stores with a configurable outcome."""
    return RecordingStore


@pytest.fixture
def temp_database(tmp_path: Path) -> CharacterDatabase:
    """Character database in a temporary directory."""
    return CharacterDatabase(tmp_path / "data" / "characters.db")


@pytest.fixture
def legacy_database(tmp_path: Path) -> CharacterDatabase:
    """Character database without the feats and feature choice columns."""
    return CharacterDatabase(tmp_path / "legacy" / "characters.db", legacy_schema=True)
