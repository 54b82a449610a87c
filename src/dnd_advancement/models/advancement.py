"""Advancement models: what a level requires, what was chosen, what changes.

Models:
    AdvancementRequirement: Computed, frozen description of one level gain.
    AdvancementSelection: Mutable choices collected during one session.
    CharacterUpdate: The single payload handed to persistence.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dnd_advancement.models.character import (
    AbilityScores,
    ChoiceValue,
    ClassLevel,
    SpellsKnown,
)
from dnd_advancement.models.content import ClassFeatureInfo, FeatureChoice
from dnd_advancement.models.enums import Ability, AsiMode, HpMethod


LEGACY_UPDATE_FIELDS: frozenset[str] = frozenset(
    {"level", "class_levels", "max_hp", "ability_scores", "spells_known"}
)
"""Update fields understood by stores that predate feats and feature choices."""


class AdvancementRequirement(BaseModel):
    """Every decision and numeric delta required for a single level gain.

    Derived solely from a snapshot, a target level and rules data, so it
    is recomputed for each session and never cached.

    Attributes:
        class_id: Slug id of the class being advanced.
        current_level: Class level before advancement.
        target_level: Class level after advancement.
        hit_die: Hit die size of the class.
        con_modifier: Constitution modifier at session start.
        needs_subclass: Whether a subclass must be chosen this level.
        is_asi_level: Whether this level grants an ASI or feat.
        new_cantrips_count: Cantrips that must be learned.
        new_spells_count: Spells that must be learned (known casters only).
        max_spell_level: Highest spell level available at the target level.
        new_spell_level_unlocked: Whether the target level unlocks a spell level.
        class_features: Class features gained at the target level.
        feature_choices: Feature choices newly available at the target level.
        warnings: Rules data problems met while computing the requirement.
    """

    model_config = ConfigDict(frozen=True)

    class_id: str
    current_level: int = Field(ge=1, le=20)
    target_level: int = Field(ge=2, le=20)
    hit_die: int = Field(ge=1)
    con_modifier: int
    needs_subclass: bool = False
    is_asi_level: bool = False
    new_cantrips_count: int = Field(default=0, ge=0)
    new_spells_count: int = Field(default=0, ge=0)
    max_spell_level: int = Field(default=0, ge=0, le=9)
    new_spell_level_unlocked: bool = False
    class_features: tuple[ClassFeatureInfo, ...] = Field(default_factory=tuple)
    feature_choices: tuple[FeatureChoice, ...] = Field(default_factory=tuple)
    warnings: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def requires_spell_selection(self) -> bool:
        """Whether any cantrip or spell must be picked."""
        return self.new_cantrips_count + self.new_spells_count > 0


class AdvancementSelection(BaseModel):
    """Choices collected while resolving an advancement session.

    Lives only for the duration of one session: discarded on cancel and
    consumed once on confirm.
    """

    model_config = ConfigDict(validate_assignment=True)

    hp_method: HpMethod | None = None
    hp_gain: int | None = Field(default=None, ge=1)
    subclass_id: str | None = None
    asi_mode: AsiMode | None = None
    asi_boosts: dict[Ability, int] = Field(default_factory=dict)
    feat_key: str | None = None
    feat_ability_choices: list[Ability] = Field(default_factory=list)
    cantrips: list[str] = Field(default_factory=list)
    spells: list[str] = Field(default_factory=list)
    feature_choice_selections: dict[str, ChoiceValue] = Field(default_factory=dict)

    @property
    def asi_total(self) -> int:
        """Total points distributed across abilities."""
        return sum(self.asi_boosts.values())

    def selected_options(self, choice_key: str) -> list[str]:
        """Get the option keys selected for a feature choice."""
        current = self.feature_choice_selections.get(choice_key)
        if current is None:
            return []
        if isinstance(current, list):
            return list(current)
        return [current]


class CharacterUpdate(BaseModel):
    """The single atomic payload produced by an advancement.

    Optional fields are None when the advancement leaves them unchanged.
    """

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=20)
    class_levels: tuple[ClassLevel, ...]
    max_hp: int = Field(ge=1)
    ability_scores: AbilityScores | None = None
    feats: tuple[str, ...] | None = None
    spells_known: SpellsKnown | None = None
    class_feature_choices: dict[str, ChoiceValue] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize the fields this update changes."""
        return self.model_dump(mode="json", exclude_none=True)

    def legacy_payload(self) -> dict[str, Any]:
        """Serialize only the fields a legacy store understands."""
        return {
            field: value
            for field, value in self.to_payload().items()
            if field in LEGACY_UPDATE_FIELDS
        }


__all__ = [
    "LEGACY_UPDATE_FIELDS",
    "AdvancementRequirement",
    "AdvancementSelection",
    "CharacterUpdate",
]
