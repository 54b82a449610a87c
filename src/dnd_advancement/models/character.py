"""Character snapshot models consumed by the advancement engine.

The surrounding application owns the character; the engine only ever sees
an immutable :class:`CharacterSnapshot` and hands back a diff. All models in
this module are frozen.

Models:
    ClassLevel: One class entry (class, level, subclass).
    AbilityScores: The six ability scores with computed modifiers.
    SpellsKnown: Known cantrips and leveled spells.
    CharacterSnapshot: Read view of a character at session start.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from dnd_advancement.core.constants import (
    MAX_CHARACTER_LEVEL,
    MIN_ABILITY_SCORE,
    MIN_CHARACTER_LEVEL,
    MONSTER_ABILITY_SCORE_CAP,
)
from dnd_advancement.models.enums import Ability
from dnd_advancement.models.keys import ContentKey, parse_key


# =============================================================================
# Validators and Type Definitions
# =============================================================================


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    The modifier is calculated as: (score - 10) // 2

    Args:
        score: The ability score (1-30).

    Returns:
        The ability modifier (-5 to +10).

    Example:
        >>> calculate_modifier(14)
        2
        >>> calculate_modifier(7)
        -2
    """
    return (score - 10) // 2


AbilityScore = Annotated[
    int,
    Field(ge=MIN_ABILITY_SCORE, le=MONSTER_ABILITY_SCORE_CAP, description="Ability score (1-30)"),
]

Level = Annotated[
    int,
    Field(ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL, description="Level (1-20)"),
]

ChoiceValue = str | list[str]
"""A feature-choice selection: one option key or several."""


# =============================================================================
# Class Levels
# =============================================================================


class ClassLevel(BaseModel):
    """A class and level pair.

    Accepts the storage field names ``class``/``subclass`` as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    class_id: str = Field(validation_alias=AliasChoices("class_id", "class"))
    level: Level = Field(default=1)
    subclass_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("subclass_id", "subclass"),
    )

    @property
    def class_key(self) -> ContentKey:
        """Parsed key of the class."""
        return parse_key(self.class_id)

    @property
    def subclass_key(self) -> ContentKey | None:
        """Parsed key of the subclass, if one is assigned."""
        return parse_key(self.subclass_id) if self.subclass_id else None


# =============================================================================
# Ability Scores
# =============================================================================


class AbilityScores(BaseModel):
    """The six ability scores with computed modifiers.

    Example:
        >>> scores = AbilityScores(constitution=14)
        >>> scores.modifier(Ability.CON)
        2
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: AbilityScore = Field(default=10)
    dexterity: AbilityScore = Field(default=10)
    constitution: AbilityScore = Field(default=10)
    intelligence: AbilityScore = Field(default=10)
    wisdom: AbilityScore = Field(default=10)
    charisma: AbilityScore = Field(default=10)

    @property
    def constitution_modifier(self) -> int:
        """Calculate Constitution modifier."""
        return calculate_modifier(self.constitution)

    def get_score(self, ability: Ability) -> int:
        """Get the score for a specific ability.

        Args:
            ability: The ability to get the score for.

        Returns:
            The ability score value.
        """
        return getattr(self, ability.value)

    def modifier(self, ability: Ability) -> int:
        """Get the modifier for a specific ability.

        Args:
            ability: The ability to get the modifier for.

        Returns:
            The ability modifier.
        """
        return calculate_modifier(self.get_score(ability))

    def as_dict(self) -> dict[Ability, int]:
        """Get all scores keyed by ability."""
        return {ability: self.get_score(ability) for ability in Ability}

    def with_scores(self, updates: dict[Ability, int]) -> AbilityScores:
        """Return a copy with some scores replaced.

        Args:
            updates: New scores keyed by ability.

        Returns:
            A new, validated AbilityScores instance.
        """
        data = {ability.value: score for ability, score in self.as_dict().items()}
        data.update({ability.value: score for ability, score in updates.items()})
        return AbilityScores(**data)


# =============================================================================
# Spells Known
# =============================================================================


class SpellsKnown(BaseModel):
    """Cantrips and leveled spells a character has learned."""

    model_config = ConfigDict(frozen=True)

    cantrips: tuple[str, ...] = Field(default_factory=tuple)
    spells: tuple[str, ...] = Field(default_factory=tuple)

    def knows_cantrip(self, name: str) -> bool:
        return name.lower() in {c.lower() for c in self.cantrips}

    def knows_spell(self, name: str) -> bool:
        return name.lower() in {s.lower() for s in self.spells}


# =============================================================================
# Character Snapshot
# =============================================================================


class CharacterSnapshot(BaseModel):
    """Immutable read view of a character used by the advancement engine.

    The engine never mutates a snapshot; advancement produces a
    CharacterUpdate instead.

    Attributes:
        character_id: Identifier used by the persistence collaborator.
        name: Display name.
        level: Total character level.
        class_levels: Class entries; the first entry is the primary class.
        ability_scores: Current ability scores.
        max_hp: Current hit point maximum.
        feats: Known feat keys.
        spells_known: Known cantrips and spells.
        features: Names of acquired class features and traits.
        class_feature_choices: Resolved feature choices keyed by normalized name.
        feature_uses: Usage counters per limited-use feature.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    character_id: str = Field(description="Character identifier")
    name: str = Field(default="Unknown Character", description="Display name")
    level: Level = Field(description="Total character level")
    class_levels: tuple[ClassLevel, ...] = Field(min_length=1)
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    max_hp: int = Field(ge=1, description="Hit point maximum")
    feats: tuple[str, ...] = Field(default_factory=tuple)
    spells_known: SpellsKnown = Field(default_factory=SpellsKnown)
    features: tuple[str, ...] = Field(default_factory=tuple)
    class_feature_choices: dict[str, ChoiceValue] = Field(default_factory=dict)
    feature_uses: dict[str, int] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_level_sum(self) -> CharacterSnapshot:
        """Ensure class levels add up to the character level.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If the class levels do not sum to ``level``.
        """
        total = sum(cl.level for cl in self.class_levels)
        if total != self.level:
            msg = f"Class levels sum to {total} but character level is {self.level}"
            raise ValueError(msg)
        return self

    @property
    def primary_class(self) -> ClassLevel:
        """The class entry that advancement applies to."""
        return self.class_levels[0]

    @property
    def primary_class_id(self) -> str:
        """Slug id of the primary class (e.g., 'fighter')."""
        return self.primary_class.class_key.id

    @property
    def primary_class_level(self) -> int:
        """Level of the primary class."""
        return self.primary_class.level

    def has_feat(self, feat_key: str) -> bool:
        """Check whether the character already has a feat (source ignored)."""
        wanted = parse_key(feat_key)
        return any(wanted.matches(known) for known in self.feats)

    def has_feature(self, tag: str) -> bool:
        """Check whether the character has a feature, case-insensitively.

        A feature counts when its name starts with the tag, so "Fighting
        Style" is satisfied by "Fighting Style: Defense".
        """
        wanted = tag.strip().lower()
        return any(feature.strip().lower().startswith(wanted) for feature in self.features)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> CharacterSnapshot:
        """Build a snapshot from a stored character record.

        Args:
            record: Character data using storage field names
                (``id``, ``max_hp``, ``class_levels``...).

        Returns:
            A validated snapshot.
        """
        data = dict(record)
        if "character_id" not in data and "id" in data:
            data["character_id"] = str(data.pop("id"))
        spells = data.get("spells_known")
        if spells is None:
            data.pop("spells_known", None)
        return cls.model_validate(data)


__all__ = [
    "calculate_modifier",
    "AbilityScore",
    "Level",
    "ChoiceValue",
    "ClassLevel",
    "AbilityScores",
    "SpellsKnown",
    "CharacterSnapshot",
]
