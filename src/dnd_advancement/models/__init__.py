"""Pydantic V2 schemas for the character advancement engine.

Submodules:
    enums: Enumeration types (Ability, HpMethod, AsiMode, StageId, etc.)
    keys: Canonical "name|SOURCE" content key parsing
    character: Character snapshot read models
    feats: Feat definitions, prerequisites and ability bonuses
    content: Rules content returned by a rules data provider
    advancement: Requirement, selection and update models

Example:
    >>> from dnd_advancement.models import CharacterSnapshot, ClassLevel
    >>> snapshot = CharacterSnapshot(
    ...     character_id="c1", level=1, max_hp=12,
    ...     class_levels=[ClassLevel(class_id="fighter|XPHB", level=1)],
    ... )
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dnd_advancement.models.enums import (
    Ability,
    AsiMode,
    ChoiceKind,
    FeatCategory,
    HpMethod,
    SessionStatus,
    StageId,
)

# =============================================================================
# Keys
# =============================================================================
from dnd_advancement.models.keys import (
    ContentKey,
    build_key,
    content_id,
    normalize_choice_key,
    parse_key,
    slugify,
)

# =============================================================================
# Character
# =============================================================================
from dnd_advancement.models.character import (
    AbilityScores,
    CharacterSnapshot,
    ChoiceValue,
    ClassLevel,
    SpellsKnown,
    calculate_modifier,
)

# =============================================================================
# Rules Content
# =============================================================================
from dnd_advancement.models.feats import (
    AbilityBonus,
    AbilityChoice,
    FeatDefinition,
    FeatPrerequisite,
)
from dnd_advancement.models.content import (
    ClassFeatureInfo,
    FeatureChoice,
    FeatureChoiceOption,
    SpellInfo,
    SubclassInfo,
)

# =============================================================================
# Advancement
# =============================================================================
from dnd_advancement.models.advancement import (
    LEGACY_UPDATE_FIELDS,
    AdvancementRequirement,
    AdvancementSelection,
    CharacterUpdate,
)


__all__ = [
    # Enums
    "Ability",
    "AsiMode",
    "ChoiceKind",
    "FeatCategory",
    "HpMethod",
    "SessionStatus",
    "StageId",
    # Keys
    "ContentKey",
    "build_key",
    "content_id",
    "normalize_choice_key",
    "parse_key",
    "slugify",
    # Character
    "AbilityScores",
    "CharacterSnapshot",
    "ChoiceValue",
    "ClassLevel",
    "SpellsKnown",
    "calculate_modifier",
    # Rules content
    "AbilityBonus",
    "AbilityChoice",
    "FeatDefinition",
    "FeatPrerequisite",
    "ClassFeatureInfo",
    "FeatureChoice",
    "FeatureChoiceOption",
    "SpellInfo",
    "SubclassInfo",
    # Advancement
    "LEGACY_UPDATE_FIELDS",
    "AdvancementRequirement",
    "AdvancementSelection",
    "CharacterUpdate",
]
