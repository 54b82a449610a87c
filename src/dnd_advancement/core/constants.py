"""Application-wide constants for the advancement engine.

This module defines D&D 5E rules constants shared by the rules tables,
the advancement calculator and the state assembler.
"""

from __future__ import annotations

# =============================================================================
# Ability Score Constants
# =============================================================================

PC_ABILITY_SCORE_CAP = 20
"""Maximum ability score for player characters through advancement."""

MONSTER_ABILITY_SCORE_CAP = 30
"""Maximum ability score accepted when reading character data."""

MIN_ABILITY_SCORE = 1
"""Minimum ability score."""

ASI_POINT_BUDGET = 2
"""Points distributed by one ability score improvement."""

ASI_MAX_PER_ABILITY = 2
"""Most points one ability may receive from a single improvement."""

# =============================================================================
# Level Constants
# =============================================================================

MAX_CHARACTER_LEVEL = 20
"""Maximum character level in D&D 5E."""

MIN_CHARACTER_LEVEL = 1
"""Minimum character level."""

MAX_SPELL_LEVEL = 9
"""Highest spell level."""

# =============================================================================
# Rules Defaults
# =============================================================================

DEFAULT_HIT_DIE = 8
"""Hit die used for classes missing from the hit die table."""

DEFAULT_SUBCLASS_LEVEL = 3
"""Subclass level used for classes missing from the subclass table."""

DEFAULT_CONTENT_SOURCE = "XPHB"
"""Source abbreviation assumed for keys that omit one (2024 Player's Handbook)."""

KEY_SEPARATOR = "|"
"""Separator between name and source in content keys."""


__all__ = [
    # Ability Scores
    "PC_ABILITY_SCORE_CAP",
    "MONSTER_ABILITY_SCORE_CAP",
    "MIN_ABILITY_SCORE",
    "ASI_POINT_BUDGET",
    "ASI_MAX_PER_ABILITY",
    # Levels
    "MAX_CHARACTER_LEVEL",
    "MIN_CHARACTER_LEVEL",
    "MAX_SPELL_LEVEL",
    # Rules defaults
    "DEFAULT_HIT_DIE",
    "DEFAULT_SUBCLASS_LEVEL",
    "DEFAULT_CONTENT_SOURCE",
    "KEY_SEPARATOR",
]
