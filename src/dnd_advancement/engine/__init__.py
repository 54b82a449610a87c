"""Advancement engine for the D&D 5E character advancement rules.

This module computes what a level gain requires, validates feat
prerequisites, walks the player through the advancement stages and
assembles the resulting character update.

Submodules:
    dice: Hit die rolling (d20 library)
    calculator: Advancement requirement computation
    prerequisites: Feat prerequisite validation
    stages: Stage planning and completion predicates
    assembler: Selection to CharacterUpdate merge
    session: Advancement session state machine

Example:
    >>> from dnd_advancement.engine import AdvancementSession
    >>> from dnd_advancement.rules import StaticRulesProvider
    >>>
    >>> session = AdvancementSession(snapshot, StaticRulesProvider())
    >>> session.requirement.hit_die
    10
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dnd_advancement.engine.dice import DiceResult, DiceRoller

# =============================================================================
# Calculation
# =============================================================================
from dnd_advancement.engine.calculator import (
    average_hp_gain,
    compute_requirement,
    provider_lookup,
    rolled_hp_gain,
)

# =============================================================================
# Prerequisites
# =============================================================================
from dnd_advancement.engine.prerequisites import (
    ALREADY_TAKEN,
    PrerequisiteResult,
    check_prerequisites,
    format_prerequisites,
    is_feat_available,
)

# =============================================================================
# Stages and Session
# =============================================================================
from dnd_advancement.engine.stages import (
    StageContext,
    missing_feature_choices,
    plan_stages,
    stage_blockers,
)
from dnd_advancement.engine.assembler import apply_feat_bonus, assemble_update
from dnd_advancement.engine.session import AdvancementSession


__all__ = [
    # Dice
    "DiceResult",
    "DiceRoller",
    # Calculation
    "average_hp_gain",
    "compute_requirement",
    "provider_lookup",
    "rolled_hp_gain",
    # Prerequisites
    "ALREADY_TAKEN",
    "PrerequisiteResult",
    "check_prerequisites",
    "format_prerequisites",
    "is_feat_available",
    # Stages
    "StageContext",
    "missing_feature_choices",
    "plan_stages",
    "stage_blockers",
    # Assembly
    "apply_feat_bonus",
    "assemble_update",
    # Session
    "AdvancementSession",
]
