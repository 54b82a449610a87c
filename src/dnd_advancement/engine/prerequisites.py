"""Feat prerequisite validation.

Every prerequisite entry of a feat is evaluated and every unmet condition
produces a human-readable reason. Reasons from all entries accumulate, so
a feat is valid only when each of its entries is satisfied.

Example:
    >>> result = check_prerequisites(actor, snapshot)
    >>> result.reasons
    ('Requires level 4 (you are level 3)', 'Requires Charisma 13 (you have 10)')
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dnd_advancement.models.character import CharacterSnapshot
from dnd_advancement.models.enums import Ability
from dnd_advancement.models.feats import FeatDefinition, FeatPrerequisite


ALREADY_TAKEN = "Already taken"


@dataclass(frozen=True)
class PrerequisiteResult:
    """Outcome of a prerequisite check.

    Attributes:
        valid: True when no condition is unmet.
        reasons: Unmet conditions in evaluation order.
    """

    valid: bool
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_reasons(cls, reasons: list[str]) -> PrerequisiteResult:
        return cls(valid=not reasons, reasons=tuple(reasons))


def _ability_reasons(group: dict[Ability, int], snapshot: CharacterSnapshot) -> list[str]:
    """One reason per listed ability below its minimum."""
    scores = snapshot.ability_scores
    return [
        f"Requires {ability.full_name} {minimum} (you have {scores.get_score(ability)})"
        for ability, minimum in group.items()
        if scores.get_score(ability) < minimum
    ]


def _entry_reasons(
    entry: FeatPrerequisite,
    snapshot: CharacterSnapshot,
    character_level: int,
) -> list[str]:
    reasons: list[str] = []

    if entry.level is not None and character_level < entry.level:
        reasons.append(f"Requires level {entry.level} (you are level {character_level})")

    for group in entry.ability:
        reasons.extend(_ability_reasons(group, snapshot))

    missing = [tag for tag in entry.feature if not snapshot.has_feature(tag)]
    if missing:
        reasons.append(f"Requires: {', '.join(missing)}")

    # Free text cannot be checked mechanically
    if entry.other_summary:
        reasons.append(entry.other_summary)

    return reasons


def check_prerequisites(
    feat: FeatDefinition,
    snapshot: CharacterSnapshot,
    *,
    character_level: int | None = None,
) -> PrerequisiteResult:
    """Check a feat's prerequisites against a character.

    Args:
        feat: The feat to check.
        snapshot: The character.
        character_level: Level to check level minimums against. Defaults to
            the snapshot's level; advancement passes the target level.

    Returns:
        PrerequisiteResult listing every unmet condition.
    """
    level = snapshot.level if character_level is None else character_level
    reasons: list[str] = []
    for entry in feat.prerequisites:
        reasons.extend(_entry_reasons(entry, snapshot, level))
    return PrerequisiteResult.from_reasons(reasons)


def is_feat_available(
    feat: FeatDefinition,
    snapshot: CharacterSnapshot,
    *,
    character_level: int | None = None,
) -> PrerequisiteResult:
    """Check whether a character may take a feat now.

    Adds :data:`ALREADY_TAKEN` for a non-repeatable feat the character has.

    Args:
        feat: The feat to check.
        snapshot: The character.
        character_level: Level to check level minimums against.

    Returns:
        PrerequisiteResult including the already-taken condition.
    """
    result = check_prerequisites(feat, snapshot, character_level=character_level)
    if feat.repeatable or not snapshot.has_feat(feat.key):
        return result
    return PrerequisiteResult.from_reasons([ALREADY_TAKEN, *result.reasons])


def format_prerequisites(feat: FeatDefinition) -> str:
    """Summarize a feat's prerequisites for display.

    Args:
        feat: The feat to summarize.

    Returns:
        Summary such as ``"Level 4, STR 13"``, or ``"None"``. Entries
        are joined with ``"; "`` since each must be met.
    """
    parts: list[str] = []
    for entry in feat.prerequisites:
        entry_parts: list[str] = []
        if entry.level is not None:
            entry_parts.append(f"Level {entry.level}")
        entry_parts.extend(
            f"{ability.abbreviation} {minimum}"
            for group in entry.ability
            for ability, minimum in group.items()
        )
        entry_parts.extend(entry.feature)
        if entry.other_summary:
            entry_parts.append(entry.other_summary)
        if entry_parts:
            parts.append(", ".join(entry_parts))
    return "; ".join(parts) if parts else "None"


__all__ = [
    "ALREADY_TAKEN",
    "PrerequisiteResult",
    "check_prerequisites",
    "format_prerequisites",
    "is_feat_available",
]
