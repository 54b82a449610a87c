"""Advancement calculator.

Derives everything a single level gain requires from a character snapshot,
a target level, a rules data provider and a ruleset. The calculation is
deterministic and has no side effects; provider failures are logged and
reported as warnings on the requirement.

Example:
    >>> requirement = compute_requirement(snapshot, 2, StaticRulesProvider())
    >>> requirement.hit_die, requirement.needs_subclass
    (10, False)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from dnd_advancement.core.constants import MAX_CHARACTER_LEVEL
from dnd_advancement.core.exceptions import InvalidAdvancementError
from dnd_advancement.core.logging import get_logger
from dnd_advancement.models.advancement import AdvancementRequirement
from dnd_advancement.models.character import CharacterSnapshot
from dnd_advancement.rules.provider import RulesDataProvider
from dnd_advancement.rules.tables import Ruleset, fixed_hit_points, get_ruleset


logger = get_logger(__name__)

T = TypeVar("T")


def provider_lookup(
    description: str,
    call: Callable[[], list[T]],
    warnings: list[str],
) -> list[T]:
    """Call a rules data provider, degrading to an empty result.

    Args:
        description: What is being loaded, used in the warning.
        call: Zero-argument provider call.
        warnings: List the warning is appended to on failure.

    Returns:
        The provider result, or an empty list if the provider raised.
    """
    try:
        return list(call())
    except Exception as exc:
        logger.warning("Rules data unavailable", lookup=description, error=str(exc))
        warnings.append(f"Could not load {description}: {exc}")
        return []


def compute_requirement(
    snapshot: CharacterSnapshot,
    target_level: int,
    provider: RulesDataProvider,
    *,
    ruleset: Ruleset | None = None,
) -> AdvancementRequirement:
    """Compute what advancing the primary class to ``target_level`` requires.

    Args:
        snapshot: The character before advancement.
        target_level: Primary class level after advancement.
        provider: Source of class features and feature choices.
        ruleset: Rules tables. Defaults to the configured ruleset.

    Returns:
        The frozen AdvancementRequirement.

    Raises:
        InvalidAdvancementError: If the target is not exactly one level above
            the primary class level, or the character is at the level cap.
    """
    ruleset = ruleset or get_ruleset()
    primary = snapshot.primary_class
    current_level = primary.level

    if target_level != current_level + 1:
        raise InvalidAdvancementError(
            "Advancement must gain exactly one class level",
            current_level=current_level,
            target_level=target_level,
        )
    if target_level > MAX_CHARACTER_LEVEL or snapshot.level >= MAX_CHARACTER_LEVEL:
        raise InvalidAdvancementError(
            f"Cannot advance beyond level {MAX_CHARACTER_LEVEL}",
            current_level=current_level,
            target_level=target_level,
            details={"character_level": snapshot.level},
        )

    class_id = primary.class_key.id
    warnings: list[str] = []

    current_spell_level = ruleset.max_spell_level(current_level)
    target_spell_level = ruleset.max_spell_level(target_level)

    new_cantrips = max(
        0,
        ruleset.cantrips_known(class_id, target_level)
        - ruleset.cantrips_known(class_id, current_level),
    )
    new_spells = 0
    if ruleset.is_known_caster(class_id):
        new_spells = max(
            0,
            ruleset.spells_known(class_id, target_level)
            - ruleset.spells_known(class_id, current_level),
        )

    features = provider_lookup(
        "class features",
        lambda: provider.class_features_at(primary.class_id, target_level),
        warnings,
    )
    choices = provider_lookup(
        "feature choices",
        lambda: provider.feature_choices_at(primary.class_id, target_level, primary.subclass_id),
        warnings,
    )

    requirement = AdvancementRequirement(
        class_id=class_id,
        current_level=current_level,
        target_level=target_level,
        hit_die=ruleset.hit_die(class_id),
        con_modifier=snapshot.ability_scores.constitution_modifier,
        needs_subclass=(
            primary.subclass_id is None and target_level == ruleset.subclass_level(class_id)
        ),
        is_asi_level=ruleset.is_asi_level(class_id, target_level),
        new_cantrips_count=new_cantrips,
        new_spells_count=new_spells,
        max_spell_level=target_spell_level,
        new_spell_level_unlocked=target_spell_level > current_spell_level,
        class_features=tuple(f for f in features if f.level == target_level),
        feature_choices=tuple(choices),
        warnings=tuple(warnings),
    )

    logger.info(
        "Advancement requirement computed",
        character_id=snapshot.character_id,
        class_id=class_id,
        target_level=target_level,
        needs_subclass=requirement.needs_subclass,
        is_asi_level=requirement.is_asi_level,
        new_cantrips=new_cantrips,
        new_spells=new_spells,
    )
    return requirement


def rolled_hp_gain(requirement: AdvancementRequirement, die_result: int) -> int:
    """Hit points gained from a rolled hit die, never less than 1."""
    return max(1, die_result + requirement.con_modifier)


def average_hp_gain(requirement: AdvancementRequirement) -> int:
    """Hit points gained with the fixed value plus CON, never less than 1."""
    return max(1, fixed_hit_points(requirement.hit_die) + requirement.con_modifier)


__all__ = [
    "average_hp_gain",
    "compute_requirement",
    "provider_lookup",
    "rolled_hp_gain",
]
