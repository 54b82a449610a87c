"""Advancement stage planning and completion predicates.

:func:`plan_stages` decides which stages a level gain goes through;
:func:`stage_blockers` tells whether a stage's selection is complete. Both
are pure functions, so stage inclusion and stage completion are testable
without a session.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from dnd_advancement.core.constants import ASI_POINT_BUDGET, PC_ABILITY_SCORE_CAP
from dnd_advancement.engine.prerequisites import is_feat_available
from dnd_advancement.models.advancement import AdvancementRequirement, AdvancementSelection
from dnd_advancement.models.character import CharacterSnapshot
from dnd_advancement.models.content import FeatureChoice
from dnd_advancement.models.enums import AsiMode, StageId
from dnd_advancement.models.feats import FeatDefinition


@dataclass(frozen=True)
class StageContext:
    """Everything beyond the requirement and selection a predicate needs.

    Attributes:
        snapshot: The character being advanced.
        selected_feat: Definition of the selected feat, if it resolved.
        asi_points: Points an ability score improvement distributes.
        ability_score_cap: Highest score an increase may reach.
        enforce_feature_choices: Whether feature choices block progress.
    """

    snapshot: CharacterSnapshot
    selected_feat: FeatDefinition | None = None
    asi_points: int = ASI_POINT_BUDGET
    ability_score_cap: int = PC_ABILITY_SCORE_CAP
    enforce_feature_choices: bool = False


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def plan_stages(requirement: AdvancementRequirement) -> tuple[StageId, ...]:
    """Plan the ordered stages of a level gain.

    Overview, hit points and confirmation are always present; the other
    stages appear only when the requirement calls for them.

    Args:
        requirement: The computed advancement requirement.

    Returns:
        Stages in canonical order.
    """
    stages = [StageId.OVERVIEW]
    if requirement.class_features:
        stages.append(StageId.FEATURES)
    if requirement.needs_subclass:
        stages.append(StageId.SUBCLASS)
    if requirement.feature_choices:
        stages.append(StageId.FEATURE_CHOICES)
    stages.append(StageId.HP)
    if requirement.is_asi_level:
        stages.append(StageId.ASI)
    if requirement.requires_spell_selection or requirement.new_spell_level_unlocked:
        stages.append(StageId.SPELLS)
    stages.append(StageId.CONFIRM)
    return tuple(stages)


def missing_feature_choices(
    choices: Sequence[FeatureChoice],
    selection: AdvancementSelection,
) -> list[str]:
    """List feature choices that are not fully made.

    Args:
        choices: Feature choices to check.
        selection: The session selection.

    Returns:
        Feature names, with the number still needed for partial multiple
        choices (e.g., ``"Expertise (need 1 more)"``).
    """
    missing: list[str] = []
    for choice in choices:
        selected = len(selection.selected_options(choice.choice_key))
        if selected == 0:
            missing.append(choice.feature_name)
        elif selected < choice.required_count:
            missing.append(f"{choice.feature_name} (need {choice.required_count - selected} more)")
    return missing


def _asi_blockers(
    selection: AdvancementSelection,
    context: StageContext,
) -> list[str]:
    if selection.asi_mode is None:
        return ["Choose an ability score improvement or a feat"]

    if selection.asi_mode is AsiMode.ABILITY:
        reasons: list[str] = []
        remaining = context.asi_points - selection.asi_total
        if remaining > 0:
            reasons.append(f"Distribute {_plural(remaining, 'more point')}")
        elif remaining < 0:
            reasons.append(f"Remove {_plural(-remaining, 'point')}")
        scores = context.snapshot.ability_scores
        for ability, boost in selection.asi_boosts.items():
            if boost and scores.get_score(ability) + boost > context.ability_score_cap:
                reasons.append(f"{ability.full_name} cannot exceed {context.ability_score_cap}")
        return reasons

    if selection.feat_key is None:
        return ["Choose a feat"]
    feat = context.selected_feat
    if feat is None:
        return [f"Unknown feat: {selection.feat_key}"]

    result = is_feat_available(
        feat,
        context.snapshot,
        character_level=context.snapshot.level + 1,
    )
    reasons = list(result.reasons)
    choosable = feat.choosable_bonus
    if choosable is not None:
        remaining = choosable.count - len(selection.feat_ability_choices)
        if remaining > 0:
            noun = "ability" if remaining == 1 else "abilities"
            reasons.append(f"Choose {remaining} more {noun} to increase")
    return reasons


def _spell_blockers(
    requirement: AdvancementRequirement,
    selection: AdvancementSelection,
) -> list[str]:
    reasons: list[str] = []
    for picked, needed, word in (
        (len(selection.cantrips), requirement.new_cantrips_count, "cantrip"),
        (len(selection.spells), requirement.new_spells_count, "spell"),
    ):
        if picked < needed:
            reasons.append(f"Choose {_plural(needed - picked, 'more ' + word)}")
        elif picked > needed:
            reasons.append(f"Remove {_plural(picked - needed, word)}")
    return reasons


def stage_blockers(
    stage: StageId,
    requirement: AdvancementRequirement,
    selection: AdvancementSelection,
    context: StageContext,
) -> list[str]:
    """Evaluate a stage's completion predicate.

    Args:
        stage: The stage to check.
        requirement: The computed advancement requirement.
        selection: Choices made so far.
        context: Snapshot, resolved feat and settings.

    Returns:
        Every unmet condition; an empty list means the stage is complete.
    """
    if stage is StageId.SUBCLASS:
        return [] if selection.subclass_id else ["Choose a subclass"]
    if stage is StageId.HP:
        if selection.hp_gain is None or selection.hp_gain < 1:
            return ["Roll or take the average for hit points"]
        return []
    if stage is StageId.ASI:
        return _asi_blockers(selection, context)
    if stage is StageId.SPELLS:
        return _spell_blockers(requirement, selection)
    if stage is StageId.FEATURE_CHOICES and context.enforce_feature_choices:
        return [
            f"Make a choice for {name}"
            for name in missing_feature_choices(requirement.feature_choices, selection)
        ]
    return []


__all__ = [
    "StageContext",
    "missing_feature_choices",
    "plan_stages",
    "stage_blockers",
]
