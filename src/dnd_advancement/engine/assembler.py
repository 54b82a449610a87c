"""State assembler: merges a session selection into one character update.

The assembler performs no validation; the session only calls it once
every stage predicate passes.
"""

from __future__ import annotations

from dnd_advancement.core.constants import PC_ABILITY_SCORE_CAP
from dnd_advancement.models.advancement import AdvancementSelection, CharacterUpdate
from dnd_advancement.models.character import (
    AbilityScores,
    CharacterSnapshot,
    ChoiceValue,
    ClassLevel,
    SpellsKnown,
)
from dnd_advancement.models.enums import Ability, AsiMode
from dnd_advancement.models.feats import FeatDefinition
from dnd_advancement.models.keys import normalize_choice_key


def apply_feat_bonus(
    scores: AbilityScores,
    feat: FeatDefinition,
    chosen: list[Ability] | None = None,
    *,
    cap: int = PC_ABILITY_SCORE_CAP,
) -> AbilityScores:
    """Apply a feat's ability bonuses.

    Hidden bonuses are skipped. Fixed increases always apply; a choosable
    increase applies its amount to each chosen ability.

    Args:
        scores: Scores before the feat.
        feat: The feat taken.
        chosen: Abilities picked for the feat's choosable increase.
        cap: Highest reachable score.

    Returns:
        The updated scores.
    """
    updated = scores.as_dict()
    for bonus in feat.visible_bonuses:
        for ability, amount in bonus.increases.items():
            updated[ability] = min(cap, updated[ability] + amount)
        if bonus.choose is not None:
            for ability in (chosen or [])[: bonus.choose.count]:
                if ability in bonus.choose.from_:
                    updated[ability] = min(cap, updated[ability] + bonus.choose.amount)
    return scores.with_scores(updated)


def _advance_class_levels(
    snapshot: CharacterSnapshot,
    subclass_id: str | None,
) -> tuple[ClassLevel, ...]:
    primary, *others = snapshot.class_levels
    advanced = primary.model_copy(
        update={
            "level": primary.level + 1,
            "subclass_id": subclass_id or primary.subclass_id,
        }
    )
    return (advanced, *others)


def assemble_update(
    snapshot: CharacterSnapshot,
    selection: AdvancementSelection,
    *,
    feat: FeatDefinition | None = None,
    ability_score_cap: int = PC_ABILITY_SCORE_CAP,
) -> CharacterUpdate:
    """Build the character update for a completed selection.

    Args:
        snapshot: The character before advancement.
        selection: Completed session selection.
        feat: Definition of the selected feat, when one was taken.
        ability_score_cap: Highest score an increase may reach.

    Returns:
        The CharacterUpdate to persist.
    """
    ability_scores: AbilityScores | None = None
    feats: tuple[str, ...] | None = None

    if selection.asi_mode is AsiMode.ABILITY:
        current = snapshot.ability_scores
        ability_scores = current.with_scores(
            {
                ability: min(ability_score_cap, current.get_score(ability) + boost)
                for ability, boost in selection.asi_boosts.items()
                if boost
            }
        )
    elif selection.asi_mode is AsiMode.FEAT and selection.feat_key:
        feats = (*snapshot.feats, feat.key if feat else selection.feat_key)
        if feat is not None:
            ability_scores = apply_feat_bonus(
                snapshot.ability_scores,
                feat,
                selection.feat_ability_choices,
                cap=ability_score_cap,
            )

    spells_known: SpellsKnown | None = None
    if selection.cantrips or selection.spells:
        known = snapshot.spells_known
        spells_known = SpellsKnown(
            cantrips=(*known.cantrips, *selection.cantrips),
            spells=(*known.spells, *selection.spells),
        )

    feature_choices: dict[str, ChoiceValue] | None = None
    if selection.feature_choice_selections:
        feature_choices = dict(snapshot.class_feature_choices)
        for key, value in selection.feature_choice_selections.items():
            feature_choices[normalize_choice_key(key)] = value

    return CharacterUpdate(
        level=snapshot.level + 1,
        class_levels=_advance_class_levels(snapshot, selection.subclass_id),
        max_hp=snapshot.max_hp + (selection.hp_gain or 0),
        ability_scores=ability_scores,
        feats=feats,
        spells_known=spells_known,
        class_feature_choices=feature_choices,
    )


__all__ = ["apply_feat_bonus", "assemble_update"]
