"""Advancement session: walks one character through a single level gain.

A session computes the requirement for the next primary-class level,
plans the stages it passes through and collects the player's choices in
an :class:`AdvancementSelection`. Nothing is written until :meth:`confirm`
hands the assembled :class:`CharacterUpdate` to a character store.

Example:
    >>> session = AdvancementSession(snapshot, StaticRulesProvider())
    >>> session.stages
    (<StageId.OVERVIEW: 'overview'>, ..., <StageId.CONFIRM: 'confirm'>)
    >>> while session.current_stage is not StageId.CONFIRM:
    ...     if session.current_stage is StageId.HP:
    ...         session.take_average_hp()
    ...     session.advance()
    >>> update = session.confirm(store)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dnd_advancement.core.config import AdvancementSettings, get_settings
from dnd_advancement.core.exceptions import (
    AdvancementValidationError,
    DataUnavailableError,
    PersistenceError,
    SessionStateError,
    ValidationError,
)
from dnd_advancement.core.logging import character_context, get_logger
from dnd_advancement.engine.assembler import assemble_update
from dnd_advancement.engine.calculator import (
    average_hp_gain,
    compute_requirement,
    provider_lookup,
    rolled_hp_gain,
)
from dnd_advancement.engine.dice import DiceResult, DiceRoller
from dnd_advancement.engine.prerequisites import PrerequisiteResult, is_feat_available
from dnd_advancement.engine.stages import (
    StageContext,
    missing_feature_choices,
    plan_stages,
    stage_blockers,
)
from dnd_advancement.models.advancement import (
    AdvancementRequirement,
    AdvancementSelection,
    CharacterUpdate,
)
from dnd_advancement.models.character import CharacterSnapshot
from dnd_advancement.models.content import FeatureChoice, SpellInfo, SubclassInfo
from dnd_advancement.models.enums import (
    Ability,
    AsiMode,
    ChoiceKind,
    HpMethod,
    SessionStatus,
    StageId,
)
from dnd_advancement.models.feats import FeatDefinition
from dnd_advancement.models.keys import parse_key
from dnd_advancement.rules.provider import RulesCache, RulesDataProvider
from dnd_advancement.rules.tables import Ruleset, get_ruleset


if TYPE_CHECKING:
    from dnd_advancement.storage.database import CharacterStore

logger = get_logger(__name__)


class AdvancementSession:
    """Stateful resolution of one level gain for one character.

    Stages are visited strictly in order: :meth:`advance` moves forward
    only when the current stage is complete, :meth:`go_back` may return to
    any earlier stage without discarding selections.

    Args:
        snapshot: The character before advancement.
        provider: Rules data provider, usually wrapped in a RulesCache.
        ruleset: Rules tables. Defaults to the configured ruleset.
        settings: Advancement settings. Defaults to the loaded settings.
        roller: Dice roller used for hit point rolls.
        target_level: Primary class level to reach. Defaults to one above
            the current primary class level.

    Raises:
        InvalidAdvancementError: If the character cannot gain that level.
    """

    def __init__(
        self,
        snapshot: CharacterSnapshot,
        provider: RulesDataProvider,
        *,
        ruleset: Ruleset | None = None,
        settings: AdvancementSettings | None = None,
        roller: DiceRoller | None = None,
        target_level: int | None = None,
    ) -> None:
        self._snapshot = snapshot
        self._provider = provider
        self._settings = settings or get_settings().advancement
        self._ruleset = ruleset or get_ruleset(self._settings.ruleset_version)
        self._roller = roller or DiceRoller()

        if target_level is None:
            target_level = snapshot.primary_class_level + 1
        self._requirement = compute_requirement(
            snapshot, target_level, provider, ruleset=self._ruleset
        )
        self._stages = plan_stages(self._requirement)
        self._index = 0
        self._status = SessionStatus.OPEN
        self._selection = AdvancementSelection()
        self._pending_update: CharacterUpdate | None = None
        self._waived: set[StageId] = set()
        self._warnings: list[str] = list(self._requirement.warnings)
        self.last_hp_roll: DiceResult | None = None

        self._log = logger.bind(
            character_id=snapshot.character_id,
            target_level=target_level,
        )

        self._subclasses: list[SubclassInfo] = []
        self._cantrips: list[SpellInfo] = []
        self._spells: list[SpellInfo] = []
        self._leveled_spells: list[SpellInfo] = []
        self._feats: list[FeatDefinition] = []
        self._load_content()

        self._log.info(
            "Advancement session started",
            class_id=self._requirement.class_id,
            stages=[stage.value for stage in self._stages],
        )

    # =========================================================================
    # Content
    # =========================================================================

    def _load_content(self) -> None:
        class_id = self._snapshot.primary_class.class_id

        if StageId.SUBCLASS in self._stages:
            self._subclasses = provider_lookup(
                "subclasses",
                lambda: self._provider.subclasses_of(class_id),
                self._warnings,
            )

        if StageId.SPELLS in self._stages:
            spells = provider_lookup(
                "class spells",
                lambda: self._provider.spells_of(class_id),
                self._warnings,
            )
            max_level = self._requirement.max_spell_level
            self._cantrips = [s for s in spells if s.is_cantrip]
            self._leveled_spells = [s for s in spells if not s.is_cantrip]
            self._spells = [s for s in self._leveled_spells if s.level <= max_level]

        if StageId.ASI in self._stages:
            self._feats = sorted(
                provider_lookup("feats", self._provider.all_feats, self._warnings),
                key=lambda feat: feat.name,
            )

        for stage in self.unavailable_stages:
            message = f"No {stage.label.lower()} content available"
            if message not in self._warnings:
                self._warnings.append(message)
            self._log.warning("Stage content unavailable", stage=stage.value)

    def reload_content(self) -> None:
        """Retry loading stage content from the provider.

        Clears the cache first when the provider is a RulesCache.

        Raises:
            SessionStateError: If the session is closed.
        """
        self._require_open()
        if isinstance(self._provider, RulesCache):
            self._provider.clear()
        self._warnings = list(self._requirement.warnings)
        self._load_content()
        self._log.info("Stage content reloaded", unavailable=len(self.unavailable_stages))

    def waive_stage(self, stage: StageId) -> None:
        """Let the session continue past a stage whose content is missing.

        Args:
            stage: A planned stage currently lacking content.

        Raises:
            SessionStateError: If the session is closed or the stage has
                content to choose from.
        """
        self._require_open()
        if stage not in self.unavailable_stages:
            raise SessionStateError(
                f"Stage '{stage.value}' has content and cannot be waived",
                current_stage=self.current_stage.value,
            )
        self._waived.add(stage)
        self._log.warning("Stage waived", stage=stage.value)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def snapshot(self) -> CharacterSnapshot:
        return self._snapshot

    @property
    def requirement(self) -> AdvancementRequirement:
        return self._requirement

    @property
    def stages(self) -> tuple[StageId, ...]:
        return self._stages

    @property
    def stage_index(self) -> int:
        return self._index

    @property
    def current_stage(self) -> StageId:
        return self._stages[self._index]

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_open(self) -> bool:
        return self._status is SessionStatus.OPEN

    @property
    def selection(self) -> AdvancementSelection:
        """Choices made so far. Mutate through the session operations."""
        return self._selection

    @property
    def warnings(self) -> list[str]:
        """Rules data problems met while computing or loading content."""
        return list(self._warnings)

    @property
    def pending_update(self) -> CharacterUpdate | None:
        """The update of the last confirm attempt, kept for a retry."""
        return self._pending_update

    @property
    def unavailable_stages(self) -> tuple[StageId, ...]:
        """Planned stages that need a selection but have nothing to offer."""
        unavailable: list[StageId] = []
        if StageId.SUBCLASS in self._stages and not self._subclasses:
            unavailable.append(StageId.SUBCLASS)
        if StageId.SPELLS in self._stages and (
            (self._requirement.new_cantrips_count and not self.cantrip_options)
            or (self._requirement.new_spells_count and not self.spell_options)
        ):
            unavailable.append(StageId.SPELLS)
        return tuple(unavailable)

    @property
    def waived_stages(self) -> frozenset[StageId]:
        return frozenset(self._waived)

    # =========================================================================
    # Options
    # =========================================================================

    @property
    def subclass_options(self) -> list[SubclassInfo]:
        return list(self._subclasses)

    @property
    def cantrip_options(self) -> list[SpellInfo]:
        """Class cantrips the character does not know yet."""
        known = self._snapshot.spells_known
        return [s for s in self._cantrips if not known.knows_cantrip(s.name)]

    @property
    def spell_options(self) -> list[SpellInfo]:
        """Class spells up to the new maximum spell level, minus known ones."""
        known = self._snapshot.spells_known
        return [s for s in self._spells if not known.knows_spell(s.name)]

    def feat_options(
        self,
        *,
        query: str | None = None,
        category: str | None = None,
    ) -> list[tuple[FeatDefinition, PrerequisiteResult]]:
        """List feats with their availability at the target level.

        Args:
            query: Case-insensitive substring of the feat name.
            category: Category code to keep (e.g., "G").

        Returns:
            ``(feat, result)`` pairs sorted by name; unavailable feats are
            included with their reasons.
        """
        needle = query.strip().lower() if query else ""
        return [
            (feat, self._feat_availability(feat))
            for feat in self._feats
            if needle in feat.name.lower()
            and (category is None or feat.category == category)
        ]

    @property
    def selected_feat(self) -> FeatDefinition | None:
        """Definition of the selected feat, if it resolves."""
        if self._selection.feat_key is None:
            return None
        return self._find_feat(self._selection.feat_key)

    def _feat_availability(self, feat: FeatDefinition) -> PrerequisiteResult:
        return is_feat_available(
            feat,
            self._snapshot,
            character_level=self._snapshot.level + 1,
        )

    def _find_feat(self, key: str) -> FeatDefinition | None:
        wanted = parse_key(key)
        exact = next(
            (f for f in self._feats if parse_key(f.key) == wanted),
            None,
        )
        if exact is not None:
            return exact
        return next((f for f in self._feats if wanted.matches(f.key)), None)

    # =========================================================================
    # Navigation
    # =========================================================================

    def _context(self) -> StageContext:
        return StageContext(
            snapshot=self._snapshot,
            selected_feat=self.selected_feat,
            asi_points=self._settings.asi_points,
            ability_score_cap=self._ability_score_cap,
            enforce_feature_choices=self._settings.enforce_feature_choices,
        )

    @property
    def _ability_score_cap(self) -> int:
        return self._settings.ability_score_cap

    def blocking_reasons(self, stage: StageId | None = None) -> list[str]:
        """List what keeps a stage from being complete.

        Args:
            stage: Stage to check. Defaults to the current stage.

        Returns:
            Unmet conditions; empty when the stage is complete.
        """
        stage = stage or self.current_stage
        if stage in self._waived:
            return []
        reasons = stage_blockers(stage, self._requirement, self._selection, self._context())
        if stage in self.unavailable_stages:
            reasons.insert(0, f"No {stage.label.lower()} content available")
        return reasons

    def can_proceed(self) -> bool:
        """Check whether the current stage is complete."""
        return not self.blocking_reasons()

    def advance(self) -> StageId:
        """Move to the next stage.

        Returns:
            The new current stage.

        Raises:
            SessionStateError: If the session is closed or already at the
                confirmation stage.
            AdvancementValidationError: If the current stage is incomplete.
        """
        self._require_open()
        stage = self.current_stage
        if stage is StageId.CONFIRM:
            raise SessionStateError(
                "Already at the confirmation stage",
                current_stage=stage.value,
            )
        reasons = self.blocking_reasons()
        if reasons:
            raise AdvancementValidationError(
                f"Stage '{stage.label}' is incomplete",
                stage=stage.value,
                reasons=reasons,
            )
        self._index += 1
        self._log.info("Stage advanced", stage=self.current_stage.value, index=self._index)
        return self.current_stage

    def go_back(self, index: int | None = None) -> StageId:
        """Return to an earlier stage, keeping every selection.

        Args:
            index: Stage index to return to. Defaults to the previous stage.

        Returns:
            The new current stage.

        Raises:
            SessionStateError: If the session is closed or the index is not
                before the current stage.
        """
        self._require_open()
        target = self._index - 1 if index is None else index
        if not 0 <= target < self._index:
            raise SessionStateError(
                f"Cannot go back to stage index {target}",
                current_stage=self.current_stage.value,
                details={"index": target},
            )
        self._index = target
        self._log.info("Stage revisited", stage=self.current_stage.value, index=target)
        return self.current_stage

    # =========================================================================
    # Resolution
    # =========================================================================

    def _require_open(self) -> None:
        if not self.is_open:
            raise SessionStateError(
                f"Session is {self._status.value}",
                current_stage=self.current_stage.value,
            )

    def _require_stage(self, stage: StageId) -> None:
        self._require_open()
        if stage not in self._stages:
            raise SessionStateError(
                f"This advancement has no '{stage.label}' stage",
                current_stage=self.current_stage.value,
            )
        if stage in self.unavailable_stages:
            raise DataUnavailableError(
                f"No {stage.label.lower()} content available",
                stage=stage.value,
            )

    def choose_subclass(self, subclass_id: str) -> SubclassInfo:
        """Select a subclass. Choosing again replaces the previous choice.

        Args:
            subclass_id: Key of an offered subclass.

        Returns:
            The chosen subclass.

        Raises:
            ValidationError: If the subclass is not offered.
        """
        self._require_stage(StageId.SUBCLASS)
        wanted = parse_key(subclass_id)
        subclass = next(
            (s for s in self._subclasses if wanted.matches(s.id)),
            None,
        )
        if subclass is None:
            raise ValidationError(
                f"Subclass is not available: {subclass_id}",
                field_name="subclass_id",
                invalid_value=subclass_id,
            )
        self._selection.subclass_id = subclass.id
        self._log.info("Subclass chosen", subclass_id=subclass.id)
        return subclass

    def roll_hp(self) -> int:
        """Roll the hit die for hit points.

        Returns:
            Hit points gained, never less than 1.
        """
        self._require_stage(StageId.HP)
        result = self._roller.roll_hit_die(self._requirement.hit_die)
        self.last_hp_roll = result
        return self._set_hp(HpMethod.ROLL, rolled_hp_gain(self._requirement, result.total))

    def take_average_hp(self) -> int:
        """Take the fixed hit point value.

        Returns:
            Hit points gained, never less than 1.
        """
        self._require_stage(StageId.HP)
        return self._set_hp(HpMethod.AVERAGE, average_hp_gain(self._requirement))

    def record_hp_roll(self, die_result: int) -> int:
        """Use a physical hit die result.

        Args:
            die_result: Face rolled, between 1 and the hit die size.

        Returns:
            Hit points gained, never less than 1.

        Raises:
            ValidationError: If the result is not a face of the hit die.
        """
        self._require_stage(StageId.HP)
        hit_die = self._requirement.hit_die
        if not 1 <= die_result <= hit_die:
            raise ValidationError(
                f"A d{hit_die} cannot roll {die_result}",
                field_name="die_result",
                invalid_value=die_result,
            )
        return self._set_hp(HpMethod.ROLL, rolled_hp_gain(self._requirement, die_result))

    def _set_hp(self, method: HpMethod, gain: int) -> int:
        self._selection.hp_method = method
        self._selection.hp_gain = gain
        self._log.info("Hit points chosen", method=method.value, hp_gain=gain)
        return gain

    def set_asi_mode(self, mode: AsiMode) -> None:
        """Choose between an ability score improvement and a feat.

        Switching mode clears the other mode's choices.
        """
        self._require_stage(StageId.ASI)
        if self._selection.asi_mode is mode:
            return
        self._selection.asi_mode = mode
        self._selection.asi_boosts = {}
        self._selection.feat_key = None
        self._selection.feat_ability_choices = []

    def adjust_ability(self, ability: Ability, delta: int) -> bool:
        """Add or remove one improvement point on an ability.

        Args:
            ability: Ability to adjust.
            delta: +1 or -1.

        Returns:
            True if the point moved; False if the budget, the per-ability
            maximum or the score cap refused it.

        Raises:
            SessionStateError: If ability mode is not selected.
            ValidationError: If delta is not +1 or -1.
        """
        self._require_stage(StageId.ASI)
        if self._selection.asi_mode is not AsiMode.ABILITY:
            raise SessionStateError(
                "Select ability score improvement mode first",
                current_stage=self.current_stage.value,
            )
        if delta not in (1, -1):
            raise ValidationError(
                "Ability adjustments move one point at a time",
                field_name="delta",
                invalid_value=delta,
            )

        boosts = dict(self._selection.asi_boosts)
        boost = boosts.get(ability, 0)
        if delta > 0:
            score = self._snapshot.ability_scores.get_score(ability)
            if (
                self._selection.asi_total >= self._settings.asi_points
                or boost >= 2
                or score + boost + 1 > self._ability_score_cap
            ):
                return False
        elif boost <= 0:
            return False

        boost += delta
        if boost:
            boosts[ability] = boost
        else:
            boosts.pop(ability, None)
        self._selection.asi_boosts = boosts
        return True

    def choose_feat(self, feat_key: str) -> FeatDefinition:
        """Select a feat for the improvement.

        Prerequisites are checked when advancing, so an unavailable feat
        can still be selected to see its reasons.

        Args:
            feat_key: Key of a known feat; the source may be omitted.

        Returns:
            The selected feat.

        Raises:
            SessionStateError: If feat mode is not selected.
            ValidationError: If no such feat exists.
        """
        self._require_stage(StageId.ASI)
        if self._selection.asi_mode is not AsiMode.FEAT:
            raise SessionStateError(
                "Select feat mode first",
                current_stage=self.current_stage.value,
            )
        feat = self._find_feat(feat_key)
        if feat is None:
            raise ValidationError(
                f"Unknown feat: {feat_key}",
                field_name="feat_key",
                invalid_value=feat_key,
            )
        self._selection.feat_key = feat.key
        self._selection.feat_ability_choices = []
        self._log.info("Feat chosen", feat=feat.key)
        return feat

    def choose_feat_ability(self, ability: Ability) -> bool:
        """Toggle an ability for the selected feat's choosable increase.

        Returns:
            Whether the ability is chosen after the call; False also when
            the feat's count is already reached.

        Raises:
            ValidationError: If the feat has no choosable increase or the
                ability is not one of its options.
        """
        self._require_stage(StageId.ASI)
        feat = self.selected_feat
        choice = feat.choosable_bonus if feat else None
        if choice is None or ability not in choice.from_:
            raise ValidationError(
                f"{ability.full_name} cannot be increased by this feat",
                field_name="ability",
                invalid_value=ability.value,
            )
        chosen = list(self._selection.feat_ability_choices)
        if ability in chosen:
            chosen.remove(ability)
            self._selection.feat_ability_choices = chosen
            return False
        if len(chosen) >= choice.count:
            return False
        chosen.append(ability)
        self._selection.feat_ability_choices = chosen
        return True

    def toggle_cantrip(self, name: str) -> bool:
        """Select or deselect a cantrip.

        Returns:
            Whether the cantrip is selected after the call; False also when
            the cantrip count is already reached.

        Raises:
            ValidationError: If the cantrip is already known or not offered.
        """
        self._require_stage(StageId.SPELLS)
        if self._snapshot.spells_known.knows_cantrip(name):
            raise ValidationError(
                f"Cantrip already known: {name}",
                field_name="cantrip",
                invalid_value=name,
            )
        spell = _find_spell(self._cantrips, name)
        if spell is None:
            raise ValidationError(
                f"Cantrip is not on the class list: {name}",
                field_name="cantrip",
                invalid_value=name,
            )
        selected = list(self._selection.cantrips)
        result = _toggle(selected, spell.name, self._requirement.new_cantrips_count)
        self._selection.cantrips = selected
        return result

    def toggle_spell(self, name: str) -> bool:
        """Select or deselect a leveled spell.

        Returns:
            Whether the spell is selected after the call; False also when
            the spell count is already reached.

        Raises:
            ValidationError: If the spell is already known, not on the class
                list, or above the maximum spell level.
        """
        self._require_stage(StageId.SPELLS)
        if self._snapshot.spells_known.knows_spell(name):
            raise ValidationError(
                f"Spell already known: {name}",
                field_name="spell",
                invalid_value=name,
            )
        spell = _find_spell(self._spells, name)
        if spell is None:
            message = f"Spell is not on the class list: {name}"
            if _find_spell(self._leveled_spells, name) is not None:
                message = f"{name} is above spell level {self._requirement.max_spell_level}"
            raise ValidationError(message, field_name="spell", invalid_value=name)
        selected = list(self._selection.spells)
        result = _toggle(selected, spell.name, self._requirement.new_spells_count)
        self._selection.spells = selected
        return result

    def _find_choice(self, feature_name: str) -> FeatureChoice:
        choice = next(
            (
                c
                for c in self._requirement.feature_choices
                if feature_name in (c.feature_name, c.choice_key)
            ),
            None,
        )
        if choice is None:
            raise ValidationError(
                f"No feature choice named {feature_name}",
                field_name="feature_name",
                invalid_value=feature_name,
            )
        return choice

    def choose_feature_option(self, feature_name: str, option_key: str) -> None:
        """Pick the option of a single feature choice.

        Raises:
            ValidationError: If the choice is unknown, takes several options,
                or does not offer the option.
        """
        self._require_stage(StageId.FEATURE_CHOICES)
        choice = self._find_choice(feature_name)
        if choice.kind is not ChoiceKind.SINGLE:
            raise ValidationError(
                f"{choice.feature_name} takes several options",
                field_name="feature_name",
                invalid_value=feature_name,
            )
        _require_option(choice, option_key)
        selections = dict(self._selection.feature_choice_selections)
        selections[choice.choice_key] = option_key
        self._selection.feature_choice_selections = selections
        self._log.info("Feature option chosen", feature=choice.feature_name, option=option_key)

    def toggle_feature_option(self, feature_name: str, option_key: str) -> bool:
        """Select or deselect an option of a multiple feature choice.

        Returns:
            Whether the option is selected after the call; False also when
            the choice's count is already reached.

        Raises:
            ValidationError: If the choice is unknown, takes one option, or
                does not offer the option.
        """
        self._require_stage(StageId.FEATURE_CHOICES)
        choice = self._find_choice(feature_name)
        if choice.kind is not ChoiceKind.MULTIPLE:
            raise ValidationError(
                f"{choice.feature_name} takes a single option",
                field_name="feature_name",
                invalid_value=feature_name,
            )
        _require_option(choice, option_key)
        selected = self._selection.selected_options(choice.choice_key)
        result = _toggle(selected, option_key, choice.required_count)
        selections = dict(self._selection.feature_choice_selections)
        if selected:
            selections[choice.choice_key] = selected
        else:
            selections.pop(choice.choice_key, None)
        self._selection.feature_choice_selections = selections
        return result

    def missing_feature_choices(self) -> list[str]:
        """List feature choices that are not fully made."""
        return missing_feature_choices(self._requirement.feature_choices, self._selection)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def preview_update(self) -> CharacterUpdate:
        """Assemble the update the current selection would produce.

        No validation is performed; use it to show a summary.
        """
        return assemble_update(
            self._snapshot,
            self._selection,
            feat=self.selected_feat,
            ability_score_cap=self._ability_score_cap,
        )

    def cancel(self) -> None:
        """Discard every selection and close the session. Nothing is written."""
        self._require_open()
        self._status = SessionStatus.CANCELLED
        self._selection = AdvancementSelection()
        self._pending_update = None
        self._log.info("Advancement cancelled", stage=self.current_stage.value)

    def confirm(self, store: CharacterStore) -> CharacterUpdate:
        """Commit the advancement through a character store.

        Args:
            store: Persistence collaborator receiving the payload.

        Returns:
            The committed CharacterUpdate.

        Raises:
            SessionStateError: If the session is closed or not at the
                confirmation stage.
            AdvancementValidationError: If any stage became incomplete.
            PersistenceError: If the store rejects the update. The session
                stays at the confirmation stage and can retry.
        """
        self._require_open()
        if self.current_stage is not StageId.CONFIRM:
            raise SessionStateError(
                "Advancement can only be confirmed at the confirmation stage",
                current_stage=self.current_stage.value,
            )
        for stage in self._stages:
            reasons = self.blocking_reasons(stage)
            if reasons:
                raise AdvancementValidationError(
                    f"Stage '{stage.label}' is incomplete",
                    stage=stage.value,
                    reasons=reasons,
                )

        update = self.preview_update()
        self._pending_update = update
        character_id = self._snapshot.character_id

        try:
            with character_context(character_id, target_level=update.level):
                applied = store.apply_update(character_id, update.to_payload())
        except PersistenceError:
            self._log.error("Advancement commit failed")
            raise
        except Exception as exc:
            self._log.error("Advancement commit failed", error=str(exc))
            raise PersistenceError(
                f"Failed to save advancement: {exc}",
                character_id=character_id,
            ) from exc
        if not applied:
            self._log.error("Advancement commit rejected")
            raise PersistenceError(
                "Character store rejected the advancement",
                character_id=character_id,
            )

        self._status = SessionStatus.COMMITTED
        self._log.info(
            "Advancement committed",
            level=update.level,
            max_hp=update.max_hp,
        )
        return update


def _find_spell(spells: list[SpellInfo], name: str) -> SpellInfo | None:
    wanted = name.strip().lower()
    return next((s for s in spells if s.name.lower() == wanted), None)


def _toggle(selected: list[str], item: str, limit: int) -> bool:
    """Toggle ``item`` in ``selected`` in place, refusing to exceed ``limit``."""
    if item in selected:
        selected.remove(item)
        return False
    if len(selected) >= limit:
        return False
    selected.append(item)
    return True


def _require_option(choice: FeatureChoice, option_key: str) -> None:
    if choice.option(option_key) is None:
        raise ValidationError(
            f"{choice.feature_name} does not offer {option_key}",
            field_name="option_key",
            invalid_value=option_key,
        )


__all__ = ["AdvancementSession"]
