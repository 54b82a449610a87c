"""Feat definition models.

Feats are read from rules data shaped like the 5etools feat files:
``prerequisite`` entries with level, ability, feature and free-text
conditions, and ``ability`` bonus entries that may be fixed, choosable,
or hidden (the built-in bonus of a generic improvement feat).

Example:
    >>> feat = FeatDefinition.from_raw({
    ...     "name": "Actor", "source": "PHB", "category": "G",
    ...     "prerequisite": [{"level": 4, "ability": [{"cha": 13}]}],
    ...     "ability": [{"cha": 1}],
    ... })
    >>> feat.key
    'actor|PHB'
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dnd_advancement.core.constants import DEFAULT_CONTENT_SOURCE
from dnd_advancement.core.exceptions import ValidationError
from dnd_advancement.models.enums import Ability
from dnd_advancement.models.keys import build_key


class FeatPrerequisite(BaseModel):
    """One prerequisite entry of a feat.

    Attributes:
        level: Minimum character level.
        ability: Ability minimums; every listed ability must be met.
        feature: Required feature tags (e.g., "Fighting Style").
        other_summary: Free-text condition that cannot be checked mechanically.
    """

    model_config = ConfigDict(frozen=True)

    level: int | None = Field(default=None, ge=1)
    ability: tuple[dict[Ability, int], ...] = Field(default_factory=tuple)
    feature: tuple[str, ...] = Field(default_factory=tuple)
    other_summary: str | None = Field(default=None)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> FeatPrerequisite:
        """Parse a raw 5etools prerequisite entry.

        Unknown keys (race, proficiency, spellcasting...) are ignored.
        """
        level = raw.get("level")
        if isinstance(level, dict):
            level = level.get("level")

        ability_groups: list[dict[Ability, int]] = []
        for group in raw.get("ability") or []:
            parsed = {
                ability: int(minimum)
                for abbr, minimum in group.items()
                if (ability := Ability.from_abbreviation(abbr)) is not None
            }
            if parsed:
                ability_groups.append(parsed)

        other = raw.get("otherSummary")
        if isinstance(other, dict):
            other = other.get("entry") or other.get("entrySummary")

        return cls(
            level=level,
            ability=tuple(ability_groups),
            feature=tuple(raw.get("feature") or ()),
            other_summary=other or None,
        )


class AbilityChoice(BaseModel):
    """A choosable ability increase ("+1 to Strength or Dexterity")."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: tuple[Ability, ...] = Field(alias="from")
    amount: int = Field(default=1, ge=1)
    count: int = Field(default=1, ge=1)


class AbilityBonus(BaseModel):
    """One ability bonus entry of a feat.

    Attributes:
        increases: Fixed increases keyed by ability.
        choose: Choosable increase, if any.
        hidden: Whether the bonus belongs to a generic improvement feat and
            must not be applied on top of an explicit choice.
    """

    model_config = ConfigDict(frozen=True)

    increases: dict[Ability, int] = Field(default_factory=dict)
    choose: AbilityChoice | None = Field(default=None)
    hidden: bool = Field(default=False)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> AbilityBonus:
        """Parse a raw 5etools ability bonus entry."""
        increases = {
            ability: int(amount)
            for abbr, amount in raw.items()
            if abbr not in ("choose", "hidden")
            and isinstance(amount, int)
            and (ability := Ability.from_abbreviation(abbr)) is not None
        }
        choose = None
        raw_choose = raw.get("choose")
        if isinstance(raw_choose, dict) and raw_choose.get("from"):
            choose = AbilityChoice(
                **{
                    "from": tuple(
                        ability
                        for abbr in raw_choose["from"]
                        if (ability := Ability.from_abbreviation(abbr)) is not None
                    ),
                    "amount": raw_choose.get("amount", 1),
                    "count": raw_choose.get("count", 1),
                }
            )
        return cls(increases=increases, choose=choose, hidden=bool(raw.get("hidden", False)))


class FeatDefinition(BaseModel):
    """A feat with its prerequisites and ability bonuses.

    Attributes:
        name: Feat name.
        source: Source abbreviation.
        category: Category code (G, O, FS, EB).
        prerequisites: Prerequisite entries.
        ability: Ability bonus entries.
        repeatable: Whether the feat may be taken more than once.
        description: Short rules summary.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    source: str = Field(default=DEFAULT_CONTENT_SOURCE)
    category: str = Field(default="G")
    prerequisites: tuple[FeatPrerequisite, ...] = Field(default_factory=tuple)
    ability: tuple[AbilityBonus, ...] = Field(default_factory=tuple)
    repeatable: bool = Field(default=False)
    description: str = Field(default="")

    @property
    def key(self) -> str:
        """Canonical storage key (e.g., 'great-weapon-master|XPHB')."""
        return build_key(self.name, self.source)

    @property
    def visible_bonuses(self) -> tuple[AbilityBonus, ...]:
        """Ability bonuses that are applied when the feat is taken."""
        return tuple(bonus for bonus in self.ability if not bonus.hidden)

    @property
    def choosable_bonus(self) -> AbilityChoice | None:
        """The first non-hidden choosable ability increase, if any."""
        for bonus in self.visible_bonuses:
            if bonus.choose is not None:
                return bonus.choose
        return None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> FeatDefinition:
        """Parse a raw 5etools feat entry.

        Args:
            raw: Feat dictionary as found in rules data files.

        Returns:
            The parsed FeatDefinition.

        Raises:
            ValidationError: If the entry has no name.
        """
        name = raw.get("name")
        if not name:
            raise ValidationError("Feat entry has no name", field_name="name", invalid_value=raw)

        category = raw.get("category") or "G"
        if isinstance(category, list):
            category = category[0] if category else "G"

        entries = raw.get("entries") or []
        description = next((e for e in entries if isinstance(e, str)), "")

        return cls(
            name=name,
            source=raw.get("source") or DEFAULT_CONTENT_SOURCE,
            category=str(category),
            prerequisites=tuple(
                FeatPrerequisite.from_raw(p) for p in raw.get("prerequisite") or []
            ),
            ability=tuple(AbilityBonus.from_raw(a) for a in raw.get("ability") or []),
            repeatable=bool(raw.get("repeatable", False)),
            description=description,
        )


__all__ = [
    "FeatPrerequisite",
    "AbilityChoice",
    "AbilityBonus",
    "FeatDefinition",
]
