"""Versioned rules tables for level advancement.

All numbers the advancement calculator needs (hit dice, ASI levels,
subclass levels, cantrips and spells known) live in one frozen
:class:`Ruleset` value. The calculator receives a ruleset explicitly, so
tables are never re-declared at call sites.

Cantrip and spell tables are cumulative thresholds: ``{1: 3, 4: 4, 10: 5}``
means 3 from level 1, 4 from level 4 and 5 from level 10.

Example:
    >>> DEFAULT_RULESET.cantrips_known("wizard", 4)
    4
    >>> DEFAULT_RULESET.is_asi_level("Fighter|XPHB", 6)
    True
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from dnd_advancement.core.constants import (
    DEFAULT_HIT_DIE,
    DEFAULT_SUBCLASS_LEVEL,
    MAX_SPELL_LEVEL,
)
from dnd_advancement.core.exceptions import ConfigurationError
from dnd_advancement.core.logging import get_logger
from dnd_advancement.models.keys import parse_key


logger = get_logger(__name__)

DEFAULT_ASI_KEY = "default"
"""Key of the ASI level list used by classes without an override."""


def cumulative_lookup(table: Mapping[int, int], level: int) -> int:
    """Look up a cumulative-threshold table.

    Args:
        table: Mapping of level threshold to value.
        level: Level to look up.

    Returns:
        The value of the greatest threshold not above ``level``, or 0.

    Example:
        >>> cumulative_lookup({1: 3, 4: 4, 10: 5}, 9)
        4
    """
    value = 0
    for threshold, amount in sorted(table.items()):
        if level >= threshold:
            value = amount
    return value


def max_spell_level(level: int) -> int:
    """Get the highest spell level available at a class level.

    Args:
        level: Class level.

    Returns:
        ``min(9, ceil(level / 2))``, or 0 below level 1.
    """
    if level < 1:
        return 0
    return min(MAX_SPELL_LEVEL, math.ceil(level / 2))


def fixed_hit_points(hit_die: int) -> int:
    """Get the fixed hit point value of a hit die, ``ceil(die / 2) + 1``."""
    return math.ceil(hit_die / 2) + 1


class Ruleset(BaseModel):
    """One consistent set of advancement tables.

    Class arguments accept keys in any form (``"wizard"``,
    ``"Wizard|XPHB"``); they are normalized with :func:`parse_key`.

    Attributes:
        version: Ruleset identifier (e.g., '5e-2024').
        hit_dice: Hit die size by class id.
        default_hit_die: Hit die for classes missing from ``hit_dice``.
        asi_levels: ASI levels by class id, with a ``default`` entry.
        subclass_levels: Level at which the subclass is chosen, by class id.
        default_subclass_level: Subclass level for unlisted classes.
        cantrips_known_table: Cumulative cantrip counts by class id.
        spells_known_table: Cumulative spells-known counts by class id.
        known_casters: Classes that learn a fixed number of spells.
        spellcasters: Classes with a spell list.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    hit_dice: dict[str, int] = Field(default_factory=dict)
    default_hit_die: int = Field(default=DEFAULT_HIT_DIE, ge=1)
    asi_levels: dict[str, tuple[int, ...]] = Field(default_factory=dict)
    subclass_levels: dict[str, int] = Field(default_factory=dict)
    default_subclass_level: int = Field(default=DEFAULT_SUBCLASS_LEVEL, ge=1, le=20)
    cantrips_known_table: dict[str, dict[int, int]] = Field(default_factory=dict)
    spells_known_table: dict[str, dict[int, int]] = Field(default_factory=dict)
    known_casters: frozenset[str] = Field(default_factory=frozenset)
    spellcasters: frozenset[str] = Field(default_factory=frozenset)

    @staticmethod
    def _class_id(class_id: str) -> str:
        return parse_key(class_id).id

    def hit_die(self, class_id: str) -> int:
        """Get the hit die size for a class."""
        return self.hit_dice.get(self._class_id(class_id), self.default_hit_die)

    def average_hit_die(self, class_id: str) -> int:
        """Get the fixed hit point value of a class hit die."""
        return fixed_hit_points(self.hit_die(class_id))

    def asi_levels_for(self, class_id: str) -> tuple[int, ...]:
        """Get the ASI levels of a class, falling back to the default list."""
        cid = self._class_id(class_id)
        if cid in self.asi_levels:
            return self.asi_levels[cid]
        return self.asi_levels.get(DEFAULT_ASI_KEY, ())

    def is_asi_level(self, class_id: str, level: int) -> bool:
        """Check if a class level grants an ASI or feat."""
        return level in self.asi_levels_for(class_id)

    def subclass_level(self, class_id: str) -> int:
        """Get the class level at which a subclass is chosen."""
        return self.subclass_levels.get(self._class_id(class_id), self.default_subclass_level)

    def cantrips_known(self, class_id: str, level: int) -> int:
        """Get the number of cantrips known at a class level."""
        table = self.cantrips_known_table.get(self._class_id(class_id))
        return cumulative_lookup(table, level) if table else 0

    def spells_known(self, class_id: str, level: int) -> int:
        """Get the number of spells known at a class level.

        Only known casters learn a fixed number of spells; prepared casters
        always get 0.
        """
        cid = self._class_id(class_id)
        if cid not in self.known_casters:
            return 0
        table = self.spells_known_table.get(cid)
        return cumulative_lookup(table, level) if table else 0

    def is_known_caster(self, class_id: str) -> bool:
        return self._class_id(class_id) in self.known_casters

    def is_spellcaster(self, class_id: str) -> bool:
        return self._class_id(class_id) in self.spellcasters

    def max_spell_level(self, level: int) -> int:
        """Get the highest spell level available at a class level."""
        return max_spell_level(level)


# =============================================================================
# 2024 Rules
# =============================================================================

DEFAULT_RULESET = Ruleset(
    version="5e-2024",
    hit_dice={
        "barbarian": 12,
        "fighter": 10,
        "paladin": 10,
        "ranger": 10,
        "bard": 8,
        "cleric": 8,
        "druid": 8,
        "monk": 8,
        "rogue": 8,
        "warlock": 8,
        "sorcerer": 6,
        "wizard": 6,
    },
    asi_levels={
        DEFAULT_ASI_KEY: (4, 8, 12, 16, 19),
        "fighter": (4, 6, 8, 12, 14, 16, 19),
        "rogue": (4, 8, 10, 12, 16, 19),
    },
    subclass_levels={
        "cleric": 1,
        "sorcerer": 1,
        "warlock": 1,
        "druid": 2,
        "wizard": 2,
    },
    cantrips_known_table={
        "bard": {1: 2, 4: 3, 10: 4},
        "cleric": {1: 3, 4: 4, 10: 5},
        "druid": {1: 2, 4: 3, 10: 4},
        "sorcerer": {1: 4, 4: 5, 10: 6},
        "warlock": {1: 2, 4: 3, 10: 4},
        "wizard": {1: 3, 4: 4, 10: 5},
    },
    spells_known_table={
        "bard": {
            1: 4, 2: 5, 3: 6, 4: 7, 5: 8, 6: 9, 7: 10, 8: 11, 9: 12,
            10: 14, 11: 15, 13: 16, 14: 18, 15: 19, 17: 20, 18: 22,
        },
        "sorcerer": {
            1: 2, 2: 3, 3: 4, 4: 5, 5: 6, 6: 7, 7: 8, 8: 9, 9: 10,
            10: 11, 11: 12, 13: 13, 15: 14, 17: 15,
        },
        "warlock": {
            1: 2, 2: 3, 3: 4, 4: 5, 5: 6, 6: 7, 7: 8, 8: 9, 9: 10,
            11: 11, 13: 12, 15: 13, 17: 14, 19: 15,
        },
        "ranger": {
            2: 2, 3: 3, 5: 4, 7: 5, 9: 6, 11: 7, 13: 8, 15: 9, 17: 10, 19: 11,
        },
    },
    known_casters=frozenset({"bard", "sorcerer", "warlock", "ranger"}),
    spellcasters=frozenset(
        {"bard", "cleric", "druid", "paladin", "ranger", "sorcerer", "warlock", "wizard"}
    ),
)


_RULESETS: dict[str, Ruleset] = {DEFAULT_RULESET.version: DEFAULT_RULESET}


def get_ruleset(version: str | None = None) -> Ruleset:
    """Resolve a registered ruleset.

    Args:
        version: Ruleset version. Defaults to the configured
            ``advancement.ruleset_version``.

    Returns:
        The registered Ruleset.

    Raises:
        ConfigurationError: If no ruleset is registered under ``version``.
    """
    if version is None:
        from dnd_advancement.core.config import get_settings

        version = get_settings().advancement.ruleset_version

    ruleset = _RULESETS.get(version)
    if ruleset is None:
        logger.error("Unknown ruleset requested", version=version, known=sorted(_RULESETS))
        raise ConfigurationError(
            f"Unknown ruleset version: {version}",
            config_key="ruleset_version",
            details={"known_versions": sorted(_RULESETS)},
        )
    return ruleset


__all__ = [
    "DEFAULT_ASI_KEY",
    "DEFAULT_RULESET",
    "Ruleset",
    "cumulative_lookup",
    "fixed_hit_points",
    "get_ruleset",
    "max_spell_level",
]
