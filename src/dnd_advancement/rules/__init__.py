"""Rules tables and rules data providers.

Submodules:
    tables: Versioned advancement tables (hit dice, ASI levels, spells known)
    provider: Rules data provider protocol, static provider and cache
    class_features, feature_choices, spell_lists, feat_catalog: bundled data
"""

from __future__ import annotations

from dnd_advancement.rules.provider import (
    RulesCache,
    RulesDataProvider,
    StaticRulesProvider,
)
from dnd_advancement.rules.tables import (
    DEFAULT_RULESET,
    Ruleset,
    cumulative_lookup,
    get_ruleset,
    max_spell_level,
)


__all__ = [
    "DEFAULT_RULESET",
    "Ruleset",
    "cumulative_lookup",
    "get_ruleset",
    "max_spell_level",
    "RulesCache",
    "RulesDataProvider",
    "StaticRulesProvider",
]
