"""dnd-advancement - D&D 5E Character Advancement Rules Engine.

Computes what a level gain requires, walks the player through every
decision it imposes and produces one atomic character update.

ARCHITECTURE:
- The engine owns the RULES (hit dice, ASI levels, spells known, feats)
- The caller owns the CHARACTER (storage, rendering, identity)
- Nothing is written until a session is confirmed

Example:
    >>> from dnd_advancement import AdvancementSession, CharacterDatabase, RulesCache
    >>> from dnd_advancement import StaticRulesProvider
    >>>
    >>> db = CharacterDatabase("characters.db")
    >>> snapshot = db.load_snapshot("thorin")
    >>> session = AdvancementSession(snapshot, RulesCache(StaticRulesProvider()))
    >>> session.advance()  # Overview
    >>> session.take_average_hp()
    >>> ...
    >>> update = session.confirm(db)

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for snapshots, feats and updates.
    rules: Versioned rules tables and rules data providers.
    engine: Calculator, prerequisites, stages, session and assembler.
    storage: SQLite character store.
"""

from __future__ import annotations

# Core
from dnd_advancement.core.config import Settings, get_settings
from dnd_advancement.core.exceptions import DndAdvancementError
from dnd_advancement.core.logging import configure_logging, get_logger

# Models
from dnd_advancement.models import (
    AdvancementRequirement,
    AdvancementSelection,
    CharacterSnapshot,
    CharacterUpdate,
    ClassLevel,
    FeatDefinition,
    StageId,
)

# Rules
from dnd_advancement.rules import (
    Ruleset,
    RulesCache,
    RulesDataProvider,
    StaticRulesProvider,
    get_ruleset,
)

# Engine
from dnd_advancement.engine import (
    AdvancementSession,
    check_prerequisites,
    compute_requirement,
    plan_stages,
)

# Storage
from dnd_advancement.storage import CharacterDatabase, CharacterStore


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DndAdvancementError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "AdvancementRequirement",
    "AdvancementSelection",
    "CharacterSnapshot",
    "CharacterUpdate",
    "ClassLevel",
    "FeatDefinition",
    "StageId",
    # Rules
    "Ruleset",
    "RulesCache",
    "RulesDataProvider",
    "StaticRulesProvider",
    "get_ruleset",
    # Engine
    "AdvancementSession",
    "check_prerequisites",
    "compute_requirement",
    "plan_stages",
    # Storage
    "CharacterDatabase",
    "CharacterStore",
]
