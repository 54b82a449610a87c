"""Storage module for character persistence.

Provides SQLite-based storage for characters and the store protocol the
advancement session commits through.
"""

from dnd_advancement.storage.database import (
    CharacterDatabase,
    CharacterRecord,
    CharacterStore,
    get_database,
)

__all__ = [
    "CharacterDatabase",
    "CharacterRecord",
    "CharacterStore",
    "get_database",
]
