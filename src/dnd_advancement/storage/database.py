"""SQLite persistence for characters advanced by the engine.

Provides the reference :class:`CharacterStore` implementation:
- Character snapshots saved and loaded as one row per character
- Atomic application of advancement updates

Older databases lack the ``feats`` and ``class_feature_choices`` columns;
updates against them are narrowed to the legacy fields.

Storage location: ``DND_ADVANCEMENT_STORAGE_DATABASE_PATH`` (default
``data/characters.db``).
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Callable, Generator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from dnd_advancement.core.config import get_settings
from dnd_advancement.core.exceptions import PersistenceError
from dnd_advancement.core.logging import get_logger
from dnd_advancement.models.advancement import LEGACY_UPDATE_FIELDS
from dnd_advancement.models.character import CharacterSnapshot


logger = get_logger(__name__)

T = TypeVar("T")

# Columns holding JSON documents
_JSON_COLUMNS = frozenset(
    {
        "class_levels",
        "ability_scores",
        "spells_known",
        "features",
        "feats",
        "class_feature_choices",
    }
)
_EXTENDED_COLUMNS = ("feats", "class_feature_choices")


@runtime_checkable
class CharacterStore(Protocol):
    """Persistence collaborator receiving advancement updates."""

    def apply_update(self, character_id: str, payload: dict[str, Any]) -> bool:
        """Apply an update payload atomically.

        Returns:
            True if the character was updated.
        """
        ...


def _is_locked(exc: BaseException) -> bool:
    return isinstance(exc, sqlite3.OperationalError) and "database is locked" in str(exc)


def _is_missing_column(exc: sqlite3.OperationalError) -> bool:
    message = str(exc)
    return "no such column" in message or "has no column named" in message


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class CharacterRecord:
    """A stored character row.

    Attributes:
        id: Character identifier.
        name: Display name.
        level: Total character level.
        max_hp: Hit point maximum.
        data: Decoded JSON columns keyed by field name.
        updated_at: When the row was last written.
    """

    id: str
    name: str
    level: int
    max_hp: int
    data: dict[str, Any]
    updated_at: datetime

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> CharacterRecord:
        """Create from database row."""
        columns = row.keys()
        data = {
            column: json.loads(row[column])
            for column in columns
            if column in _JSON_COLUMNS and row[column] is not None
        }
        return cls(
            id=row["id"],
            name=row["name"],
            level=row["level"],
            max_hp=row["max_hp"],
            data=data,
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def to_snapshot(self) -> CharacterSnapshot:
        """Build the engine's read view of this character."""
        return CharacterSnapshot.from_record(
            {
                "id": self.id,
                "name": self.name,
                "level": self.level,
                "max_hp": self.max_hp,
                **self.data,
            }
        )


# =============================================================================
# Database Class
# =============================================================================


class CharacterDatabase:
    """SQLite character store.

    Args:
        db_path: Path to database file. Defaults to the configured path.
        legacy_schema: Create the table without the extended columns, as
            databases written before feats were tracked.
        lock_retry_attempts: Attempts for statements hitting a locked
            database. Defaults to the configured value.
    """

    SCHEMA_VERSION = 2

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        legacy_schema: bool = False,
        lock_retry_attempts: int | None = None,
    ) -> None:
        storage = get_settings().storage
        self.db_path = Path(db_path) if db_path is not None else storage.database_path
        self._lock_retry_attempts = lock_retry_attempts or storage.lock_retry_attempts

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema(legacy_schema)

        logger.info("Character database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self, legacy_schema: bool) -> None:
        extended = ""
        if not legacy_schema:
            extended = "".join(f", {column} TEXT" for column in _EXTENDED_COLUMNS)
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    level INTEGER NOT NULL,
                    max_hp INTEGER NOT NULL,
                    class_levels TEXT NOT NULL,
                    ability_scores TEXT NOT NULL,
                    spells_known TEXT,
                    features TEXT,
                    updated_at TEXT NOT NULL{extended}
                )
            """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (1 if legacy_schema else self.SCHEMA_VERSION,),
            )

    def _run(self, operation: Callable[[], T]) -> T:
        """Run an operation, retrying while the database is locked."""
        retrying = Retrying(
            retry=retry_if_exception(_is_locked),
            stop=stop_after_attempt(self._lock_retry_attempts),
            wait=wait_exponential(multiplier=0.05, max=1),
            reraise=True,
        )
        return retrying(operation)

    def columns(self) -> set[str]:
        """Get the column names of the characters table."""
        with self._get_connection() as conn:
            rows = conn.execute("PRAGMA table_info(characters)").fetchall()
        return {row["name"] for row in rows}

    # =========================================================================
    # Character Operations
    # =========================================================================

    def save_snapshot(self, snapshot: CharacterSnapshot) -> None:
        """Insert or replace a character.

        Extended fields are dropped when the table does not have them.

        Args:
            snapshot: Character to store.

        Raises:
            PersistenceError: If the write fails.
        """
        data = snapshot.model_dump(mode="json")
        available = self.columns()
        values: dict[str, Any] = {
            "id": snapshot.character_id,
            "name": snapshot.name,
            "level": snapshot.level,
            "max_hp": snapshot.max_hp,
            "updated_at": datetime.now().isoformat(),
        }
        for column in _JSON_COLUMNS:
            if column in available:
                values[column] = json.dumps(data[column])

        names = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)

        def write() -> None:
            with self._get_connection() as conn:
                conn.execute(
                    f"INSERT OR REPLACE INTO characters ({names}) VALUES ({placeholders})",
                    tuple(values.values()),
                )

        try:
            self._run(write)
        except sqlite3.Error as exc:
            raise PersistenceError(
                f"Failed to save character: {exc}",
                character_id=snapshot.character_id,
            ) from exc

        logger.info("Character saved", character_id=snapshot.character_id, level=snapshot.level)

    def get_character(self, character_id: str) -> CharacterRecord | None:
        """Get a stored character row.

        Args:
            character_id: Character identifier.

        Returns:
            Character record if found, None otherwise.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM characters WHERE id = ?",
                (character_id,),
            ).fetchone()
        return CharacterRecord.from_row(row) if row else None

    def load_snapshot(self, character_id: str) -> CharacterSnapshot | None:
        """Load a character as a snapshot.

        Args:
            character_id: Character identifier.

        Returns:
            The snapshot, or None if no such character is stored.
        """
        record = self.get_character(character_id)
        return record.to_snapshot() if record else None

    def apply_update(self, character_id: str, payload: dict[str, Any]) -> bool:
        """Apply an advancement update payload in one transaction.

        A table without the extended columns gets the update narrowed to
        the legacy fields, retried once.

        Args:
            character_id: Character identifier.
            payload: Serialized CharacterUpdate.

        Returns:
            True if the character was updated, False if it does not exist.

        Raises:
            PersistenceError: If the write fails.
        """
        try:
            return self._update(character_id, payload)
        except sqlite3.Error as exc:
            if not (isinstance(exc, sqlite3.OperationalError) and _is_missing_column(exc)):
                raise PersistenceError(
                    f"Failed to apply update: {exc}",
                    character_id=character_id,
                ) from exc
            dropped = sorted(set(payload) - LEGACY_UPDATE_FIELDS)
            logger.warning(
                "Character table lacks extended columns, retrying with legacy fields",
                character_id=character_id,
                dropped=dropped,
            )

        legacy = {k: v for k, v in payload.items() if k in LEGACY_UPDATE_FIELDS}
        try:
            return self._update(character_id, legacy)
        except sqlite3.Error as exc:
            raise PersistenceError(
                f"Failed to apply update: {exc}",
                character_id=character_id,
            ) from exc

    def _update(self, character_id: str, payload: dict[str, Any]) -> bool:
        # Only known column names reach the SQL text; extended fields are kept
        # so a legacy table fails with a missing column and gets narrowed.
        allowed = self.columns() | set(_EXTENDED_COLUMNS)
        unknown = sorted(set(payload) - allowed)
        if unknown:
            logger.warning(
                "Ignoring unknown update fields",
                character_id=character_id,
                fields=unknown,
            )
        values = {
            field: json.dumps(value) if field in _JSON_COLUMNS else value
            for field, value in payload.items()
            if field in allowed and field not in ("id", "updated_at")
        }
        values["updated_at"] = datetime.now().isoformat()
        assignments = ", ".join(f"{field} = ?" for field in values)

        def write() -> bool:
            with self._get_connection() as conn:
                cursor = conn.execute(
                    f"UPDATE characters SET {assignments} WHERE id = ?",
                    (*values.values(), character_id),
                )
                return cursor.rowcount > 0

        updated = self._run(write)
        if updated:
            logger.info("Character updated", character_id=character_id, fields=sorted(payload))
        else:
            logger.warning("Character not found for update", character_id=character_id)
        return updated

    def delete_character(self, character_id: str) -> bool:
        """Delete a character.

        Args:
            character_id: ID of character to delete.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM characters WHERE id = ?", (character_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Character deleted", character_id=character_id)

        return deleted

    def has_extended_columns(self) -> bool:
        """Check whether feats and feature choices can be stored."""
        return set(_EXTENDED_COLUMNS) <= self.columns()


# =============================================================================
# Singleton Instance
# =============================================================================


_database_instance: CharacterDatabase | None = None


def get_database() -> CharacterDatabase:
    """Get the global database instance.

    Returns:
        CharacterDatabase singleton at the configured path.
    """
    global _database_instance

    if _database_instance is None:
        _database_instance = CharacterDatabase()

    return _database_instance


__all__ = [
    "CharacterDatabase",
    "CharacterRecord",
    "CharacterStore",
    "get_database",
]
