"""Tests for the SQLite character store."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

import pytest

from dnd_advancement.core.exceptions import PersistenceError
from dnd_advancement.models.character import CharacterSnapshot
from dnd_advancement.storage import database as database_module
from dnd_advancement.storage.database import (
    CharacterDatabase,
    CharacterStore,
    get_database,
)


class TestSchema:
    """Tests for schema creation."""

    def test_extended_columns(self, temp_database: CharacterDatabase) -> None:
        """Test a new database stores feats and feature choices."""
        assert temp_database.db_path.exists()
        assert temp_database.has_extended_columns()
        assert {"feats", "class_feature_choices"} <= temp_database.columns()

    def test_legacy_columns(self, legacy_database: CharacterDatabase) -> None:
        """Test a legacy table lacks the extended columns."""
        assert not legacy_database.has_extended_columns()
        assert "feats" not in legacy_database.columns()

    def test_reopen_keeps_data(
        self,
        temp_database: CharacterDatabase,
        fighter_snapshot: CharacterSnapshot,
    ) -> None:
        """Test opening an existing file leaves rows in place."""
        temp_database.save_snapshot(fighter_snapshot)

        reopened = CharacterDatabase(temp_database.db_path)

        assert reopened.load_snapshot("thorin") == fighter_snapshot

    def test_satisfies_store_protocol(self, temp_database: CharacterDatabase) -> None:
        """Test the database is a character store."""
        assert isinstance(temp_database, CharacterStore)


class TestSnapshots:
    """Tests for saving and loading snapshots."""

    def test_round_trip(
        self,
        temp_database: CharacterDatabase,
        wizard_snapshot: CharacterSnapshot,
    ) -> None:
        """Test a stored snapshot loads back unchanged."""
        temp_database.save_snapshot(wizard_snapshot)

        loaded = temp_database.load_snapshot("elminster")

        assert loaded is not None
        assert loaded.spells_known == wizard_snapshot.spells_known
        assert loaded.class_levels == wizard_snapshot.class_levels
        assert loaded.ability_scores == wizard_snapshot.ability_scores

    def test_record_fields(
        self,
        temp_database: CharacterDatabase,
        fighter_snapshot: CharacterSnapshot,
    ) -> None:
        """Test the raw record exposes columns and decoded JSON."""
        temp_database.save_snapshot(fighter_snapshot)

        record = temp_database.get_character("thorin")

        assert record is not None
        assert (record.name, record.level, record.max_hp) == ("Thorin", 1, 12)
        assert record.data["class_levels"][0]["class_id"] == "fighter|XPHB"
        assert record.data["feats"] == []

    def test_missing(self, temp_database: CharacterDatabase) -> None:
        """Test unknown ids load as None."""
        assert temp_database.get_character("nobody") is None
        assert temp_database.load_snapshot("nobody") is None

    def test_legacy_drops_extended_fields(
        self,
        legacy_database: CharacterDatabase,
        snapshot_factory: Any,
    ) -> None:
        """Test a legacy table stores everything it has columns for."""
        snapshot = snapshot_factory(
            "fighter", 4, feats=("alert|XPHB",), class_feature_choices={"fighting_style": "defense"}
        )
        legacy_database.save_snapshot(snapshot)

        loaded = legacy_database.load_snapshot(snapshot.character_id)

        assert loaded is not None
        assert loaded.level == 4
        assert loaded.feats == ()
        assert loaded.class_feature_choices == {}

    def test_delete(
        self,
        temp_database: CharacterDatabase,
        fighter_snapshot: CharacterSnapshot,
    ) -> None:
        """Test deleting a character."""
        temp_database.save_snapshot(fighter_snapshot)

        assert temp_database.delete_character("thorin") is True
        assert temp_database.delete_character("thorin") is False
        assert temp_database.load_snapshot("thorin") is None


class TestApplyUpdate:
    """Tests for applying advancement payloads."""

    def test_update(
        self,
        temp_database: CharacterDatabase,
        fighter_level3_snapshot: CharacterSnapshot,
    ) -> None:
        """Test every payload field is written."""
        temp_database.save_snapshot(fighter_level3_snapshot)
        payload = {
            "level": 4,
            "class_levels": [
                {"class_id": "fighter|XPHB", "level": 4, "subclass_id": "champion|XPHB"}
            ],
            "max_hp": 36,
            "feats": ["great-weapon-master|XPHB"],
            "ability_scores": {
                "strength": 18,
                "dexterity": 13,
                "constitution": 14,
                "intelligence": 10,
                "wisdom": 10,
                "charisma": 10,
            },
        }

        assert temp_database.apply_update("brienne", payload) is True

        loaded = temp_database.load_snapshot("brienne")
        assert loaded is not None
        assert loaded.level == 4
        assert loaded.max_hp == 36
        assert loaded.feats == ("great-weapon-master|XPHB",)
        assert loaded.ability_scores.strength == 18
        assert loaded.features == fighter_level3_snapshot.features

    def test_unknown_character(self, temp_database: CharacterDatabase) -> None:
        """Test updating a missing character reports False."""
        assert temp_database.apply_update("nobody", {"max_hp": 10}) is False

    def test_legacy_fallback(
        self,
        legacy_database: CharacterDatabase,
        fighter_level3_snapshot: CharacterSnapshot,
    ) -> None:
        """Test extended fields are dropped for a legacy table."""
        legacy_database.save_snapshot(fighter_level3_snapshot)
        payload = {
            "level": 4,
            "class_levels": [
                {"class_id": "fighter|XPHB", "level": 4, "subclass_id": "champion|XPHB"}
            ],
            "max_hp": 36,
            "feats": ["great-weapon-master|XPHB"],
            "class_feature_choices": {"fighting_style": "defense"},
        }

        assert legacy_database.apply_update("brienne", payload) is True

        loaded = legacy_database.load_snapshot("brienne")
        assert loaded is not None
        assert loaded.level == 4
        assert loaded.max_hp == 36
        assert loaded.feats == ()

    def test_unknown_field_dropped(
        self,
        temp_database: CharacterDatabase,
        fighter_snapshot: CharacterSnapshot,
    ) -> None:
        """Test fields without a column are dropped from the update."""
        temp_database.save_snapshot(fighter_snapshot)

        assert temp_database.apply_update("thorin", {"max_hp": 20, "experience": 300}) is True

        loaded = temp_database.load_snapshot("thorin")
        assert loaded is not None
        assert loaded.max_hp == 20

    def test_crafted_field_name_not_executed(
        self,
        temp_database: CharacterDatabase,
        fighter_snapshot: CharacterSnapshot,
    ) -> None:
        """Test payload keys that are not column names never reach the SQL."""
        temp_database.save_snapshot(fighter_snapshot)
        payload = {"max_hp": 20, "name = 'Mallory', level": 99}

        assert temp_database.apply_update("thorin", payload) is True

        loaded = temp_database.load_snapshot("thorin")
        assert loaded is not None
        assert loaded.max_hp == 20
        assert loaded.name == fighter_snapshot.name
        assert loaded.level == fighter_snapshot.level

    def test_write_failure(
        self,
        temp_database: CharacterDatabase,
        fighter_snapshot: CharacterSnapshot,
    ) -> None:
        """Test database errors become persistence errors."""
        temp_database.save_snapshot(fighter_snapshot)
        conn = sqlite3.connect(temp_database.db_path)
        conn.execute("DROP TABLE characters")
        conn.close()

        with pytest.raises(PersistenceError) as exc_info:
            temp_database.apply_update("thorin", {"max_hp": 20})

        assert exc_info.value.details["character_id"] == "thorin"
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)


class TestLockRetry:
    """Tests for retrying statements on a locked database."""

    def test_retries_while_locked(self, tmp_path: Path) -> None:
        """Test locked operations are retried until they succeed."""
        db = CharacterDatabase(tmp_path / "retry.db", lock_retry_attempts=3)
        calls: list[int] = []

        def operation() -> str:
            calls.append(1)
            if len(calls) < 3:
                raise sqlite3.OperationalError("database is locked")
            return "done"

        assert db._run(operation) == "done"
        assert len(calls) == 3

    def test_gives_up(self, tmp_path: Path) -> None:
        """Test the lock error surfaces after the last attempt."""
        db = CharacterDatabase(tmp_path / "retry.db", lock_retry_attempts=2)
        calls: list[int] = []

        def operation() -> None:
            calls.append(1)
            raise sqlite3.OperationalError("database is locked")

        with pytest.raises(sqlite3.OperationalError):
            db._run(operation)
        assert len(calls) == 2

    def test_other_errors_not_retried(self, tmp_path: Path) -> None:
        """Test only lock errors are retried."""
        db = CharacterDatabase(tmp_path / "retry.db")
        calls: list[int] = []

        def operation() -> None:
            calls.append(1)
            raise sqlite3.OperationalError("no such table: nowhere")

        with pytest.raises(sqlite3.OperationalError):
            db._run(operation)
        assert len(calls) == 1


class TestGetDatabase:
    """Tests for the global database instance."""

    def test_singleton_at_configured_path(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the global instance uses the configured path once."""
        path = tmp_path / "configured" / "characters.db"
        monkeypatch.setenv("DND_ADVANCEMENT_STORAGE_DATABASE_PATH", str(path))
        monkeypatch.setattr(database_module, "_database_instance", None)

        first = get_database()
        second = get_database()

        assert first is second
        assert first.db_path == path
        assert path.exists()
