"""Tests for structured logging configuration."""

from __future__ import annotations

import json
from collections.abc import Generator
from typing import Any

import pytest
import structlog

from dnd_advancement.core.config import Settings
from dnd_advancement.core.logging import (
    AdvancementContext,
    bind_context,
    character_context,
    clear_context,
    configure_logging,
    get_logger,
    render_domain_values,
)
from dnd_advancement.models.enums import Ability, StageId


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults after each test."""
    yield
    clear_context()
    structlog.reset_defaults()


def last_record(capsys: pytest.CaptureFixture[str]) -> dict[str, Any]:
    """Decode the last JSON line written to stdout."""
    return json.loads(capsys.readouterr().out.strip().splitlines()[-1])


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON logs carry the event, level, app and ruleset."""
        configure_logging(Settings(), level="INFO", json_format=True)

        get_logger("test").info("Stage advanced", stage=StageId.HP)

        record = last_record(capsys)
        assert record["event"] == "Stage advanced"
        assert record["stage"] == "hp"
        assert record["level"] == "info"
        assert record["app"] == "D&D Character Advancement"
        assert record["ruleset"] == "5e-2024"

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events below the configured level are dropped."""
        configure_logging(Settings(), level="WARNING", json_format=True)

        get_logger("test").info("Hidden")

        assert "Hidden" not in capsys.readouterr().out

    def test_settings_drive_defaults(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test level and format come from settings when not given."""
        configure_logging(Settings(log_level="ERROR", json_logs=True))
        logger = get_logger("test")

        logger.warning("Hidden")
        logger.error("Commit failed", character_id="thorin")

        output = capsys.readouterr().out
        assert "Hidden" not in output
        assert json.loads(output.strip().splitlines()[-1])["character_id"] == "thorin"


class TestDomainValues:
    """Tests for rendering domain values."""

    def test_enums_and_collections(self) -> None:
        """Test enums inside collections become plain values."""
        event = {
            "stage": StageId.ASI,
            "boosts": {Ability.STR: 1},
            "abilities": (Ability.STR, Ability.CON),
            "waived": frozenset({StageId.SPELLS, StageId.SUBCLASS}),
            "hp_gain": 8,
        }

        rendered = render_domain_values(None, "info", event)

        assert rendered == {
            "stage": "asi",
            "boosts": {"strength": 1},
            "abilities": ["strength", "constitution"],
            "waived": ["spells", "subclass"],
            "hp_gain": 8,
        }

    def test_context_does_not_override(self) -> None:
        """Test explicit app fields on an event are kept."""
        processor = AdvancementContext("dnd", "5e-2014")

        event = processor(None, "info", {"event": "x", "ruleset": "custom"})

        assert event["app"] == "dnd"
        assert event["ruleset"] == "custom"


class TestContext:
    """Tests for bound logging context."""

    def test_bound_context_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test bound variables appear on subsequent events."""
        configure_logging(Settings(), json_format=True)
        bind_context(character_id="thorin")

        get_logger("test").info("Session started")

        assert last_record(capsys)["character_id"] == "thorin"

    def test_clear_selected_keys(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test only the named variables are unbound."""
        configure_logging(Settings(), json_format=True)
        bind_context(character_id="thorin", target_level=2)
        clear_context(["target_level"])

        get_logger("test").info("Session started")

        record = last_record(capsys)
        assert record["character_id"] == "thorin"
        assert "target_level" not in record

    def test_character_context_restores(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the character context only applies inside the block."""
        configure_logging(Settings(), json_format=True)
        logger = get_logger("test")

        with character_context("sorcha", target_level=2):
            logger.info("Inside")
            inside = last_record(capsys)
        logger.info("Outside")
        outside = last_record(capsys)

        assert inside["character_id"] == "sorcha"
        assert inside["target_level"] == 2
        assert "character_id" not in outside
