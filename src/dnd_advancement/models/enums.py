"""Enumeration types for the advancement engine.

This module defines the enumeration types used throughout the engine:
ability scores, hit point methods, ASI modes, advancement stages and
feature choice kinds.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """D&D 5E ability scores.

    The six core abilities that define a character's physical
    and mental characteristics.
    """

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name

    @classmethod
    def from_abbreviation(cls, abbreviation: str) -> Ability | None:
        """Resolve a rules-data abbreviation such as ``"cha"``.

        Full names ("charisma") are accepted as well.

        Args:
            abbreviation: Abbreviation or full name, any case.

        Returns:
            The matching Ability, or None if unknown.
        """
        token = abbreviation.strip().lower()
        for ability in cls:
            if token in (ability.name.lower(), ability.value):
                return ability
        return None


class HpMethod(StrEnum):
    """How hit points are gained on level up."""

    ROLL = "roll"
    AVERAGE = "average"


class AsiMode(StrEnum):
    """What an ability score improvement level is spent on."""

    ABILITY = "ability"
    FEAT = "feat"


class ChoiceKind(StrEnum):
    """Whether a feature choice takes one option or several."""

    SINGLE = "single"
    MULTIPLE = "multiple"


class FeatCategory(StrEnum):
    """Feat categories as used by the 2024 rules data."""

    GENERAL = "G"
    ORIGIN = "O"
    FIGHTING_STYLE = "FS"
    EPIC_BOON = "EB"

    @property
    def label(self) -> str:
        """Get the display label for the category.

        Returns:
            Human-readable category name.
        """
        return {
            FeatCategory.GENERAL: "General",
            FeatCategory.ORIGIN: "Origin",
            FeatCategory.FIGHTING_STYLE: "Fighting Style",
            FeatCategory.EPIC_BOON: "Epic Boon",
        }[self]


class StageId(StrEnum):
    """Stages of an advancement session, in canonical order."""

    OVERVIEW = "overview"
    FEATURES = "features"
    SUBCLASS = "subclass"
    FEATURE_CHOICES = "feature_choices"
    HP = "hp"
    ASI = "asi"
    SPELLS = "spells"
    CONFIRM = "confirm"

    @property
    def label(self) -> str:
        """Get the short display label for the stage.

        Returns:
            Stage label (e.g., 'Choices' for FEATURE_CHOICES).
        """
        return {
            StageId.OVERVIEW: "Overview",
            StageId.FEATURES: "Features",
            StageId.SUBCLASS: "Subclass",
            StageId.FEATURE_CHOICES: "Choices",
            StageId.HP: "HP",
            StageId.ASI: "ASI",
            StageId.SPELLS: "Spells",
            StageId.CONFIRM: "Confirm",
        }[self]


class SessionStatus(StrEnum):
    """Lifecycle state of an advancement session."""

    OPEN = "open"
    CANCELLED = "cancelled"
    COMMITTED = "committed"


__all__ = [
    "Ability",
    "HpMethod",
    "AsiMode",
    "ChoiceKind",
    "FeatCategory",
    "StageId",
    "SessionStatus",
]
