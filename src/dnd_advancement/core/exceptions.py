"""Custom exception hierarchy for the character advancement engine.

All exceptions inherit from DndAdvancementError and carry a ``details``
mapping with the context of the failure (stage, field, character id...).
Library errors are wrapped with ``raise ... from exc`` at the seams that
call d20, pydantic-settings and sqlite3.

Hierarchy:
    DndAdvancementError
    ├── ConfigurationError
    ├── ValidationError
    ├── AdvancementError
    │   ├── AdvancementValidationError
    │   ├── InvalidAdvancementError
    │   ├── SessionStateError
    │   ├── DataUnavailableError
    │   └── DiceRollError
    └── PersistenceError

Example:
    >>> from dnd_advancement.core.exceptions import AdvancementValidationError
    >>> raise AdvancementValidationError(
    ...     "Stage is incomplete", stage="asi", reasons=["Distribute 1 more point"]
    ... )
"""

from __future__ import annotations

from typing import Any


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Merge keyword context into details, skipping unset values."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class DndAdvancementError(Exception):
    """Base exception for all advancement engine errors.

    Attributes:
        message: Human-readable error description.
        details: Context of the failure, rendered as ``[key=value]``.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{context}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DndAdvancementError):
    """Raised for unreadable settings or an unknown ruleset version."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, config_key=config_key))


class ValidationError(DndAdvancementError):
    """Raised when a value handed to the engine is malformed or not offered.

    Examples are an unparseable content key, a die face outside the hit
    die, or a spell that is not on the class list.

    Args:
        message: Human-readable error description.
        field_name: Name of the offending argument or field.
        invalid_value: The rejected value. Omitted from details when None.
        details: Additional context.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name, invalid_value=invalid_value),
        )


# =============================================================================
# Advancement Domain Exceptions
# =============================================================================


class AdvancementError(DndAdvancementError):
    """Base exception for requirement, stage and session failures."""


class AdvancementValidationError(AdvancementError):
    """Raised when a stage's completion predicate fails.

    Always recoverable: the session stays on the current stage and the
    caller can fix the selection.

    Attributes:
        stage: Identifier of the incomplete stage.
        reasons: Every unmet condition, in display order.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        reasons: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.stage = stage
        self.reasons = list(reasons or [])
        super().__init__(
            message,
            details=_with_context(details, stage=stage, reasons=self.reasons or None),
        )


class InvalidAdvancementError(AdvancementError):
    """Raised when a character cannot start the requested advancement.

    Multi-level jumps, advancing past level 20 and characters without a
    class all end here.
    """

    def __init__(
        self,
        message: str,
        *,
        current_level: int | None = None,
        target_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(
                details, current_level=current_level, target_level=target_level
            ),
        )


class SessionStateError(AdvancementError):
    """Raised for operations the session's status or stage does not allow."""

    def __init__(
        self,
        message: str,
        *,
        current_stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, current_stage=current_stage))


class DataUnavailableError(AdvancementError):
    """Raised when a required stage has no rules content to choose from.

    The stage stays required; the caller may reload content or waive the
    stage.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, stage=stage))


class DiceRollError(AdvancementError):
    """Raised when d20 cannot parse or roll an expression."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, expression=expression))


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceError(DndAdvancementError):
    """Raised when a character store rejects or fails to write an update.

    The advancement session that produced the update stays open so the
    commit can be retried.
    """

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, character_id=character_id))


__all__ = [
    "DndAdvancementError",
    "ConfigurationError",
    "ValidationError",
    "AdvancementError",
    "AdvancementValidationError",
    "InvalidAdvancementError",
    "SessionStateError",
    "DataUnavailableError",
    "DiceRollError",
    "PersistenceError",
]
