"""Structured logging for the advancement engine.

Every module logs through structlog with keyword-structured events. Log
output is configured once from :class:`~dnd_advancement.core.config.Settings`
(``log_level``, ``json_logs``); explicit arguments override the settings.

Domain values (stages, abilities, content keys, tuples of either) are
rendered as plain strings and lists, so JSON logs stay readable by any
consumer.

Example:
    >>> from dnd_advancement.core.logging import configure_logging, get_logger
    >>> configure_logging(json_format=True)
    >>> logger = get_logger(__name__)
    >>> with character_context("thorin", target_level=2):
    ...     logger.info("Stage advanced", stage=StageId.HP, index=2)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from dnd_advancement.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


_STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class AdvancementContext:
    """Processor stamping each event with the app and active ruleset.

    Args:
        app_name: Value of the ``app`` field.
        ruleset_version: Value of the ``ruleset`` field.
    """

    def __init__(self, app_name: str, ruleset_version: str) -> None:
        self.app_name = app_name
        self.ruleset_version = ruleset_version

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        event_dict.setdefault("ruleset", self.ruleset_version)
        return event_dict


def render_domain_values(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Render enums and collections of them as plain values.

    ``StageId.HP`` becomes ``"hp"`` and ``(Ability.STR, Ability.CON)``
    becomes ``["str", "con"]``. Sets are sorted so output is stable.
    """
    for key, value in event_dict.items():
        event_dict[key] = _plain(value)
    return event_dict


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(_plain(k)): _plain(v) for k, v in value.items()}
    return value


def configure_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Application settings. Defaults to the loaded settings.
        level: Logging level name; overrides ``settings.log_level``.
        json_format: JSON output; overrides ``settings.json_logs``.
        log_file: Optional file that also receives standard library logs.
    """
    settings = settings or get_settings()
    level_name = (level or settings.log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    if json_format is None:
        json_format = settings.json_logs

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        AdvancementContext(settings.app_name, settings.advancement.ruleset_version),
        render_domain_values,
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Processor
    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.debug)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        format=_STDLIB_FORMAT,
        level=numeric_level,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind variables included in every following event of this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context(keys: Iterable[str] | None = None) -> None:
    """Clear bound variables.

    Args:
        keys: Variables to unbind. Clears everything when omitted.
    """
    if keys is None:
        structlog.contextvars.clear_contextvars()
    else:
        structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def character_context(character_id: str, **extra: Any) -> Generator[None, None, None]:
    """Bind a character id (and extra fields) for the duration of a block.

    Previously bound values for the same keys are restored on exit.
    """
    with structlog.contextvars.bound_contextvars(character_id=character_id, **extra):
        yield


__all__ = [
    "AdvancementContext",
    "bind_context",
    "character_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "render_domain_values",
]
