"""Rules data provider protocol and implementations.

The advancement engine reads rules content (class features, subclasses,
spells, feats, feature choices) through a :class:`RulesDataProvider`. A
provider may raise or return empty results; the engine degrades and
reports a warning instead of failing.

Providers:
    StaticRulesProvider: In-memory provider over the bundled reference data.
    RulesCache: Explicit memo wrapped around any provider.

Example:
    >>> provider = RulesCache(StaticRulesProvider())
    >>> [s.name for s in provider.subclasses_of("fighter|XPHB")][:2]
    ['Battle Master', 'Champion']
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from dnd_advancement.core.logging import get_logger
from dnd_advancement.models.content import (
    ClassFeatureInfo,
    FeatureChoice,
    SpellInfo,
    SubclassInfo,
)
from dnd_advancement.models.feats import FeatDefinition
from dnd_advancement.models.keys import content_id
from dnd_advancement.rules.class_features import (
    CLASS_FEATURES,
    FEATURE_DESCRIPTIONS,
    SUBCLASSES,
)
from dnd_advancement.rules.feat_catalog import RAW_FEATS
from dnd_advancement.rules.feature_choices import (
    CLASS_FEATURE_CHOICES,
    SUBCLASS_FEATURE_CHOICES,
)
from dnd_advancement.rules.spell_lists import spells_for_class


logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RulesDataProvider(Protocol):
    """Read-only source of rules content.

    Class and subclass arguments are content keys in any accepted form
    (``"fighter"``, ``"Fighter|XPHB"``).
    """

    def class_features_at(self, class_id: str, level: int) -> list[ClassFeatureInfo]:
        """Get class features gained at or below ``level``."""
        ...

    def subclasses_of(self, class_id: str) -> list[SubclassInfo]:
        """Get the subclasses of a class."""
        ...

    def spells_of(self, class_id: str) -> list[SpellInfo]:
        """Get the full spell list of a class, cantrips included."""
        ...

    def all_feats(self) -> list[FeatDefinition]:
        """Get every feat."""
        ...

    def feature_choices_at(
        self,
        class_id: str,
        level: int,
        subclass_id: str | None = None,
    ) -> list[FeatureChoice]:
        """Get feature choices that become available at exactly ``level``."""
        ...


class StaticRulesProvider:
    """In-memory rules provider over the bundled reference data.

    Every table can be overridden, which keeps tests independent from the
    bundled content.

    Args:
        class_features: Feature names by class id and level.
        subclasses: ``(name, source)`` pairs by class id.
        spells: Spell lists by class id.
        feats: Feats as raw rules-data dicts or parsed definitions.
        class_feature_choices: Feature choices by class id.
        subclass_feature_choices: Feature choices by subclass id.
    """

    def __init__(
        self,
        *,
        class_features: Mapping[str, Mapping[int, Sequence[str]]] | None = None,
        subclasses: Mapping[str, Sequence[tuple[str, str]]] | None = None,
        spells: Mapping[str, Sequence[SpellInfo]] | None = None,
        feats: Sequence[dict[str, Any] | FeatDefinition] | None = None,
        class_feature_choices: Mapping[str, Sequence[FeatureChoice]] | None = None,
        subclass_feature_choices: Mapping[str, Sequence[FeatureChoice]] | None = None,
    ) -> None:
        self._class_features = CLASS_FEATURES if class_features is None else class_features
        self._subclasses = SUBCLASSES if subclasses is None else subclasses
        self._spells = spells
        self._raw_feats = RAW_FEATS if feats is None else feats
        self._class_choices = (
            CLASS_FEATURE_CHOICES if class_feature_choices is None else class_feature_choices
        )
        self._subclass_choices = (
            SUBCLASS_FEATURE_CHOICES
            if subclass_feature_choices is None
            else subclass_feature_choices
        )

    def class_features_at(self, class_id: str, level: int) -> list[ClassFeatureInfo]:
        by_level = self._class_features.get(content_id(class_id), {})
        return [
            ClassFeatureInfo(
                name=name,
                level=feature_level,
                description=FEATURE_DESCRIPTIONS.get(name, ""),
            )
            for feature_level, names in sorted(by_level.items())
            if feature_level <= level
            for name in names
        ]

    def subclasses_of(self, class_id: str) -> list[SubclassInfo]:
        entries = self._subclasses.get(content_id(class_id), ())
        return sorted(
            (SubclassInfo.create(name, source) for name, source in entries),
            key=lambda info: info.name,
        )

    def spells_of(self, class_id: str) -> list[SpellInfo]:
        cid = content_id(class_id)
        if self._spells is None:
            return list(spells_for_class(cid))
        return list(self._spells.get(cid, ()))

    def all_feats(self) -> list[FeatDefinition]:
        return [
            feat if isinstance(feat, FeatDefinition) else FeatDefinition.from_raw(feat)
            for feat in self._raw_feats
        ]

    def feature_choices_at(
        self,
        class_id: str,
        level: int,
        subclass_id: str | None = None,
    ) -> list[FeatureChoice]:
        choices = [
            choice
            for choice in self._class_choices.get(content_id(class_id), ())
            if choice.level == level
        ]
        if subclass_id:
            choices.extend(
                choice
                for choice in self._subclass_choices.get(content_id(subclass_id), ())
                if choice.level == level
            )
        return choices


class RulesCache:
    """Explicit memo over a rules data provider.

    Scoped by the caller: create one per session or one per process and
    pass it wherever a provider is expected. Failed lookups are not cached,
    so a later call retries the provider.

    Args:
        provider: The provider to memoize.
    """

    def __init__(self, provider: RulesDataProvider) -> None:
        self._provider = provider
        self._entries: dict[tuple[Any, ...], Any] = {}
        self.hits = 0
        self.misses = 0

    @property
    def provider(self) -> RulesDataProvider:
        return self._provider

    def _cached(self, key: tuple[Any, ...], load: Callable[[], Iterable[T]]) -> list[T]:
        if key in self._entries:
            self.hits += 1
            return list(self._entries[key])
        self.misses += 1
        value = tuple(load())
        self._entries[key] = value
        logger.debug("Rules content cached", lookup=key[0], entries=len(value))
        return list(value)

    def class_features_at(self, class_id: str, level: int) -> list[ClassFeatureInfo]:
        key = ("class_features", content_id(class_id), level)
        return self._cached(key, lambda: self._provider.class_features_at(class_id, level))

    def subclasses_of(self, class_id: str) -> list[SubclassInfo]:
        key = ("subclasses", content_id(class_id))
        return self._cached(key, lambda: self._provider.subclasses_of(class_id))

    def spells_of(self, class_id: str) -> list[SpellInfo]:
        key = ("spells", content_id(class_id))
        return self._cached(key, lambda: self._provider.spells_of(class_id))

    def all_feats(self) -> list[FeatDefinition]:
        return self._cached(("feats",), self._provider.all_feats)

    def feature_choices_at(
        self,
        class_id: str,
        level: int,
        subclass_id: str | None = None,
    ) -> list[FeatureChoice]:
        key = (
            "feature_choices",
            content_id(class_id),
            level,
            content_id(subclass_id) if subclass_id else None,
        )
        return self._cached(
            key,
            lambda: self._provider.feature_choices_at(class_id, level, subclass_id),
        )

    def clear(self) -> None:
        """Drop every cached entry."""
        logger.debug("Rules cache cleared", entries=len(self._entries))
        self._entries.clear()
        self.hits = 0
        self.misses = 0


__all__ = [
    "RulesDataProvider",
    "StaticRulesProvider",
    "RulesCache",
]
