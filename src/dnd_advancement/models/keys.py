"""Canonical content keys for classes, subclasses, feats and spells.

Rules content is identified by composite ``"name|SOURCE"`` keys
(``"fighter|XPHB"``, ``"great-weapon-master|XPHB"``). Every component that
needs to identify content parses keys through :func:`parse_key` so that
``"Fighter"``, ``"fighter|xphb"`` and ``"fighter|XPHB"`` all resolve to the
same :class:`ContentKey`.

Example:
    >>> parse_key("Great Weapon Master|xphb")
    ContentKey(id='great-weapon-master', source='XPHB')
    >>> build_key("Great Weapon Master", "XPHB")
    'great-weapon-master|XPHB'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from dnd_advancement.core.constants import DEFAULT_CONTENT_SOURCE, KEY_SEPARATOR
from dnd_advancement.core.exceptions import ValidationError


_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_APOSTROPHES = re.compile(r"['’]")


@dataclass(frozen=True, order=True)
class ContentKey:
    """A parsed content key.

    Attributes:
        id: Slugged content name (lowercase, dash separated).
        source: Upper-cased source abbreviation.
    """

    id: str
    source: str

    def __str__(self) -> str:
        return f"{self.id}{KEY_SEPARATOR}{self.source}"

    @property
    def display_name(self) -> str:
        """Get a title-cased name rebuilt from the slug.

        Returns:
            Display name (e.g., 'Great Weapon Master').
        """
        return " ".join(word.capitalize() for word in self.id.split("-") if word)

    def matches(self, other: ContentKey | str) -> bool:
        """Check whether two keys name the same content, ignoring source.

        Args:
            other: Another key or raw key string.

        Returns:
            True if both keys have the same id.
        """
        if isinstance(other, str):
            other = parse_key(other)
        return self.id == other.id


def slugify(name: str) -> str:
    """Turn a content name into its key slug.

    Args:
        name: Content name (e.g., "Great Weapon Master").

    Returns:
        Lowercase slug with runs of other characters collapsed to '-'.
        Apostrophes are dropped ("Devil's Sight" -> "devils-sight").
    """
    return _NON_ALNUM.sub("-", _APOSTROPHES.sub("", name.lower())).strip("-")


def normalize_choice_key(feature_name: str) -> str:
    """Normalize a feature name into a feature-choice map key.

    Args:
        feature_name: Feature name (e.g., "Combat Superiority: Maneuvers").

    Returns:
        Lowercase key with runs of other characters collapsed to '_'.
    """
    return _NON_ALNUM.sub("_", feature_name.lower()).strip("_")


def parse_key(key: str, *, default_source: str = DEFAULT_CONTENT_SOURCE) -> ContentKey:
    """Parse a composite content key into a typed pair.

    Args:
        key: Raw key, with or without a ``|SOURCE`` suffix.
        default_source: Source used when the key has none.

    Returns:
        The parsed ContentKey.

    Raises:
        ValidationError: If the key has no name part.
    """
    name, _, source = key.partition(KEY_SEPARATOR)
    slug = slugify(name)
    if not slug:
        raise ValidationError(
            "Content key has no name",
            field_name="key",
            invalid_value=key,
        )
    return ContentKey(id=slug, source=(source.strip() or default_source).upper())


def build_key(name: str, source: str = DEFAULT_CONTENT_SOURCE) -> str:
    """Build a composite key string from a name and source.

    Args:
        name: Content name.
        source: Source abbreviation.

    Returns:
        Key string (e.g., 'fighter|XPHB').
    """
    return str(ContentKey(id=slugify(name), source=source.upper()))


def content_id(key: str) -> str:
    """Get the slug id of a key, dropping its source.

    Args:
        key: Raw key string.

    Returns:
        The slug id (e.g., 'fighter' for 'Fighter|XPHB').
    """
    return parse_key(key).id


__all__ = [
    "ContentKey",
    "slugify",
    "normalize_choice_key",
    "parse_key",
    "build_key",
    "content_id",
]
