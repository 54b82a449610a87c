"""Read-only rules content returned by a rules data provider."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dnd_advancement.models.enums import ChoiceKind
from dnd_advancement.models.keys import build_key, normalize_choice_key


class ClassFeatureInfo(BaseModel):
    """A class feature gained at a given class level."""

    model_config = ConfigDict(frozen=True)

    name: str
    level: int = Field(ge=1, le=20)
    description: str = Field(default="")


class SubclassInfo(BaseModel):
    """A subclass option for a class."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Subclass key (e.g., 'champion|XPHB')")
    name: str
    source: str

    @classmethod
    def create(cls, name: str, source: str) -> SubclassInfo:
        return cls(id=build_key(name, source), name=name, source=source)


class SpellInfo(BaseModel):
    """A spell on a class spell list. Level 0 is a cantrip."""

    model_config = ConfigDict(frozen=True)

    name: str
    level: int = Field(ge=0, le=9)

    @property
    def is_cantrip(self) -> bool:
        return self.level == 0


class FeatureChoiceOption(BaseModel):
    """One option of a feature choice."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str = Field(default="")


class FeatureChoice(BaseModel):
    """A decision imposed by a class feature, such as picking a fighting style.

    Attributes:
        feature_name: Name of the feature imposing the choice.
        level: Class level at which the choice becomes available.
        kind: Whether one option or several are chosen.
        count: How many options a multiple choice takes.
        options: Available options.
    """

    model_config = ConfigDict(frozen=True)

    feature_name: str
    level: int = Field(ge=1, le=20)
    kind: ChoiceKind = Field(default=ChoiceKind.SINGLE)
    count: int | None = Field(default=None, ge=1)
    options: tuple[FeatureChoiceOption, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_count(self) -> FeatureChoice:
        """Ensure single choices carry no count."""
        if self.kind is ChoiceKind.SINGLE and self.count not in (None, 1):
            msg = f"Single choice '{self.feature_name}' cannot take {self.count} options"
            raise ValueError(msg)
        return self

    @property
    def choice_key(self) -> str:
        """Normalized key used in the character's feature-choice map."""
        return normalize_choice_key(self.feature_name)

    @property
    def required_count(self) -> int:
        """Number of options that complete this choice."""
        if self.kind is ChoiceKind.MULTIPLE:
            return self.count or 1
        return 1

    def option(self, key: str) -> FeatureChoiceOption | None:
        """Find an option by key."""
        return next((opt for opt in self.options if opt.key == key), None)


__all__ = [
    "ClassFeatureInfo",
    "SubclassInfo",
    "SpellInfo",
    "FeatureChoiceOption",
    "FeatureChoice",
]
