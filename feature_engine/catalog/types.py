"""Feature records: the immutable unit of the catalog.

A Feature is a named, optionally removable/installable piece of generated
project code with declared dependencies and conflicts.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeatureCategory(str, Enum):
    """Feature categories, ordered by removal weight (heaviest first)."""

    framework = "framework"
    library = "library"
    tool = "tool"
    other = "other"


class Feature(BaseModel):
    """A single catalog feature. Never mutated once constructed."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: FeatureCategory = FeatureCategory.other
    removable: bool = True
    dependencies: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    dev_dependencies: list[str] = Field(default_factory=list)
    description: str = ""
    version: str = ""
    size_hint: int | None = Field(default=None, ge=0)

    @field_validator("id")
    @classmethod
    def id_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("id must not be empty")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def coerce_unknown_category(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in FeatureCategory.__members__:
                return FeatureCategory.other
        return v

    @field_validator("dependencies", "conflicts", "dev_dependencies", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        return [] if v is None else v

    def depends_on(self, feature_id: str) -> bool:
        return feature_id in self.dependencies

    def conflicts_with(self, feature_id: str) -> bool:
        return feature_id in self.conflicts
