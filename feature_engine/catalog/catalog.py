"""FeatureCatalog: the closed, read-only snapshot every component queries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from feature_engine.catalog.types import Feature
from feature_engine.errors import CatalogError


class FeatureCatalog:
    """Immutable ordered collection of Features with id lookup.

    Catalog order is preserved and drives every deterministic traversal
    (node creation, rendering, suggestion order).
    """

    __slots__ = ("_features", "_by_id")

    def __init__(self, features: Iterable[Feature]) -> None:
        ordered = tuple(features)
        by_id: dict[str, Feature] = {}
        for feature in ordered:
            if feature.id in by_id:
                raise CatalogError(f"Duplicate feature id in catalog: {feature.id}")
            by_id[feature.id] = feature
        self._features = ordered
        self._by_id = by_id

    @classmethod
    def coerce(cls, features: FeatureCatalog | Iterable[Feature]) -> FeatureCatalog:
        """Return features unchanged if already a catalog, else wrap them."""
        if isinstance(features, FeatureCatalog):
            return features
        return cls(features)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._by_id

    def __getitem__(self, feature_id: str) -> Feature:
        return self._by_id[feature_id]

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def __repr__(self) -> str:
        return f"FeatureCatalog({len(self._features)} features)"

    def get(self, feature_id: str) -> Feature | None:
        return self._by_id.get(feature_id)

    @property
    def ids(self) -> list[str]:
        return [f.id for f in self._features]

    @property
    def features(self) -> tuple[Feature, ...]:
        return self._features
