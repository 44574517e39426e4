"""Feature selector: catalog queries and combined selection analysis."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from feature_engine.analysis.cache import canonical_ids
from feature_engine.analysis.compatibility import CompatibilityChecker, CompatibilityResult
from feature_engine.analysis.impact import ImpactAnalysis, ImpactEstimator
from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature, FeatureCategory
from feature_engine.config import EngineConfig
from feature_engine.errors import SelectorError


class FeatureSelection(BaseModel):
    """A selection together with its compatibility and impact analyses."""

    model_config = ConfigDict()

    features: list[str]
    selected_count: int
    total_available: int
    compatibility: CompatibilityResult
    impacts: ImpactAnalysis
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FeatureSelector:
    """Front door for callers that browse a catalog and analyze selections."""

    def __init__(
        self,
        features: FeatureCatalog | Iterable[Feature],
        config: EngineConfig | None = None,
    ) -> None:
        self.catalog = FeatureCatalog.coerce(features)
        self.compatibility = CompatibilityChecker(self.catalog)
        self.impact = ImpactEstimator(self.catalog, config)

    async def analyze_selection(self, feature_ids: Iterable[str]) -> FeatureSelection:
        """Run compatibility and impact analysis for one selection.

        Raises:
            SelectorError: naming the first id not in the catalog.
        """
        requested = list(feature_ids)
        for fid in requested:
            if fid not in self.catalog:
                raise SelectorError(fid)

        ids = canonical_ids(requested)
        return FeatureSelection(
            features=ids,
            selected_count=len(ids),
            total_available=len(self.catalog),
            compatibility=await self.compatibility.check(ids),
            impacts=await self.impact.analyze(ids),
        )

    def clear_cache(self) -> None:
        self.compatibility.clear_cache()
        self.impact.clear_cache()

    def get_features_grouped(self) -> dict[FeatureCategory, list[Feature]]:
        grouped: dict[FeatureCategory, list[Feature]] = {}
        for feature in self.catalog:
            grouped.setdefault(feature.category, []).append(feature)
        return grouped

    def get_removable_features(self) -> list[Feature]:
        return [f for f in self.catalog if f.removable]

    def get_suggested_features(self, selected: Iterable[str]) -> list[str]:
        """Unselected features that directly depend on a selected one."""
        chosen = set(selected)
        return [
            f.id
            for f in self.catalog
            if f.id not in chosen and any(dep in chosen for dep in f.dependencies)
        ]

    def filter_features(
        self,
        category: FeatureCategory | str | None = None,
        removable: bool | None = None,
        has_conflicts: bool | None = None,
        has_dependencies: bool | None = None,
    ) -> list[Feature]:
        result = []
        for f in self.catalog:
            if category is not None and f.category != category:
                continue
            if removable is not None and f.removable != removable:
                continue
            if has_conflicts is not None and bool(f.conflicts) != has_conflicts:
                continue
            if has_dependencies is not None and bool(f.dependencies) != has_dependencies:
                continue
            result.append(f)
        return result

    def get_feature(self, feature_id: str) -> Feature | None:
        return self.catalog.get(feature_id)

    def get_all_features(self) -> list[Feature]:
        return list(self.catalog)
