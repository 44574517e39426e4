"""Impact estimator: how much code and how many features a removal touches.

The numbers are deterministic relative magnitudes derived from feature
category and declared dependencies, not measurements of real code. They
feed a weighted risk score that is bucketed into four risk levels.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from feature_engine.analysis.cache import ResultCache, canonical_ids, canonical_key
from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature, FeatureCategory
from feature_engine.config import DEFAULT_CONFIG, EngineConfig
from feature_engine.errors import ImpactError

logger = logging.getLogger(__name__)


class RiskLevel(str, Enum):
    """Severity of a single removal, or risk of the whole selection."""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class RemovalImpact(BaseModel):
    """Estimated impact of removing one feature."""

    model_config = ConfigDict()

    feature: str
    affected_files: list[str] = Field(default_factory=list)
    affected_dependencies: list[str] = Field(default_factory=list)
    dependent_features: list[str] = Field(default_factory=list)
    estimated_lines_removed: int = 0
    breaking_changes: bool = False
    severity: RiskLevel = RiskLevel.low


class ImpactAnalysis(BaseModel):
    """Aggregate impact of removing a canonical feature set."""

    model_config = ConfigDict()

    features: list[str] = Field(default_factory=list)
    impacts: list[RemovalImpact] = Field(default_factory=list)
    dependent_features: list[str] = Field(default_factory=list)
    total_impacted_files: int = 0
    total_impacted_dependencies: int = 0
    total_lines_removed: int = 0
    risk_score: float = 0.0
    risk_level: RiskLevel = RiskLevel.low
    recommendations: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def has_breaking_changes(self) -> bool:
        return any(i.breaking_changes for i in self.impacts)


class ImpactEstimator:
    """Estimates removal impact against one catalog snapshot, caching by canonical key."""

    def __init__(
        self,
        features: FeatureCatalog | Iterable[Feature],
        config: EngineConfig | None = None,
    ) -> None:
        self.catalog = FeatureCatalog.coerce(features)
        self.config = config or DEFAULT_CONFIG
        self._cache: ResultCache[ImpactAnalysis] = ResultCache("impact")

    async def analyze(self, feature_ids: Iterable[str]) -> ImpactAnalysis:
        """Analyze the impact of removing a feature set.

        Args:
            feature_ids: Feature ids, in any order; duplicates are ignored.

        Returns:
            ImpactAnalysis; the same object for the same set until clear_cache().

        Raises:
            ImpactError: naming the first id not in the catalog.
        """
        requested = list(feature_ids)
        key = canonical_key(requested)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        for fid in requested:
            if fid not in self.catalog:
                raise ImpactError(fid)

        return self._cache.put(key, self._compute(canonical_ids(requested)))

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compute(self, ids: list[str]) -> ImpactAnalysis:
        removed = set(ids)
        impacts = [self.feature_impact(self.catalog[fid], removed) for fid in ids]

        dependents = [
            f.id
            for f in self.catalog
            if f.id not in removed and any(dep in removed for dep in f.dependencies)
        ]
        total_files = sum(len(i.affected_files) for i in impacts)
        total_lines = sum(i.estimated_lines_removed for i in impacts)
        breaking = any(i.breaking_changes for i in impacts)

        score = self.risk_score(total_files, total_lines, breaking, len(dependents))
        analysis = ImpactAnalysis(
            features=ids,
            impacts=impacts,
            dependent_features=dependents,
            total_impacted_files=total_files,
            total_impacted_dependencies=sum(len(i.affected_dependencies) for i in impacts),
            total_lines_removed=total_lines,
            risk_score=score,
            risk_level=self.classify_risk(score),
            recommendations=self._recommendations(impacts, dependents, total_lines, total_files),
        )
        logger.debug(
            "Impact %s: score=%.1f risk=%s", "|".join(ids), score, analysis.risk_level.value
        )
        return analysis

    def feature_impact(self, feature: Feature, removed: set[str]) -> RemovalImpact:
        """Impact of removing one feature alongside the rest of ``removed``."""
        dependents = [
            f.id
            for f in self.catalog
            if f.id != feature.id and f.id not in removed and f.depends_on(feature.id)
        ]
        breaking = bool(dependents)

        if feature.category == FeatureCategory.framework:
            severity = RiskLevel.critical
        elif feature.category == FeatureCategory.library:
            severity = RiskLevel.high
        elif breaking:
            severity = RiskLevel.medium
        else:
            severity = RiskLevel.low

        return RemovalImpact(
            feature=feature.id,
            affected_files=self.estimate_affected_files(feature),
            affected_dependencies=[*feature.dependencies, *feature.dev_dependencies],
            dependent_features=dependents,
            estimated_lines_removed=self.estimate_lines_removed(feature),
            breaking_changes=breaking,
            severity=severity,
        )

    def estimate_affected_files(self, feature: Feature) -> list[str]:
        est = self.config.file_estimate
        count = (
            est.base_files
            + len(feature.dependencies) * est.per_dependency
            + len(feature.dev_dependencies) * est.per_dev_dependency
        )
        return [f"src/{feature.id}/module-{i}" for i in range(count)]

    def estimate_lines_removed(self, feature: Feature) -> int:
        weights = self.config.category_weights
        base = (
            feature.size_hint
            if feature.size_hint is not None
            else weights.base_for(feature.category.value)
        )
        return (
            base
            + len(feature.dependencies) * weights.per_dependency
            + len(feature.dev_dependencies) * weights.per_dev_dependency
        )

    def risk_score(
        self, total_files: int, total_lines: int, breaking: bool, dependent_count: int
    ) -> float:
        risk = self.config.risk
        return (
            total_files * risk.file_weight
            + total_lines / risk.lines_divisor
            + (risk.breaking_bonus if breaking else 0.0)
            + dependent_count * risk.dependent_weight
        )

    def classify_risk(self, score: float) -> RiskLevel:
        risk = self.config.risk
        if score >= risk.critical:
            return RiskLevel.critical
        if score >= risk.high:
            return RiskLevel.high
        if score >= risk.medium:
            return RiskLevel.medium
        return RiskLevel.low

    def _recommendations(
        self,
        impacts: list[RemovalImpact],
        dependents: list[str],
        total_lines: int,
        total_files: int,
    ) -> list[str]:
        limits = self.config.recommendations
        recommendations: list[str] = []

        critical = [i.feature for i in impacts if i.severity == RiskLevel.critical]
        if critical:
            recommendations.append(
                f"CRITICAL: Removing {', '.join(critical)} may cause severe issues"
            )
        if dependents:
            recommendations.append(
                f"These features depend on your selections: {', '.join(dependents)}"
            )
        if total_lines > limits.large_removal_lines:
            recommendations.append(
                f"You're removing ~{total_lines} lines of code. Consider testing thoroughly."
            )
        if total_files > limits.many_files:
            recommendations.append(
                f"This will affect ~{total_files} files. Ensure comprehensive testing."
            )
        recommendations.append("Ensure you have a backup before proceeding.")
        recommendations.append("Consider using --dry-run to preview changes.")
        return recommendations
