"""Compatibility checker: pairwise conflict and dependency analysis.

Given a set of features slated for removal (or installation), reports every
declared conflict between members as an error, every dependency between
members as a warning, and suggests an ordering plus further features that
would be left with nothing to depend on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from itertools import combinations

from pydantic import BaseModel, ConfigDict, Field

from feature_engine.analysis.cache import ResultCache, canonical_ids, canonical_key
from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature
from feature_engine.errors import CompatibilityError
from feature_engine.graph.traversal import TraversalEngine

logger = logging.getLogger(__name__)


class IssueType(str, Enum):
    """Kind of compatibility issue."""

    conflict = "conflict"
    dependency = "dependency"


class IssueSeverity(str, Enum):
    """How strongly an issue blocks the selection."""

    error = "error"
    warning = "warning"


class CompatibilityIssue(BaseModel):
    """One conflict or dependency finding between two selected features."""

    model_config = ConfigDict(frozen=True)

    type: IssueType
    severity: IssueSeverity
    features: list[str]
    description: str


class CompatibilityResult(BaseModel):
    """Result of a compatibility check over one canonical feature set."""

    model_config = ConfigDict()

    features: list[str] = Field(default_factory=list)
    compatible: bool = True
    issues: list[CompatibilityIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @property
    def errors(self) -> list[CompatibilityIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.error]


class CompatibilityChecker:
    """Checks feature sets against one catalog snapshot, caching by canonical key."""

    def __init__(self, features: FeatureCatalog | Iterable[Feature]) -> None:
        self.catalog = FeatureCatalog.coerce(features)
        self.traversal = TraversalEngine(self.catalog)
        self._cache: ResultCache[CompatibilityResult] = ResultCache("compatibility")

    async def check(self, feature_ids: Iterable[str]) -> CompatibilityResult:
        """Check a feature set for conflicts and intra-set dependencies.

        Args:
            feature_ids: Feature ids, in any order; duplicates are ignored.

        Returns:
            CompatibilityResult; ``compatible`` is False iff an error-severity
            issue was found. The same object is returned for the same set
            until clear_cache() is called.

        Raises:
            CompatibilityError: naming the first id not in the catalog.
        """
        requested = list(feature_ids)
        key = canonical_key(requested)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        for fid in requested:
            if fid not in self.catalog:
                raise CompatibilityError(fid)

        return self._cache.put(key, self._compute(canonical_ids(requested)))

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compute(self, ids: list[str]) -> CompatibilityResult:
        issues: list[CompatibilityIssue] = []
        warnings: list[str] = []

        for a_id, b_id in combinations(ids, 2):
            a, b = self.catalog[a_id], self.catalog[b_id]

            # Conflict declarations are directional; each side is reported.
            if a.conflicts_with(b_id):
                issues.append(_conflict_issue(a_id, b_id))
            if b.conflicts_with(a_id):
                issues.append(_conflict_issue(b_id, a_id))

            a_needs_b, b_needs_a = a.depends_on(b_id), b.depends_on(a_id)
            if a_needs_b and b_needs_a:
                description = f"{a_id} and {b_id} depend on each other"
            elif a_needs_b:
                description = f"{a_id} depends on {b_id}"
            elif b_needs_a:
                description = f"{b_id} depends on {a_id}"
            else:
                continue
            issues.append(
                CompatibilityIssue(
                    type=IssueType.dependency,
                    severity=IssueSeverity.warning,
                    features=[a_id, b_id],
                    description=description,
                )
            )
            warnings.append(f"{description}; both are selected together")

        compatible = not any(i.severity == IssueSeverity.error for i in issues)
        result = CompatibilityResult(
            features=ids,
            compatible=compatible,
            issues=issues,
            warnings=warnings,
            suggestions=self._suggestions(ids),
        )
        logger.debug(
            "Compatibility %s: compatible=%s, %d issue(s)",
            "|".join(ids),
            compatible,
            len(issues),
        )
        return result

    def _suggestions(self, ids: list[str]) -> list[str]:
        suggestions: list[str] = []

        order = self.traversal.topological_order(ids)
        if order != ids:
            suggestions.append(f"Suggested removal order: {' -> '.join(order)}")

        selected = set(ids)
        for feature in self.catalog:
            if feature.id in selected or not feature.dependencies:
                continue
            if set(feature.dependencies) <= selected:
                suggestions.append(
                    f"Consider also removing {feature.id} "
                    "(all its dependencies are being removed)"
                )
        return suggestions


def _conflict_issue(source: str, target: str) -> CompatibilityIssue:
    return CompatibilityIssue(
        type=IssueType.conflict,
        severity=IssueSeverity.error,
        features=[source, target],
        description=f"{source} conflicts with {target}",
    )
