"""Selection validator: one accept/reject decision for a feature selection.

Unlike the compatibility checker and impact estimator, unknown ids are not
exceptions here: every problem becomes a typed finding. All checks run and
accumulate; none short-circuits another. The same validation serves removal
and installation workflows.
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
from feature_engine.graph.traversal import TraversalEngine

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes, in the order suggestions are emitted."""

    EMPTY_SELECTION = "EMPTY_SELECTION"
    FEATURE_NOT_FOUND = "FEATURE_NOT_FOUND"
    NOT_REMOVABLE = "NOT_REMOVABLE"
    CONFLICTING_FEATURES = "CONFLICTING_FEATURES"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    PROBLEMATIC_DEPENDENCY_CHAIN = "PROBLEMATIC_DEPENDENCY_CHAIN"


class ErrorCause(str, Enum):
    """Broad cause category of a selection error."""

    missing = "missing"
    invalid = "invalid"
    incompatible = "incompatible"
    unmet_dependency = "unmet_dependency"


class WarningCode(str, Enum):
    """Warning codes; warnings never affect validity."""

    UNMET_DEPENDENCIES = "UNMET_DEPENDENCIES"
    UNMET_PEER_DEPS = "UNMET_PEER_DEPS"
    DANGLING_DEPENDENCY = "DANGLING_DEPENDENCY"


class WarningSeverity(str, Enum):
    warning = "warning"
    info = "info"


class SelectionError(BaseModel):
    """A finding that makes the selection invalid."""

    model_config = ConfigDict(frozen=True)

    feature: str
    code: ErrorCode
    message: str
    cause: ErrorCause
    related: list[str] = Field(default_factory=list)


class SelectionWarning(BaseModel):
    """A finding the caller may surface without blocking."""

    model_config = ConfigDict(frozen=True)

    feature: str
    code: WarningCode
    message: str
    severity: WarningSeverity = WarningSeverity.warning
    related: list[str] = Field(default_factory=list)


class SelectionValidation(BaseModel):
    """Validation outcome for one canonical feature set."""

    model_config = ConfigDict()

    features: list[str] = Field(default_factory=list)
    valid: bool = True
    errors: list[SelectionError] = Field(default_factory=list)
    warnings: list[SelectionWarning] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @property
    def error_codes(self) -> set[ErrorCode]:
        return {e.code for e in self.errors}


_SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.EMPTY_SELECTION: "Select at least one feature",
    ErrorCode.FEATURE_NOT_FOUND: "Remove unknown features from selection",
    ErrorCode.NOT_REMOVABLE: "Select only removable features",
    ErrorCode.CONFLICTING_FEATURES: "Resolve conflicting feature selections",
    ErrorCode.CIRCULAR_DEPENDENCY: "Remove one feature from the circular dependency chain",
    ErrorCode.PROBLEMATIC_DEPENDENCY_CHAIN: (
        "Add the missing transitive dependencies to the selection or deselect their dependents"
    ),
}

ANALYZE_HINT = "Use --analyze to see detailed impact analysis before proceeding"
DRY_RUN_HINT = "Use --dry-run to preview changes without modifying files"


class SelectionValidator:
    """Validates feature selections against one catalog snapshot."""

    def __init__(self, features: FeatureCatalog | Iterable[Feature]) -> None:
        self.catalog = FeatureCatalog.coerce(features)
        self.traversal = TraversalEngine(self.catalog)
        self._cache: ResultCache[SelectionValidation] = ResultCache("validation")

    def validate(self, feature_ids: Iterable[str]) -> SelectionValidation:
        """Validate a selection; never raises for unknown ids.

        Args:
            feature_ids: Selected feature ids, in any order; duplicates ignored.

        Returns:
            SelectionValidation; ``valid`` is True iff there are no errors.
        """
        ids = canonical_ids(feature_ids)
        return self._cache.get_or_compute(canonical_key(ids), lambda: self._compute(ids))

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compute(self, ids: list[str]) -> SelectionValidation:
        errors: list[SelectionError] = []
        warnings: list[SelectionWarning] = []

        if not ids:
            errors.append(
                SelectionError(
                    feature="global",
                    code=ErrorCode.EMPTY_SELECTION,
                    message="At least one feature must be selected",
                    cause=ErrorCause.missing,
                )
            )

        known = [fid for fid in ids if fid in self.catalog]
        selected = set(ids)
        for fid in ids:
            errors.extend(self._feature_errors(fid))
            warnings.extend(self._feature_warnings(fid, selected))

        errors.extend(self._conflict_errors(known))
        errors.extend(self._cycle_errors(known))
        errors.extend(self._chain_errors(known, selected))

        result = SelectionValidation(
            features=ids,
            valid=not errors,
            errors=errors,
            warnings=warnings,
            suggestions=self._suggestions(errors, warnings),
        )
        logger.info(
            "Validation %s: %s (%d error(s), %d warning(s))",
            "|".join(ids) or "<empty>",
            "PASSED" if result.valid else "FAILED",
            len(errors),
            len(warnings),
        )
        return result

    def _feature_errors(self, fid: str) -> list[SelectionError]:
        feature = self.catalog.get(fid)
        if feature is None:
            return [
                SelectionError(
                    feature=fid,
                    code=ErrorCode.FEATURE_NOT_FOUND,
                    message=f"Feature not found: {fid}",
                    cause=ErrorCause.missing,
                )
            ]
        if not feature.removable:
            return [
                SelectionError(
                    feature=fid,
                    code=ErrorCode.NOT_REMOVABLE,
                    message=f"Feature is not removable: {fid}",
                    cause=ErrorCause.invalid,
                )
            ]
        return []

    def _feature_warnings(self, fid: str, selected: set[str]) -> list[SelectionWarning]:
        feature = self.catalog.get(fid)
        if feature is None:
            return []
        warnings: list[SelectionWarning] = []

        unmet = [d for d in self.traversal.dependencies_of(fid) if d not in selected]
        if unmet:
            warnings.append(
                SelectionWarning(
                    feature=fid,
                    code=WarningCode.UNMET_DEPENDENCIES,
                    message=f"{fid} has unmet dependencies: {', '.join(unmet)}",
                    related=unmet,
                )
            )

        dangling = [d for d in dict.fromkeys(feature.dependencies) if d not in self.catalog]
        if dangling:
            warnings.append(
                SelectionWarning(
                    feature=fid,
                    code=WarningCode.DANGLING_DEPENDENCY,
                    message=f"{fid} depends on features missing from the catalog: {', '.join(dangling)}",
                    related=dangling,
                )
            )

        unmet_peers = [p for p in self._peers(feature) if p not in selected]
        if unmet_peers:
            warnings.append(
                SelectionWarning(
                    feature=fid,
                    code=WarningCode.UNMET_PEER_DEPS,
                    message=f"{fid} has peer dependencies: {', '.join(unmet_peers)}",
                    severity=WarningSeverity.info,
                    related=unmet_peers,
                )
            )
        return warnings

    def _peers(self, feature: Feature) -> list[str]:
        """Features sharing at least one dependency with feature."""
        own = set(feature.dependencies)
        if not own:
            return []
        return [
            other.id
            for other in self.catalog
            if other.id != feature.id and own.intersection(other.dependencies)
        ]

    def _conflict_errors(self, known: list[str]) -> list[SelectionError]:
        errors: list[SelectionError] = []
        for a_id, b_id in combinations(known, 2):
            for source, target in ((a_id, b_id), (b_id, a_id)):
                if self.catalog[source].conflicts_with(target):
                    errors.append(
                        SelectionError(
                            feature=source,
                            code=ErrorCode.CONFLICTING_FEATURES,
                            message=f"{source} conflicts with {target}",
                            cause=ErrorCause.incompatible,
                            related=[target],
                        )
                    )
        return errors

    def _cycle_errors(self, known: list[str]) -> list[SelectionError]:
        return [
            SelectionError(
                feature=cycle[0],
                code=ErrorCode.CIRCULAR_DEPENDENCY,
                message=f"Circular dependency detected: {' -> '.join(cycle)}",
                cause=ErrorCause.incompatible,
                related=cycle[1:-1],
            )
            for cycle in self.traversal.find_cycles(known)
        ]

    def _chain_errors(self, known: list[str], selected: set[str]) -> list[SelectionError]:
        errors: list[SelectionError] = []
        for fid in known:
            missing = sorted(self.traversal.get_transitive_dependencies(fid) - selected)
            if missing:
                errors.append(
                    SelectionError(
                        feature=fid,
                        code=ErrorCode.PROBLEMATIC_DEPENDENCY_CHAIN,
                        message=f"Removing {fid} requires also removing: {', '.join(missing)}",
                        cause=ErrorCause.unmet_dependency,
                        related=missing,
                    )
                )
        return errors

    def _suggestions(
        self, errors: list[SelectionError], warnings: list[SelectionWarning]
    ) -> list[str]:
        present = {e.code for e in errors}
        suggestions = [text for code, text in _SUGGESTIONS.items() if code in present]
        if warnings:
            suggestions.append(f"Review {len(warnings)} warning(s) before proceeding")
        suggestions.append(ANALYZE_HINT)
        suggestions.append(DRY_RUN_HINT)
        return suggestions
