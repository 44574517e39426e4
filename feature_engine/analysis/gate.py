"""Workflow gates: fold validation, compatibility and impact into one decision.

The removal workflow and the installation workflow run the identical
SelectionValidator; each adds the analysis its caller needs and maps the
combined findings onto one of three statuses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feature_engine.analysis.cache import canonical_ids
from feature_engine.analysis.compatibility import CompatibilityChecker, CompatibilityResult
from feature_engine.analysis.impact import ImpactAnalysis, ImpactEstimator, RiskLevel
from feature_engine.analysis.validator import SelectionValidation, SelectionValidator
from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature
from feature_engine.config import EngineConfig

logger = logging.getLogger(__name__)


class GateStatus(str, Enum):
    """Outcome of a workflow gate."""

    APPROVED = "APPROVED"
    APPROVED_WITH_WARNINGS = "APPROVED_WITH_WARNINGS"
    BLOCKED = "BLOCKED"


class WorkflowMode(str, Enum):
    removal = "removal"
    installation = "installation"


class GateResult(BaseModel):
    """Full result of a workflow gate."""

    model_config = ConfigDict()

    mode: WorkflowMode
    status: GateStatus
    features: list[str] = Field(default_factory=list)
    rationale: str
    validation: SelectionValidation
    compatibility: CompatibilityResult | None = None
    impact: ImpactAnalysis | None = None
    notes: list[str] = Field(default_factory=list)

    @field_validator("rationale")
    @classmethod
    def rationale_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("rationale must not be empty")
        return v

    @property
    def approved(self) -> bool:
        return self.status != GateStatus.BLOCKED


_ELEVATED_RISK = (RiskLevel.high, RiskLevel.critical)


def _blocked(
    mode: WorkflowMode, ids: list[str], validation: SelectionValidation
) -> GateResult:
    codes = sorted({e.code.value for e in validation.errors})
    return GateResult(
        mode=mode,
        status=GateStatus.BLOCKED,
        features=ids,
        rationale=f"Selection rejected with {len(validation.errors)} error(s): {', '.join(codes)}",
        validation=validation,
        notes=[e.message for e in validation.errors],
    )


class SelectionGate:
    """Removal and installation gates sharing one set of cached components."""

    def __init__(
        self,
        features: FeatureCatalog | Iterable[Feature],
        config: EngineConfig | None = None,
    ) -> None:
        self.catalog = FeatureCatalog.coerce(features)
        self.validator = SelectionValidator(self.catalog)
        self.compatibility = CompatibilityChecker(self.catalog)
        self.impact = ImpactEstimator(self.catalog, config)

    def clear_cache(self) -> None:
        self.validator.clear_cache()
        self.compatibility.clear_cache()
        self.impact.clear_cache()

    async def assess_removal(self, feature_ids: Iterable[str]) -> GateResult:
        """Validate a removal and, when valid, attach its impact analysis."""
        ids = canonical_ids(feature_ids)
        validation = self.validator.validate(ids)
        if not validation.valid:
            logger.info("Removal of %s blocked", ", ".join(ids) or "<empty>")
            return _blocked(WorkflowMode.removal, ids, validation)

        impact = await self.impact.analyze(ids)
        notes = [w.message for w in validation.warnings]
        if impact.risk_level in _ELEVATED_RISK:
            notes.append(f"Removal risk is {impact.risk_level.value} (score {impact.risk_score:.0f})")

        status = GateStatus.APPROVED_WITH_WARNINGS if notes else GateStatus.APPROVED
        return GateResult(
            mode=WorkflowMode.removal,
            status=status,
            features=ids,
            rationale=f"Removal of {len(ids)} feature(s) passes validation; risk={impact.risk_level.value}",
            validation=validation,
            impact=impact,
            notes=notes,
        )

    async def assess_installation(self, feature_ids: Iterable[str]) -> GateResult:
        """Validate an installation and attach the compatibility check of known ids."""
        ids = canonical_ids(feature_ids)
        validation = self.validator.validate(ids)
        compatibility = await self.compatibility.check(
            [fid for fid in ids if fid in self.catalog]
        )
        if not validation.valid:
            logger.info("Installation of %s blocked", ", ".join(ids) or "<empty>")
            result = _blocked(WorkflowMode.installation, ids, validation)
            return result.model_copy(update={"compatibility": compatibility})

        notes = [w.message for w in validation.warnings] + list(compatibility.warnings)
        status = GateStatus.APPROVED_WITH_WARNINGS if notes else GateStatus.APPROVED
        return GateResult(
            mode=WorkflowMode.installation,
            status=status,
            features=ids,
            rationale=f"Installation of {len(ids)} feature(s) passes validation",
            validation=validation,
            compatibility=compatibility,
            notes=notes,
        )


async def assess_removal(
    features: FeatureCatalog | Iterable[Feature],
    feature_ids: Iterable[str],
    config: EngineConfig | None = None,
) -> GateResult:
    """One-shot removal gate over a catalog."""
    return await SelectionGate(features, config).assess_removal(feature_ids)


async def assess_installation(
    features: FeatureCatalog | Iterable[Feature],
    feature_ids: Iterable[str],
    config: EngineConfig | None = None,
) -> GateResult:
    """One-shot installation gate over a catalog."""
    return await SelectionGate(features, config).assess_installation(feature_ids)
