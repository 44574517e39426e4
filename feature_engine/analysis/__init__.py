"""Selection analysis: compatibility, impact, validation and workflow gates."""

from feature_engine.analysis.cache import ResultCache, canonical_ids, canonical_key
from feature_engine.analysis.compatibility import (
    CompatibilityChecker,
    CompatibilityIssue,
    CompatibilityResult,
    IssueSeverity,
    IssueType,
)
from feature_engine.analysis.formatting import (
    format_features_display,
    format_selection_summary,
    format_validation,
)
from feature_engine.analysis.gate import (
    GateResult,
    GateStatus,
    SelectionGate,
    WorkflowMode,
    assess_installation,
    assess_removal,
)
from feature_engine.analysis.impact import (
    ImpactAnalysis,
    ImpactEstimator,
    RemovalImpact,
    RiskLevel,
)
from feature_engine.analysis.selector import FeatureSelection, FeatureSelector
from feature_engine.analysis.validator import (
    ErrorCause,
    ErrorCode,
    SelectionError,
    SelectionValidation,
    SelectionValidator,
    SelectionWarning,
    WarningCode,
    WarningSeverity,
)

__all__ = [
    "CompatibilityChecker",
    "CompatibilityIssue",
    "CompatibilityResult",
    "ErrorCause",
    "ErrorCode",
    "FeatureSelection",
    "FeatureSelector",
    "GateResult",
    "GateStatus",
    "ImpactAnalysis",
    "ImpactEstimator",
    "IssueSeverity",
    "IssueType",
    "RemovalImpact",
    "ResultCache",
    "RiskLevel",
    "SelectionError",
    "SelectionGate",
    "SelectionValidation",
    "SelectionValidator",
    "SelectionWarning",
    "WarningCode",
    "WarningSeverity",
    "WorkflowMode",
    "assess_installation",
    "assess_removal",
    "canonical_ids",
    "canonical_key",
    "format_features_display",
    "format_selection_summary",
    "format_validation",
]
