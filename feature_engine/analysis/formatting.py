"""Plain-text summaries of analysis results. Presentation only."""

from __future__ import annotations

from collections.abc import Iterable

from feature_engine.analysis.compatibility import IssueSeverity
from feature_engine.analysis.selector import FeatureSelection
from feature_engine.analysis.validator import SelectionValidation
from feature_engine.catalog.types import Feature

_RULE = "=" * 39


def format_selection_summary(selection: FeatureSelection) -> str:
    """Headers, counts and bullet lists for a FeatureSelection."""
    compat = selection.compatibility
    impacts = selection.impacts
    lines = [
        _RULE,
        "  FEATURE SELECTION SUMMARY",
        _RULE,
        "",
        f"Selected Features: {selection.selected_count}/{selection.total_available}",
        f"   {', '.join(selection.features)}",
        "",
        "Compatibility Check:",
    ]

    if compat.compatible:
        lines.append("   All features are compatible")
    else:
        errors = [i for i in compat.issues if i.severity == IssueSeverity.error]
        lines.append(f"   Found {len(errors)} compatibility issue(s)")
        lines.extend(f"      - {e.description}" for e in errors)

    if compat.warnings:
        lines.append("   Warnings:")
        lines.extend(f"      - {w}" for w in compat.warnings)

    lines += [
        "",
        "Impact Analysis:",
        f"   Risk Level: {impacts.risk_level.value.upper()}",
        f"   Files Impacted: {impacts.total_impacted_files}",
        f"   Dependencies Affected: {impacts.total_impacted_dependencies}",
        f"   Estimated Lines Removed: {impacts.total_lines_removed:,}",
    ]

    if impacts.recommendations:
        lines += ["", "Recommendations:"]
        lines.extend(f"   {r}" for r in impacts.recommendations)

    lines += ["", _RULE]
    return "\n".join(lines)


def format_features_display(
    features: Iterable[Feature], highlight: Iterable[str] | None = None
) -> str:
    """One block per feature: marker, removability, id, category, relations."""
    marked = set(highlight or ())
    lines: list[str] = []
    for feature in features:
        marker = ">" if feature.id in marked else " "
        removable = "x" if feature.removable else " "
        lines.append(f"{marker} [{removable}] {feature.id:<20} ({feature.category.value})")
        if feature.description:
            lines.append(f"        {feature.description}")
        if feature.dependencies:
            lines.append(f"        Depends: {', '.join(feature.dependencies)}")
        if feature.conflicts:
            lines.append(f"        Conflicts: {', '.join(feature.conflicts)}")
        lines.append("")
    return "\n".join(lines)


def format_validation(validation: SelectionValidation) -> str:
    """Pass/fail line followed by errors, warnings and suggestions."""
    status = "VALID" if validation.valid else "INVALID"
    lines = [f"Selection {status}: {', '.join(validation.features) or '<empty>'}"]
    if validation.errors:
        lines.append("Errors:")
        lines.extend(f"  [{e.code.value}] {e.message}" for e in validation.errors)
    if validation.warnings:
        lines.append("Warnings:")
        lines.extend(
            f"  [{w.code.value}] ({w.severity.value}) {w.message}" for w in validation.warnings
        )
    if validation.suggestions:
        lines.append("Suggestions:")
        lines.extend(f"  - {s}" for s in validation.suggestions)
    return "\n".join(lines)
