"""Exception hierarchy for the feature engine.

Input defects (an unknown feature id, a malformed catalog or config) raise.
Rule violations such as conflicts, cycles or unmet dependencies never raise;
they are returned inside result models with a severity tag.
"""

from __future__ import annotations


class FeatureEngineError(Exception):
    """Base class for all feature engine errors."""


class CatalogError(FeatureEngineError):
    """Catalog data is malformed or could not be loaded."""


class ConfigError(FeatureEngineError):
    """Engine configuration is malformed or could not be loaded."""


class UnknownFeatureError(FeatureEngineError):
    """A queried feature id does not exist in the catalog."""

    def __init__(self, feature_id: str, message: str | None = None) -> None:
        self.feature_id = feature_id
        super().__init__(message or f"Feature not found: {feature_id}")


class CompatibilityError(UnknownFeatureError):
    """Raised by the compatibility checker for an unknown feature id."""


class ImpactError(UnknownFeatureError):
    """Raised by the impact estimator for an unknown feature id."""


class SelectorError(UnknownFeatureError):
    """Raised by the feature selector for an unknown feature id."""
