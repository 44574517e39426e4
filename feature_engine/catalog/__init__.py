"""Feature catalog: Feature records, the immutable catalog, and file loading."""

from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.loader import load_catalog, parse_catalog
from feature_engine.catalog.types import Feature, FeatureCategory

__all__ = [
    "Feature",
    "FeatureCatalog",
    "FeatureCategory",
    "load_catalog",
    "parse_catalog",
]
