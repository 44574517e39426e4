"""Catalog loader: read a feature catalog from a YAML or JSON file.

This is the only catalog code that touches disk. The engine itself only
ever sees the resulting FeatureCatalog.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature
from feature_engine.errors import CatalogError

logger = logging.getLogger(__name__)


def parse_catalog(data: object, source: str = "<data>") -> FeatureCatalog:
    """Build a FeatureCatalog from already-parsed data.

    Accepts either ``{"features": [...]}`` or a bare list of feature mappings.
    Legacy ``name``/``type`` keys are accepted for ``id``/``category``.
    """
    if isinstance(data, dict):
        entries = data.get("features", []) or []
    elif isinstance(data, list):
        entries = data
    elif data is None:
        entries = []
    else:
        raise CatalogError(f"{source}: expected a mapping or list, got {type(data).__name__}")

    features: list[Feature] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogError(f"{source}: feature #{index} is not a mapping")
        fields = dict(entry)
        if "id" not in fields and "name" in fields:
            fields["id"] = fields.pop("name")
        if "category" not in fields and "type" in fields:
            fields["category"] = fields.pop("type")
        if "devDependencies" in fields and "dev_dependencies" not in fields:
            fields["dev_dependencies"] = fields.pop("devDependencies")
        try:
            features.append(Feature.model_validate(fields))
        except ValidationError as e:
            raise CatalogError(f"{source}: invalid feature #{index}: {e}") from e

    catalog = FeatureCatalog(features)
    logger.debug("Loaded %d features from %s", len(catalog), source)
    return catalog


def load_catalog(path: Path) -> FeatureCatalog:
    """Load a feature catalog from a ``.json``, ``.yaml`` or ``.yml`` file.

    Args:
        path: Path to the catalog file.

    Returns:
        Parsed FeatureCatalog in file order.

    Raises:
        CatalogError: if the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot parse catalog {path}: {e}") from e

    return parse_catalog(data, source=str(path))
