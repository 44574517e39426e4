"""Shared fixtures for the feature-engine test suite."""

from pathlib import Path

import pytest
import yaml

from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature, FeatureCategory


# ── Path fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def repo_root() -> Path:
    """Root of the feature-engine repo."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def package_root(repo_root: Path) -> Path:
    """Root of the feature_engine Python package."""
    return repo_root / "feature_engine"


# ── Graph shape fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def diamond_catalog() -> FeatureCatalog:
    """top -> [left, right]; left -> [bottom]; right -> [bottom]."""
    return FeatureCatalog([
        Feature(id="top", dependencies=["left", "right"]),
        Feature(id="left", dependencies=["bottom"]),
        Feature(id="right", dependencies=["bottom"]),
        Feature(id="bottom"),
    ])


@pytest.fixture
def chain_catalog() -> FeatureCatalog:
    """Linear chain a -> b -> c."""
    return FeatureCatalog([
        Feature(id="a", category=FeatureCategory.tool, dependencies=["b"]),
        Feature(id="b", category=FeatureCategory.tool, dependencies=["c"]),
        Feature(id="c", category=FeatureCategory.tool),
    ])


@pytest.fixture
def cycle_catalog() -> FeatureCatalog:
    """Two-node cycle a <-> b."""
    return FeatureCatalog([
        Feature(id="a", category=FeatureCategory.library, dependencies=["b"]),
        Feature(id="b", category=FeatureCategory.library, dependencies=["a"]),
    ])


# ── Realistic catalogs ───────────────────────────────────────────────────────

@pytest.fixture
def framework_catalog() -> FeatureCatalog:
    """Two mutually conflicting frameworks with libraries and a tool on top."""
    return FeatureCatalog([
        Feature(
            id="framework-a",
            category=FeatureCategory.framework,
            conflicts=["framework-b"],
        ),
        Feature(
            id="framework-b",
            category=FeatureCategory.framework,
            conflicts=["framework-a"],
        ),
        Feature(
            id="library-x",
            category=FeatureCategory.library,
            dependencies=["framework-a"],
        ),
        Feature(
            id="library-y",
            category=FeatureCategory.library,
            dependencies=["framework-b"],
        ),
        Feature(
            id="tool-z",
            category=FeatureCategory.tool,
            dependencies=["library-x", "library-y"],
            dev_dependencies=["vitest"],
        ),
    ])


@pytest.fixture
def selection_catalog() -> FeatureCatalog:
    """Libraries sharing a base, one non-removable, two conflicting apps."""
    return FeatureCatalog([
        Feature(id="base-lib", category=FeatureCategory.library),
        Feature(id="lib-a", category=FeatureCategory.library, dependencies=["base-lib"]),
        Feature(id="lib-b", category=FeatureCategory.library, dependencies=["base-lib"]),
        Feature(
            id="lib-c",
            category=FeatureCategory.library,
            removable=False,
            dependencies=["lib-a"],
        ),
        Feature(
            id="app-core",
            category=FeatureCategory.framework,
            dependencies=["base-lib"],
            conflicts=["app-alternate"],
        ),
        Feature(
            id="app-alternate",
            category=FeatureCategory.framework,
            conflicts=["app-core"],
        ),
        Feature(id="pinned", category=FeatureCategory.other, removable=False),
    ])


# ── File fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """YAML catalog on disk: api -> orm -> database, plus a conflicting pair."""
    data = {
        "features": [
            {"id": "api", "category": "framework", "dependencies": ["orm"]},
            {"id": "orm", "category": "library", "dependencies": ["database"]},
            {"id": "database", "category": "library"},
            {"id": "jest", "category": "tool", "conflicts": ["vitest"]},
            {"id": "vitest", "category": "tool", "conflicts": ["jest"]},
            {"id": "core", "category": "framework", "removable": False},
        ]
    }
    path = tmp_path / "features.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
