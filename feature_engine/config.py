"""Engine configuration: impact weights, risk thresholds and recommendation limits.

Every tunable number used by the impact estimator lives here. Defaults
reproduce the stock scoring rules; a YAML file can override any subset.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from feature_engine.errors import ConfigError


class CategoryWeights(BaseModel):
    """Base estimated lines removed per feature category."""

    model_config = ConfigDict(frozen=True)

    framework: int = Field(default=5000, ge=0)
    library: int = Field(default=2000, ge=0)
    tool: int = Field(default=1000, ge=0)
    other: int = Field(default=500, ge=0)
    per_dependency: int = Field(default=200, ge=0)
    per_dev_dependency: int = Field(default=100, ge=0)

    def base_for(self, category: str) -> int:
        return getattr(self, category, self.other)


class FileEstimate(BaseModel):
    """Estimated file count: base + per-dependency increments."""

    model_config = ConfigDict(frozen=True)

    base_files: int = Field(default=3, ge=0)
    per_dependency: int = Field(default=2, ge=0)
    per_dev_dependency: int = Field(default=1, ge=0)


class RiskThresholds(BaseModel):
    """Aggregate risk score weights and level cut-offs."""

    model_config = ConfigDict(frozen=True)

    file_weight: float = 10.0
    lines_divisor: float = Field(default=100.0, gt=0)
    breaking_bonus: float = 50.0
    dependent_weight: float = 25.0
    critical: float = 200.0
    high: float = 100.0
    medium: float = 50.0

    @model_validator(mode="after")
    def thresholds_ordered(self) -> RiskThresholds:
        if not (self.critical >= self.high >= self.medium):
            raise ValueError("risk thresholds must satisfy critical >= high >= medium")
        return self


class RecommendationThresholds(BaseModel):
    """Limits above which the impact estimator adds a warning."""

    model_config = ConfigDict(frozen=True)

    large_removal_lines: int = Field(default=5000, ge=0)
    many_files: int = Field(default=20, ge=0)


class EngineConfig(BaseModel):
    """Top-level engine configuration."""

    model_config = ConfigDict(frozen=True)

    category_weights: CategoryWeights = Field(default_factory=CategoryWeights)
    file_estimate: FileEstimate = Field(default_factory=FileEstimate)
    risk: RiskThresholds = Field(default_factory=RiskThresholds)
    recommendations: RecommendationThresholds = Field(
        default_factory=RecommendationThresholds
    )


DEFAULT_CONFIG = EngineConfig()


def load_config(path: Path | None = None) -> EngineConfig:
    """Load an EngineConfig from a YAML file.

    Args:
        path: Path to a YAML file, or None for the defaults.

    Returns:
        Validated EngineConfig. Sections missing from the file keep defaults.

    Raises:
        ConfigError: if the file is unreadable, not a mapping, or fails validation.
    """
    if path is None:
        return DEFAULT_CONFIG

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
