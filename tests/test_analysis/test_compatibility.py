"""Tests for the compatibility checker."""

import pytest

from feature_engine.analysis.compatibility import (
    CompatibilityChecker,
    CompatibilityResult,
    IssueSeverity,
    IssueType,
)
from feature_engine.catalog.types import Feature, FeatureCategory
from feature_engine.errors import CompatibilityError, UnknownFeatureError


class TestCheck:
    """Tests for CompatibilityChecker.check."""

    @pytest.mark.asyncio
    async def test_single_feature_compatible(self, framework_catalog):
        result = await CompatibilityChecker(framework_catalog).check(["framework-a"])
        assert result.compatible is True
        assert result.issues == []

    @pytest.mark.asyncio
    async def test_direct_conflict(self, framework_catalog):
        """Mutual declarations yield one error issue per direction."""
        result = await CompatibilityChecker(framework_catalog).check(
            ["framework-a", "framework-b"]
        )
        assert result.compatible is False
        conflicts = [i for i in result.issues if i.type == IssueType.conflict]
        assert len(conflicts) == 2
        assert all(i.severity == IssueSeverity.error for i in conflicts)
        assert {tuple(i.features) for i in conflicts} == {
            ("framework-a", "framework-b"),
            ("framework-b", "framework-a"),
        }

    @pytest.mark.asyncio
    async def test_asymmetric_conflict(self):
        """A one-sided declaration still blocks, with a single issue."""
        checker = CompatibilityChecker([
            Feature(id="a", conflicts=["b"]),
            Feature(id="b"),
        ])
        result = await checker.check(["b", "a"])
        assert result.compatible is False
        assert len(result.errors) == 1
        assert result.errors[0].features == ["a", "b"]

    @pytest.mark.asyncio
    async def test_dependency_is_warning(self, framework_catalog):
        result = await CompatibilityChecker(framework_catalog).check(
            ["framework-a", "library-x"]
        )
        assert result.compatible is True
        deps = [i for i in result.issues if i.type == IssueType.dependency]
        assert len(deps) == 1
        assert deps[0].severity == IssueSeverity.warning
        assert deps[0].description == "library-x depends on framework-a"
        assert len(result.warnings) == 1

    @pytest.mark.asyncio
    async def test_unknown_feature_raises(self, framework_catalog):
        """First missing id in caller order is named; nothing is cached."""
        checker = CompatibilityChecker(framework_catalog)
        with pytest.raises(CompatibilityError) as exc:
            await checker.check(["framework-a", "zz-missing", "aa-missing"])
        assert exc.value.feature_id == "zz-missing"
        assert isinstance(exc.value, UnknownFeatureError)

    @pytest.mark.asyncio
    async def test_empty_list(self, framework_catalog):
        result = await CompatibilityChecker(framework_catalog).check([])
        assert result.compatible is True
        assert result.suggestions == []

    @pytest.mark.asyncio
    async def test_suggests_orphaned_features(self, framework_catalog):
        """library-x only depends on framework-a, so it is suggested too."""
        result = await CompatibilityChecker(framework_catalog).check(["framework-a"])
        assert any("library-x" in s for s in result.suggestions)
        assert not any("framework-b" in s for s in result.suggestions)

    @pytest.mark.asyncio
    async def test_removal_order_suggestion(self, chain_catalog):
        result = await CompatibilityChecker(chain_catalog).check(["a", "b", "c"])
        order = [s for s in result.suggestions if "removal order" in s]
        assert order == ["Suggested removal order: c -> b -> a"]

    @pytest.mark.asyncio
    async def test_no_order_suggestion_when_natural(self, framework_catalog):
        result = await CompatibilityChecker(framework_catalog).check(
            ["library-x", "library-y"]
        )
        assert not any("removal order" in s for s in result.suggestions)

    @pytest.mark.asyncio
    async def test_multiple_conflicts(self):
        checker = CompatibilityChecker([
            Feature(id="a", category=FeatureCategory.library, conflicts=["b", "c"]),
            Feature(id="b", category=FeatureCategory.library, conflicts=["a"]),
            Feature(id="c", category=FeatureCategory.library, conflicts=["a"]),
        ])
        result = await checker.check(["a", "b", "c"])
        assert result.compatible is False
        assert len(result.errors) == 4

    @pytest.mark.asyncio
    async def test_cyclic_input_terminates(self, cycle_catalog):
        result = await CompatibilityChecker(cycle_catalog).check(["a", "b"])
        assert result.issues[0].description == "a and b depend on each other"


class TestCaching:
    """Tests for result caching."""

    @pytest.mark.asyncio
    async def test_same_reference_regardless_of_order(self, framework_catalog):
        checker = CompatibilityChecker(framework_catalog)
        first = await checker.check(["framework-a", "library-x"])
        second = await checker.check(["library-x", "framework-a", "library-x"])
        assert first is second
        assert first.features == ["framework-a", "library-x"]

    @pytest.mark.asyncio
    async def test_clear_cache(self, framework_catalog):
        checker = CompatibilityChecker(framework_catalog)
        first = await checker.check(["framework-a"])
        checker.clear_cache()
        second = await checker.check(["framework-a"])
        assert first is not second
        assert first == second
        assert isinstance(second, CompatibilityResult)
