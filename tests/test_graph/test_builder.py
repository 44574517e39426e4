"""Tests for graph construction and subgraphs."""

import logging

from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature
from feature_engine.graph.builder import GraphBuilder
from feature_engine.graph.model import DependencyGraph, EdgeType, GraphStats


class TestCreateGraph:
    """Tests for GraphBuilder.create_graph."""

    def test_empty_catalog(self):
        dg = GraphBuilder([]).create_graph()
        stats = dg.stats()
        assert stats.node_count == 0
        assert stats.edge_count == 0
        assert stats.is_dag is True

    def test_diamond_shape(self, diamond_catalog):
        """Diamond has 4 nodes, bottom at level 1 and top at level 3."""
        dg = GraphBuilder(diamond_catalog).create_graph()
        assert len(dg.nodes) == 4
        assert dg.nodes["bottom"].level == 1
        assert dg.nodes["left"].level == 2
        assert dg.nodes["right"].level == 2
        assert dg.nodes["top"].level == 3

    def test_diamond_roots_and_leaves(self, diamond_catalog):
        dg = GraphBuilder(diamond_catalog).create_graph()
        assert dg.root_nodes == ["bottom"]
        assert dg.leaf_nodes == ["top"]
        assert dg.nodes["bottom"].dependents == ["left", "right"]

    def test_levels_exceed_dependency_levels(self, framework_catalog):
        """level(f) > level(d) for every dependency d of an acyclic graph."""
        dg = GraphBuilder(framework_catalog).create_graph()
        for node in dg.nodes.values():
            assert node.level >= 1
            for dep in node.dependencies:
                assert node.level > dg.nodes[dep].level

    def test_cycle_levels_terminate(self, cycle_catalog):
        """A cycle still yields finite levels >= 1."""
        dg = GraphBuilder(cycle_catalog).create_graph()
        assert all(node.level >= 1 for node in dg.nodes.values())
        assert dg.stats().is_dag is False

    def test_self_dependency(self):
        dg = GraphBuilder([Feature(id="loop", dependencies=["loop"])]).create_graph()
        assert dg.nodes["loop"].level == 1
        assert dg.nodes["loop"].dependents == ["loop"]

    def test_conflict_edges_are_directional(self):
        """Only the declared direction produces a conflicts edge."""
        catalog = FeatureCatalog([
            Feature(id="jest", conflicts=["vitest"]),
            Feature(id="vitest"),
        ])
        dg = GraphBuilder(catalog).create_graph()
        conflicts = dg.edges_of_type(EdgeType.conflicts)
        assert [(e.source, e.target) for e in conflicts] == [("jest", "vitest")]

    def test_conflict_to_unknown_ignored(self):
        dg = GraphBuilder([Feature(id="a", conflicts=["ghost"])]).create_graph()
        assert dg.edges == []

    def test_dangling_dependency_excluded(self, caplog):
        """Unknown dependency ids produce no edge but are reported."""
        catalog = FeatureCatalog([
            Feature(id="a", dependencies=["b", "ghost"]),
            Feature(id="b"),
        ])
        with caplog.at_level(logging.WARNING, logger="feature_engine.graph.builder"):
            dg = GraphBuilder(catalog).create_graph()
        assert dg.nodes["a"].dependencies == ["b"]
        assert dg.nodes["a"].unresolved == ["ghost"]
        assert dg.dangling == {"a": ["ghost"]}
        assert len(dg.edges_of_type(EdgeType.depends)) == 1
        assert dg.stats().dangling_count == 1
        assert "ghost" in caplog.text

    def test_only_dangling_deps_is_root(self):
        """A feature whose dependencies are all unknown is a root."""
        dg = GraphBuilder([Feature(id="a", dependencies=["ghost"])]).create_graph()
        assert dg.root_nodes == ["a"]
        assert dg.nodes["a"].level == 1

    def test_networkx_mirror(self, framework_catalog):
        dg = GraphBuilder(framework_catalog).create_graph()
        assert dg.graph.number_of_nodes() == 5
        assert dg.graph.has_edge("tool-z", "library-x", key="depends")
        assert dg.graph.has_edge("framework-a", "framework-b", key="conflicts")

    def test_stats(self, framework_catalog):
        stats = GraphBuilder(framework_catalog).create_graph().stats()
        assert isinstance(stats, GraphStats)
        assert stats.depends_count == 4
        assert stats.conflicts_count == 2
        assert stats.connected_components == 1
        assert stats.max_level == 3

    def test_rebuilt_fresh(self, diamond_catalog):
        """Every call returns an independent graph."""
        builder = GraphBuilder(diamond_catalog)
        first = builder.create_graph()
        second = builder.create_graph()
        assert first is not second
        first.nodes["top"].level = 99
        assert second.nodes["top"].level == 3

    def test_deep_chain_no_recursion_limit(self):
        """Level assignment handles chains deeper than the recursion limit."""
        depth = 5000
        features = [
            Feature(id=f"n{i}", dependencies=[f"n{i + 1}"] if i + 1 < depth else [])
            for i in range(depth)
        ]
        dg = GraphBuilder(features).create_graph()
        assert dg.nodes["n0"].level == depth
        assert dg.nodes[f"n{depth - 1}"].level == 1


class TestGetSubgraph:
    """Tests for GraphBuilder.get_subgraph."""

    def test_collects_transitive_dependencies(self, framework_catalog):
        sub = GraphBuilder(framework_catalog).get_subgraph(["library-x"])
        assert set(sub.nodes) == {"library-x", "framework-a"}

    def test_edges_filtered_to_members(self, framework_catalog):
        """Conflict edge to a non-member is dropped; dependents are filtered."""
        sub = GraphBuilder(framework_catalog).get_subgraph(["library-x"])
        assert [(e.source, e.target, e.edge_type) for e in sub.edges] == [
            ("library-x", "framework-a", EdgeType.depends)
        ]
        assert sub.nodes["framework-a"].dependents == ["library-x"]
        assert sub.root_nodes == ["framework-a"]
        assert sub.leaf_nodes == ["library-x"]

    def test_structurally_independent(self, diamond_catalog):
        builder = GraphBuilder(diamond_catalog)
        sub = builder.get_subgraph(["left"])
        sub.nodes["bottom"].dependents.append("intruder")
        assert builder.create_graph().nodes["bottom"].dependents == ["left", "right"]

    def test_unknown_ids_ignored(self, diamond_catalog):
        sub = GraphBuilder(diamond_catalog).get_subgraph(["ghost"])
        assert isinstance(sub, DependencyGraph)
        assert len(sub) == 0

    def test_cycle_terminates(self, cycle_catalog):
        sub = GraphBuilder(cycle_catalog).get_subgraph(["a"])
        assert set(sub.nodes) == {"a", "b"}

    def test_overlapping_requests(self, diamond_catalog):
        """Shared descendants are collected once; node order follows the catalog."""
        sub = GraphBuilder(diamond_catalog).get_subgraph(["right", "left", "right"])
        assert list(sub.nodes) == ["left", "right", "bottom"]
        assert sub.nodes["bottom"].dependents == ["left", "right"]
