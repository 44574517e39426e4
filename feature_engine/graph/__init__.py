"""Dependency graph: model, builder, traversal algorithms and rendering."""

from feature_engine.graph.builder import GraphBuilder
from feature_engine.graph.model import (
    DependencyGraph,
    EdgeType,
    GraphEdge,
    GraphNode,
    GraphStats,
)
from feature_engine.graph.render import summarize_graph, visualize_ascii
from feature_engine.graph.traversal import TraversalEngine, assign_levels

__all__ = [
    "DependencyGraph",
    "EdgeType",
    "GraphBuilder",
    "GraphEdge",
    "GraphNode",
    "GraphStats",
    "TraversalEngine",
    "assign_levels",
    "summarize_graph",
    "visualize_ascii",
]
