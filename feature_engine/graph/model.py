"""Dependency graph value objects.

A DependencyGraph is a snapshot derived from a FeatureCatalog: one GraphNode
per feature plus typed edges. It keeps a NetworkX MultiDiGraph mirror (edge
key = edge type) for structural statistics; the traversal algorithms work on
the node adjacency lists directly.
"""

from __future__ import annotations

from enum import Enum

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field


class EdgeType(str, Enum):
    """Relation carried by a graph edge."""

    depends = "depends"
    conflicts = "conflicts"


class GraphNode(BaseModel):
    """A feature node in the dependency graph."""

    model_config = ConfigDict()

    id: str
    dependencies: list[str] = Field(default_factory=list)  # resolved only
    dependents: list[str] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)  # ids absent from the catalog
    level: int = Field(default=1, ge=1)


class GraphEdge(BaseModel):
    """A directed, typed edge between two features."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    edge_type: EdgeType


class GraphStats(BaseModel):
    """Summary statistics for a dependency graph."""

    model_config = ConfigDict()

    node_count: int = 0
    edge_count: int = 0
    depends_count: int = 0
    conflicts_count: int = 0
    root_count: int = 0
    leaf_count: int = 0
    dangling_count: int = 0
    connected_components: int = 0
    is_dag: bool = True
    max_level: int = 0


class DependencyGraph:
    """Feature nodes, typed edges, and a NetworkX mirror of both."""

    def __init__(self) -> None:
        self.graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self.nodes: dict[str, GraphNode] = {}
        self.edges: list[GraphEdge] = []

    def add_node(self, node: GraphNode) -> None:
        self.nodes[node.id] = node
        self.graph.add_node(node.id)

    def add_edge(self, source: str, target: str, edge_type: EdgeType) -> None:
        self.edges.append(GraphEdge(source=source, target=target, edge_type=edge_type))
        self.graph.add_edge(source, target, key=edge_type.value)

    @property
    def root_nodes(self) -> list[str]:
        """Features with zero resolved dependencies, in node order."""
        return [nid for nid, node in self.nodes.items() if not node.dependencies]

    @property
    def leaf_nodes(self) -> list[str]:
        """Features nothing depends on, in node order."""
        return [nid for nid, node in self.nodes.items() if not node.dependents]

    @property
    def dangling(self) -> dict[str, list[str]]:
        """Feature id -> dependency ids that do not resolve to a node."""
        return {nid: list(node.unresolved) for nid, node in self.nodes.items() if node.unresolved}

    def edges_of_type(self, edge_type: EdgeType) -> list[GraphEdge]:
        return [e for e in self.edges if e.edge_type == edge_type]

    def depends_view(self) -> nx.MultiDiGraph:
        """Read-only view restricted to depends edges."""
        return nx.subgraph_view(
            self.graph,
            filter_edge=lambda u, v, k: k == EdgeType.depends.value,
        )

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def stats(self) -> GraphStats:
        """Compute graph statistics."""
        depends = self.depends_view()
        return GraphStats(
            node_count=len(self.nodes),
            edge_count=len(self.edges),
            depends_count=len(self.edges_of_type(EdgeType.depends)),
            conflicts_count=len(self.edges_of_type(EdgeType.conflicts)),
            root_count=len(self.root_nodes),
            leaf_count=len(self.leaf_nodes),
            dangling_count=sum(len(v) for v in self.dangling.values()),
            connected_components=(
                nx.number_weakly_connected_components(self.graph) if self.nodes else 0
            ),
            is_dag=nx.is_directed_acyclic_graph(depends),
            max_level=max((n.level for n in self.nodes.values()), default=0),
        )
