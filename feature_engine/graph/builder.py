"""Graph builder: derive DependencyGraph snapshots from a feature catalog.

Graphs are rebuilt from the catalog on every call; nothing is updated
incrementally, and a subgraph never shares node objects with its parent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import networkx as nx

from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature
from feature_engine.graph.model import DependencyGraph, EdgeType, GraphNode
from feature_engine.graph.traversal import assign_levels

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds DependencyGraph snapshots from one catalog."""

    def __init__(self, features: FeatureCatalog | Iterable[Feature]) -> None:
        self.catalog = FeatureCatalog.coerce(features)

    def create_graph(self) -> DependencyGraph:
        """Build the full dependency graph.

        Nodes: one per feature, in catalog order.
        Edges: feature→dependency "depends" for every dependency present in
               the catalog; feature→other "conflicts" in the declared
               direction only. Dependency ids absent from the catalog are
               kept on the node as ``unresolved`` and produce no edge.
        """
        dg = DependencyGraph()

        for feature in self.catalog:
            dg.add_node(GraphNode(id=feature.id))

        for feature in self.catalog:
            node = dg.nodes[feature.id]
            for dep in dict.fromkeys(feature.dependencies):
                if dep in dg.nodes:
                    node.dependencies.append(dep)
                    dg.nodes[dep].dependents.append(feature.id)
                    dg.add_edge(feature.id, dep, EdgeType.depends)
                else:
                    node.unresolved.append(dep)

            for other in dict.fromkeys(feature.conflicts):
                if other in dg.nodes:
                    dg.add_edge(feature.id, other, EdgeType.conflicts)

        levels = assign_levels({nid: n.dependencies for nid, n in dg.nodes.items()})
        for nid, level in levels.items():
            dg.nodes[nid].level = level

        dangling = dg.dangling
        if dangling:
            logger.warning(
                "%d feature(s) declare dependencies missing from the catalog: %s",
                len(dangling),
                ", ".join(f"{fid} -> {'/'.join(ids)}" for fid, ids in dangling.items()),
            )
        logger.debug("Built graph: %d nodes, %d edges", len(dg.nodes), len(dg.edges))
        return dg

    def get_subgraph(self, feature_ids: Iterable[str]) -> DependencyGraph:
        """Subgraph of feature_ids plus their transitive dependencies.

        Members are the known feature_ids plus their descendants along
        depends edges. Node records are copied and their dependent lists and
        the edge set are filtered to the members; unknown ids are ignored.
        """
        full = self.create_graph()
        depends = full.depends_view()
        members: set[str] = set()
        for nid in feature_ids:
            if nid in full.nodes and nid not in members:
                members.add(nid)
                members |= nx.descendants(depends, nid)

        sub = DependencyGraph()
        for nid in full.nodes:
            if nid not in members:
                continue
            node = full.nodes[nid].model_copy(deep=True)
            node.dependents = [d for d in node.dependents if d in members]
            sub.add_node(node)
        for edge in full.edges:
            if edge.source in members and edge.target in members:
                sub.add_edge(edge.source, edge.target, edge.edge_type)
        return sub
