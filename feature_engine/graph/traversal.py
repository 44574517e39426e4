"""Traversal algorithms over feature dependency data.

Closures come from a networkx DiGraph of resolved depends edges. The
remaining walks (first-found path, cycle-tolerant topological order, cycle
paths, levels) are iterative and guarded by a visited, in-progress, or
colour marker, so arbitrarily deep or cyclic catalogs terminate without
touching the interpreter recursion limit.

Only resolved dependencies are followed: an id that is not in the catalog
never becomes a traversal step.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import networkx as nx

from feature_engine.catalog.catalog import FeatureCatalog
from feature_engine.catalog.types import Feature

_WHITE, _GRAY, _BLACK = 0, 1, 2


def resolved_adjacency(catalog: FeatureCatalog) -> dict[str, list[str]]:
    """Feature id -> declared dependencies that exist in the catalog (declared order)."""
    return {
        f.id: [dep for dep in dict.fromkeys(f.dependencies) if dep in catalog]
        for f in catalog
    }


def assign_levels(adjacency: Mapping[str, Sequence[str]]) -> dict[str, int]:
    """Compute ``level = 1 + max(level of dependencies)`` for every node.

    Nodes with no dependencies get level 1. A dependency that is still being
    computed (a back-reference on a cycle) contributes nothing.
    """
    levels: dict[str, int] = {}
    in_progress: set[str] = set()

    for start in adjacency:
        if start in levels:
            continue
        in_progress.add(start)
        stack = [(start, iter(adjacency[start]))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep in levels or dep in in_progress or dep not in adjacency:
                    continue
                in_progress.add(dep)
                stack.append((dep, iter(adjacency[dep])))
                break
            else:
                stack.pop()
                in_progress.discard(node)
                levels[node] = 1 + max(
                    (levels[d] for d in adjacency[node] if d in levels), default=0
                )
    return levels


class TraversalEngine:
    """Closure, path, ordering and cycle queries over a feature catalog."""

    def __init__(self, features: FeatureCatalog | Iterable[Feature]) -> None:
        self.catalog = FeatureCatalog.coerce(features)
        self._deps = resolved_adjacency(self.catalog)
        self.graph = nx.DiGraph()
        self.graph.add_nodes_from(self._deps)
        for fid, deps in self._deps.items():
            self.graph.add_edges_from((fid, dep) for dep in deps)

    def dependencies_of(self, feature_id: str) -> list[str]:
        return list(self._deps.get(feature_id, ()))

    def dependents_of(self, feature_id: str) -> list[str]:
        if feature_id not in self.graph:
            return []
        return list(self.graph.predecessors(feature_id))

    def get_dependency_path(self, source: str, target: str) -> list[str] | None:
        """First path found from source to target following dependencies.

        Dependencies are explored depth-first in declared order, so the
        result is deterministic but not necessarily the shortest path.
        """
        if source not in self._deps:
            return None
        if source == target:
            return [source]

        visited = {source}
        stack = [(source, iter(self._deps[source]))]
        while stack:
            _, pending = stack[-1]
            for dep in pending:
                if dep == target:
                    return [node for node, _ in stack] + [target]
                if dep in visited:
                    continue
                visited.add(dep)
                stack.append((dep, iter(self._deps[dep])))
                break
            else:
                stack.pop()
        return None

    def get_transitive_dependencies(self, feature_id: str) -> set[str]:
        """Every feature reachable through dependencies, excluding feature_id."""
        if feature_id not in self.graph:
            return set()
        return nx.descendants(self.graph, feature_id)

    def get_reverse_dependencies(self, feature_id: str) -> set[str]:
        """Every feature that depends on feature_id directly or transitively."""
        if feature_id not in self.graph:
            return set()
        return nx.ancestors(self.graph, feature_id)

    def topological_order(self, feature_ids: Iterable[str] | None = None) -> list[str]:
        """Dependencies-first ordering of feature_ids (default: whole catalog).

        Only edges between members of feature_ids are considered. A member
        already in progress is treated as satisfied, which breaks cycles.
        """
        order_in = list(dict.fromkeys(feature_ids)) if feature_ids is not None else list(self._deps)
        scope = set(order_in)
        placed: set[str] = set()
        in_progress: set[str] = set()
        order: list[str] = []

        for start in order_in:
            if start in placed:
                continue
            in_progress.add(start)
            stack = [(start, iter(self._deps.get(start, ())))]
            while stack:
                node, pending = stack[-1]
                for dep in pending:
                    if dep not in scope or dep in placed or dep in in_progress:
                        continue
                    in_progress.add(dep)
                    stack.append((dep, iter(self._deps.get(dep, ()))))
                    break
                else:
                    stack.pop()
                    in_progress.discard(node)
                    placed.add(node)
                    order.append(node)
        return order

    def find_cycles(self, feature_ids: Iterable[str] | None = None) -> list[list[str]]:
        """Dependency cycles among feature_ids (default: whole catalog).

        Three-colour DFS: white = unvisited, gray = on the current path,
        black = finished. Each back edge to a gray node yields one cycle,
        reported as its member path with the first member repeated at the end.
        """
        order_in = list(dict.fromkeys(feature_ids)) if feature_ids is not None else list(self._deps)
        scope = set(order_in)

        def neighbours(nid: str) -> list[str]:
            return [d for d in self._deps.get(nid, ()) if d in scope]

        colour: dict[str, int] = {}
        cycles: list[list[str]] = []
        for start in order_in:
            if colour.get(start, _WHITE) != _WHITE:
                continue
            colour[start] = _GRAY
            path = [start]
            stack = [(start, iter(neighbours(start)))]
            while stack:
                node, pending = stack[-1]
                for dep in pending:
                    state = colour.get(dep, _WHITE)
                    if state == _WHITE:
                        colour[dep] = _GRAY
                        path.append(dep)
                        stack.append((dep, iter(neighbours(dep))))
                        break
                    if state == _GRAY:
                        cycles.append(path[path.index(dep):] + [dep])
                else:
                    stack.pop()
                    path.pop()
                    colour[node] = _BLACK
        return cycles
