"""Text rendering of dependency graphs.

The ASCII tree starts at each root (a feature with no dependencies) and
descends into the features that build on it. A feature already on the
current branch is printed as a ``(circular reference)`` leaf instead of
being expanded again, and a feature whose dependents were already expanded
elsewhere is printed as a ``(see above)`` leaf, so each feature is expanded
once per render.
"""

from __future__ import annotations

from feature_engine.graph.model import DependencyGraph


def visualize_ascii(graph: DependencyGraph) -> str:
    """Render graph as an indented tree, deterministic for a given graph."""
    lines: list[str] = ["Dependency Graph:", ""]
    expanded: set[str] = set()

    def render(start: str) -> None:
        stack: list[tuple[str, str, frozenset[str]]] = [(start, "", frozenset())]
        while stack:
            nid, prefix, branch = stack.pop()
            if nid in branch:
                lines.append(f"{prefix}├─ {nid} (circular reference)")
                continue
            children = [c for c in graph.nodes[nid].dependents if c in graph.nodes]
            if children and nid in expanded:
                lines.append(f"{prefix}├─ {nid} (see above)")
                continue
            lines.append(f"{prefix}├─ {nid}")
            expanded.add(nid)

            on_branch = branch | {nid}
            last = len(children) - 1
            for index in range(last, -1, -1):
                child_prefix = prefix + ("  " if index == last else "│ ")
                stack.append((children[index], child_prefix, on_branch))

    for root in graph.root_nodes:
        render(root)
    # Features reachable only through a cycle have no root above them.
    for nid in graph.nodes:
        if nid not in expanded:
            render(nid)

    return "\n".join(lines)


def summarize_graph(graph: DependencyGraph) -> str:
    """Multi-line summary of node, edge and depth counts."""
    stats = graph.stats()
    lines = [
        "Graph Summary:",
        f"  Total Nodes: {stats.node_count}",
        f"  Total Edges: {stats.edge_count}",
        f"  Root Nodes: {stats.root_count}",
        f"  Leaf Nodes: {stats.leaf_count}",
        f"  Dependencies: {stats.depends_count}",
        f"  Conflicts: {stats.conflicts_count}",
        f"  Connected Components: {stats.connected_components}",
        f"  Deepest Dependency Path: {stats.max_level}",
    ]
    if not stats.is_dag:
        lines.append("  Contains dependency cycles")
    if stats.dangling_count:
        lines.append(f"  Dangling References: {stats.dangling_count}")
        for fid, missing in graph.dangling.items():
            lines.append(f"    {fid} -> {', '.join(missing)}")
    return "\n".join(lines)
