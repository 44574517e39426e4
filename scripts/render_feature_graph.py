"""CLI tool for building and querying the feature dependency graph.

Usage:
    python3 scripts/render_feature_graph.py --catalog features.yaml --stats
    python3 scripts/render_feature_graph.py --catalog features.yaml --ascii --features api
    python3 scripts/render_feature_graph.py --catalog features.yaml --query transitive api
    python3 scripts/render_feature_graph.py --catalog features.yaml --path api database
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Run feature graph CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code: 0 on success, 1 on error.
    """
    parser = argparse.ArgumentParser(
        description="Build and query the feature dependency graph."
    )
    parser.add_argument(
        "--catalog",
        required=True,
        help="Path to the feature catalog (YAML or JSON).",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print graph statistics as JSON (default action).",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print the ASCII dependency tree and summary.",
    )
    parser.add_argument(
        "--features",
        nargs="*",
        default=None,
        help="Restrict --ascii/--stats to these features and their dependencies.",
    )
    parser.add_argument(
        "--query",
        nargs=2,
        metavar=("QUERY_TYPE", "FEATURE_ID"),
        help="Query the graph: 'transitive <id>' or 'reverse <id>'.",
    )
    parser.add_argument(
        "--path",
        nargs=2,
        metavar=("FROM", "TO"),
        help="Print a dependency path between two features.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    try:
        from feature_engine.catalog.loader import load_catalog
        from feature_engine.graph.builder import GraphBuilder
        from feature_engine.graph.render import summarize_graph, visualize_ascii
        from feature_engine.graph.traversal import TraversalEngine

        catalog = load_catalog(Path(args.catalog))

        if args.query:
            query_type, feature_id = args.query
            engine = TraversalEngine(catalog)
            if query_type == "transitive":
                result = sorted(engine.get_transitive_dependencies(feature_id))
            elif query_type == "reverse":
                result = sorted(engine.get_reverse_dependencies(feature_id))
            else:
                print(f"Unknown query type: {query_type}", file=sys.stderr)
                return 1
            print(json.dumps(result, indent=2))
            return 0

        if args.path:
            source, target = args.path
            print(json.dumps(TraversalEngine(catalog).get_dependency_path(source, target)))
            return 0

        builder = GraphBuilder(catalog)
        graph = builder.get_subgraph(args.features) if args.features else builder.create_graph()

        if args.ascii:
            print(visualize_ascii(graph))
            print()
            print(summarize_graph(graph))
        else:
            print(json.dumps(graph.stats().model_dump(), indent=2))

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
