"""CLI tool for gating a feature selection against a catalog.

Usage:
    python3 scripts/check_selection.py --catalog features.yaml --features auth orm
    python3 scripts/check_selection.py --catalog features.yaml --features auth --mode installation
    python3 scripts/check_selection.py --catalog features.yaml --features auth --config engine.yaml --text
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Run selection gate CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code: 0 on APPROVED/APPROVED_WITH_WARNINGS,
                   1 on BLOCKED,
                   2 on error.
    """
    parser = argparse.ArgumentParser(
        description="Validate a feature selection for removal or installation."
    )
    parser.add_argument(
        "--catalog",
        required=True,
        help="Path to the feature catalog (YAML or JSON).",
    )
    parser.add_argument(
        "--features",
        nargs="*",
        default=[],
        help="Feature ids to remove or install.",
    )
    parser.add_argument(
        "--mode",
        choices=["removal", "installation"],
        default="removal",
        help="Workflow to gate (default: removal).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an engine config YAML (default: built-in thresholds).",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print a human-readable validation summary instead of JSON.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        from feature_engine.analysis.formatting import format_validation
        from feature_engine.analysis.gate import GateStatus, SelectionGate
        from feature_engine.catalog.loader import load_catalog
        from feature_engine.config import load_config

        catalog = load_catalog(Path(args.catalog))
        config = load_config(Path(args.config) if args.config else None)
        gate = SelectionGate(catalog, config)

        if args.mode == "installation":
            result = asyncio.run(gate.assess_installation(args.features))
        else:
            result = asyncio.run(gate.assess_removal(args.features))

        if args.text:
            print(f"{result.status.value}: {result.rationale}")
            print(format_validation(result.validation))
        else:
            print(result.model_dump_json(indent=2))

        if result.status == GateStatus.BLOCKED:
            return 1
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
