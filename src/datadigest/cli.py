"""Command-line entry point.

Usage:
    datadigest --config run.json
    echo '{"operation": "aggregate"}' | datadigest --config -
    datadigest --config-json '{"operation": "transform", "batch_size": 5}'
    datadigest --data values.json --operation analyze --audit
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
from pathlib import Path
import sys
from typing import Any

from datadigest.config import print_config_audit, resolve_config
from datadigest.core.types import InitialCommand
from datadigest.exceptions import ConfigurationError, DataDigestError
from datadigest.executor import create_executor
from datadigest.pipeline.source_handler import load_dataset_json

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datadigest",
        description="Analyze, transform or aggregate a numeric dataset",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--config", metavar="PATH", help="JSON config file, or '-' to read stdin"
    )
    source.add_argument("--config-json", metavar="TEXT", help="Inline JSON config")
    parser.add_argument(
        "--data",
        metavar="PATH",
        help="JSON array of numbers to process (default: built-in sample data)",
    )
    parser.add_argument(
        "--operation", help="Override the operation (analyze, transform, aggregate)"
    )
    parser.add_argument("--batch-size", type=int, help="Override the batch size")
    parser.add_argument("--user-id", type=int, help="Override the user id")
    parser.add_argument(
        "--debug", action="store_true", default=None, help="Enable debug mode"
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        help="Print where each configuration value came from (to stderr)",
    )
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation (default: 2)"
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides = {
        "operation": args.operation,
        "batch_size": args.batch_size,
        "user_id": args.user_id,
        "debug": args.debug,
    }
    return {k: v for k, v in overrides.items() if v is not None}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config_json = args.config_json
        config_file = args.config
        if config_file == "-":
            config_json, config_file = sys.stdin.read(), None
        resolved = resolve_config(
            _overrides(args), config_file=config_file, config_json=config_json
        )
    except ConfigurationError as e:
        print(f"datadigest: {e}", file=sys.stderr)  # noqa: T201
        return 1

    logging.basicConfig(
        level=logging.INFO if resolved.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.audit:
        print_config_audit(resolved, file=sys.stderr)

    try:
        dataset = None
        if args.data:
            try:
                text = Path(args.data).read_text(encoding="utf-8")
            except OSError as e:
                raise DataDigestError(f"Failed to read dataset {args.data}: {e}") from e
            dataset = load_dataset_json(text)

        config = resolved.to_frozen()
        envelope = create_executor(config).execute(
            InitialCommand(config=config, dataset=dataset)
        )
    except DataDigestError as e:
        print(f"datadigest: {e}", file=sys.stderr)  # noqa: T201
        return 1

    print(json.dumps(envelope, indent=args.indent))  # noqa: T201
    return 0
