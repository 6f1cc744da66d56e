"""Command-line interface for querying host facts."""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config import FactOptions, apply_env, load_config
from .facts.collection import FactCollection
from .facts.manager import FactManager
from .logging import configure_logger


def format_value(value: Any) -> str:
    """Format a single fact value for text output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, sort_keys=True)
    return str(value)


def render(collection: FactCollection, as_json: bool = False) -> str:
    """Render a whole collection."""
    if as_json:
        return json.dumps(collection, indent=2, sort_keys=True)
    return "\n".join(
        f"{name} => {format_value(collection[name])}" for name in sorted(collection)
    )


def render_values(values: dict[str, Any], as_json: bool = False) -> str:
    """Render query results keyed by query."""
    queries = list(values)
    if as_json:
        return json.dumps(values, indent=2, sort_keys=True)
    if len(queries) == 1:
        return format_value(values[queries[0]])
    return "\n".join(f"{query} => {format_value(value)}" for query, value in values.items())


def build_options(args: argparse.Namespace) -> FactOptions:
    """Options from the config file, then the environment, then flags."""
    options = apply_env(load_config(args.config))

    changes: dict[str, Any] = {}
    if args.show_legacy:
        changes["show_legacy"] = True
    if args.external_dir:
        changes["external_dirs"] = [Path(d).expanduser() for d in args.external_dir]
    if args.log_dir:
        changes["log_dir"] = Path(args.log_dir).expanduser()

    return replace(options, **changes) if changes else options


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the hostfacts CLI."""
    parser = argparse.ArgumentParser(
        prog="hostfacts",
        description="Query structured facts about this host",
    )
    parser.add_argument(
        "queries",
        nargs="*",
        metavar="QUERY",
        help="Dotted fact queries, e.g. os.release.major or 'my.fact.\"dotted.key\"'",
    )
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Print JSON",
    )
    parser.add_argument(
        "--show-legacy",
        action="store_true",
        help="Include legacy facts in the output",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if a queried fact has no value",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to config.json (default ~/.hostfacts/config.json)",
    )
    parser.add_argument(
        "--external-dir",
        action="append",
        help="Directory holding external facts (may be repeated)",
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for the JSONL log",
    )
    return parser


async def run(args: argparse.Namespace, manager: FactManager | None = None) -> int:
    """Resolve the requested facts and print them."""
    if manager is None:
        options = build_options(args)
        logger = configure_logger(options.log_dir, max_size_mb=options.log_max_size_mb)
        manager = FactManager(options, logger=logger)

    if not args.queries:
        collection = await manager.collect()
        print(render(collection, as_json=args.json))
        return 0

    values = await manager.query_values(args.queries)
    print(render_values(values, as_json=args.json))

    if args.strict and any(value is None for value in values.values()):
        return 1
    return 0


def run_cli(argv: list[str] | None = None) -> int:
    """Run the CLI with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(run_cli())
