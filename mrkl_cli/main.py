"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Items are read one per line from a file (or "-" for stdin).

Usage:
    mrkl root <items> [--json]
    mrkl show <items>
    mrkl contains <items> <item> [--json]
    mrkl prove <items> <item> [--json]
    mrkl prune <items> --keep ITEM [--keep ITEM ...] [--show] [--json]

Environment Variables:
    MRKL_FAIL_FAST              Raise on the first invalid node (default: false)
    MRKL_CHECK_LEAF_DIGESTS     Recheck leaf digests during validation (default: true)
    MRKL_CHECK_ORDERING         Check bounds and item order (default: true)
    MRKL_LOG_LEVEL              Log level (default: INFO)
    MRKL_LOG_FILE               Optional log file
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from mrkl.config.runtime import RuntimeConfig
from mrkl.schemas.errors import MerkleException
from mrkl_cli import __version__
from mrkl_cli.commands import inspect, prove, prune
from mrkl_cli.commands.common import EXIT_RUNTIME_ERROR


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def load_config(path: Path | None) -> RuntimeConfig:
    """Load config from a YAML file if given, else from the environment."""
    if path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(path).with_env_overrides()


def _add_items_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "items",
        type=str,
        help="File with one item per line, or - for stdin",
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mrkl",
        description="Build, prove and prune sorted Merkle trees.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on error",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root digest and validate the tree",
    )
    _add_items_argument(root_parser)
    _add_json_argument(root_parser)
    root_parser.set_defaults(func=inspect.root_cmd)

    # --- show command ---
    show_parser = subparsers.add_parser(
        "show",
        help="Draw the tree",
    )
    _add_items_argument(show_parser)
    show_parser.set_defaults(func=inspect.show_cmd)

    # --- contains command ---
    contains_parser = subparsers.add_parser(
        "contains",
        help="Check whether an item is in the tree",
    )
    _add_items_argument(contains_parser)
    contains_parser.add_argument("item", type=str, help="Item to look up")
    _add_json_argument(contains_parser)
    contains_parser.set_defaults(func=inspect.contains_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate and check an inclusion proof",
    )
    _add_items_argument(prove_parser)
    prove_parser.add_argument("item", type=str, help="Item to prove")
    _add_json_argument(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- prune command ---
    prune_parser = subparsers.add_parser(
        "prune",
        help="Prune the tree to a set of kept items",
        description="Collapse every subtree holding no kept item to its digest.",
    )
    _add_items_argument(prune_parser)
    prune_parser.add_argument(
        "--keep", "-k",
        action="append",
        default=[],
        help="Item to keep (repeatable)",
    )
    prune_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Draw the pruned tree",
    )
    _add_json_argument(prune_parser)
    prune_parser.set_defaults(func=prune.prune_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, MerkleException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (OSError, MerkleException) as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
