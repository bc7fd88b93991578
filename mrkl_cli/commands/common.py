"""
Shared helpers for CLI commands: reading items and building trees.
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from mrkl.config.runtime import RuntimeConfig
from mrkl.merkle import MerkleTree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def read_items(source: str) -> list[str]:
    """
    Read items one per line from a file, or from stdin when ``source`` is "-".

    Blank lines are skipped; other whitespace is part of the item.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Items file not found: {path}")
        text = path.read_text(encoding="utf-8")

    return [line for line in text.splitlines() if line]


def build_tree(args: Namespace) -> MerkleTree:
    """Build a tree from ``args.items`` using the loaded runtime config."""
    config: RuntimeConfig = args.runtime_config
    items = read_items(args.items)
    logger.info(f"Building tree from {len(items)} items")
    return MerkleTree.construct(items, config=config.tree)
