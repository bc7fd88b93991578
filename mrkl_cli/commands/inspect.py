"""
CLI Inspect Commands

Usage:
    mrkl root items.txt [--json]
    mrkl show items.txt
    mrkl contains items.txt ITEM [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace
from dataclasses import asdict, dataclass

from mrkl_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_tree,
)


@dataclass
class TreeSummary:
    """Summary of a built tree for CLI output."""
    root_digest: str
    height: int
    item_count: int
    status: str
    reason: str | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        if self.reason is None:
            del d["reason"]
        return d


def root_cmd(args: Namespace) -> int:
    """Print the root digest, height and strict validation result."""
    tree = build_tree(args)
    result = tree.validate()

    summary = TreeSummary(
        root_digest=tree.root_digest,
        height=tree.height,
        item_count=tree.item_count,
        status=result.status.value,
        reason=result.reason,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"root_digest: {summary.root_digest}")
        print(f"height: {summary.height}")
        print(f"item_count: {summary.item_count}")
        print(f"validation: {summary.status}")
        if summary.reason:
            print(f"reason: {summary.reason}")

    return EXIT_SUCCESS if result.is_valid else EXIT_VERIFICATION_FAILED


def show_cmd(args: Namespace) -> int:
    """Draw the tree."""
    tree = build_tree(args)
    print(tree.render())
    return EXIT_SUCCESS


def contains_cmd(args: Namespace) -> int:
    """Report whether an item is in the tree (exit 2 when it is not)."""
    tree = build_tree(args)
    found = tree.contains(args.item)

    if args.json:
        print(json.dumps({"item": args.item, "contains": found}))
    else:
        print(f"{args.item!r}: {'present' if found else 'absent'}")

    return EXIT_SUCCESS if found else EXIT_VERIFICATION_FAILED
