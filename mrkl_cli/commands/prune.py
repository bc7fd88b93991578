"""
CLI Prune Command

Prune a tree to a set of kept items and check it still verifies.

Usage:
    mrkl prune items.txt --keep ITEM [--keep ITEM ...] [--json] [--show]
"""

from __future__ import annotations

import json
from argparse import Namespace

from mrkl.schemas.errors import ErrorCodes
from mrkl_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_tree,
)


def prune_cmd(args: Namespace) -> int:
    """Prune, then report pruned validation and whether the root survived."""
    tree = build_tree(args)
    original_root = tree.root_digest

    pruned = tree.prune(args.keep)
    result = tree.validate_pruned()
    root_preserved = tree.root_digest == original_root

    errors: list[str] = []
    if not pruned:
        errors.append("prune refused")
    if not root_preserved:
        errors.append(ErrorCodes.ROOT_MISMATCH)
    if not result.is_valid:
        errors.append(f"{result.status.value}: {result.reason}")

    if args.json:
        print(json.dumps(
            {
                "pruned": pruned,
                "root_digest": tree.root_digest,
                "root_preserved": root_preserved,
                "validation": result.model_dump(mode="json"),
                "remaining": tree.leaves(),
                "errors": errors,
            },
            indent=2,
        ))
    else:
        print(f"pruned: {str(pruned).lower()}")
        print(f"root_digest: {tree.root_digest}")
        print(f"root_preserved: {str(root_preserved).lower()}")
        print(f"validation: {result.status.value}")
        print(f"remaining: {', '.join(tree.leaves())}")
        for err in errors:
            print(f"  ✗ {err}")
        if args.show:
            print(tree.render())

    return EXIT_SUCCESS if not errors else EXIT_VERIFICATION_FAILED
