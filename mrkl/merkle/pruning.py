"""
Merkle Tree Pruning
Destructive, in-place removal of every subtree that cannot hold a kept item.

A removed subtree is replaced by Partial(digest), where digest is exactly the
value the subtree carried. No surviving node's digest, height or bounds
change, so the root digest is preserved and pruned validation can re-derive
every surviving digest.

Pruning does not check that the kept items are really in the tree. Keeping
an item that falls between two leaves collapses both of them, leaving a node
with two pruned children that pruned validation reports as InvalidTree.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Optional

from mrkl.config.runtime import TreeConfig
from mrkl.merkle.node import (
    Branch,
    Empty,
    Leaf,
    MerkleBranch,
    MerkleNode,
    Partial,
    branch_digest,
    subtree_min,
)
from mrkl.merkle.validation import validate_node
from mrkl.schemas.errors import PrunedRegionException


logger = logging.getLogger(__name__)


class _Pruner:
    """Walks the tree once, collapsing branches with nothing to keep."""

    def __init__(self) -> None:
        self.collapsed = 0

    def prune_node(self, node: MerkleNode, keep: list[Any]) -> None:
        """
        Prune both children of ``node``.

        ``keep`` only holds items within [min(node), max(node)]; each side
        receives the subset that falls within its own range.
        """
        left_keep = [k for k in keep if k <= node.left_bound]

        if isinstance(node.right, Empty):
            node.left = self.prune_branch(node.left, left_keep)
            return

        try:
            right_min = subtree_min(node.right)
        except (PrunedRegionException, LookupError):
            # Minimum unknown: keep the right side as it is
            node.left = self.prune_branch(node.left, left_keep)
            return

        right_keep = [k for k in keep if right_min <= k <= node.right_bound]

        node.left = self.prune_branch(node.left, left_keep)
        node.right = self.prune_branch(node.right, right_keep)

    def prune_branch(self, branch: MerkleBranch, keep: list[Any]) -> MerkleBranch:
        if not keep and isinstance(branch, (Branch, Leaf)):
            self.collapsed += 1
            return Partial(branch_digest(branch))
        if isinstance(branch, Branch):
            self.prune_node(branch.node, keep)
        return branch


def prune(
    node: MerkleNode,
    to_keep: Iterable[Any],
    config: Optional[TreeConfig] = None,
) -> bool:
    """
    Prune the tree under ``node`` down to the paths of ``to_keep``.

    Preconditions (checked, failing softly):
    - ``to_keep`` is not empty
    - the tree passes strict validation (so it is not already pruned)
    - at least one kept item lies within the tree's item range

    Args:
        node: Root of the tree; modified in place
        to_keep: Items whose leaves must survive
        config: Validation options used for the precondition check

    Returns:
        True if the tree was pruned, False if a precondition failed
    """
    keep = list(to_keep)
    if not keep:
        logger.warning("Refusing to prune: no items to keep")
        return False

    # Precondition check must return, not raise
    check_config = dataclasses.replace(config or TreeConfig(), fail_fast=False)
    result = validate_node(node, strict=True, config=check_config)
    if not result.is_valid:
        logger.warning(f"Refusing to prune a tree that is not strictly valid: {result.reason}")
        return False

    lowest = subtree_min(node.left)
    keep = [k for k in keep if lowest <= k <= node.max_item]
    if not keep:
        logger.warning("Refusing to prune: no kept item lies within the tree's range")
        return False

    pruner = _Pruner()
    pruner.prune_node(node, keep)

    logger.info(f"Pruned {pruner.collapsed} branches, keeping paths for {len(keep)} items")
    return True


__all__ = ["prune"]
