"""
Merkle Tree Search
O(log n) membership test routed by the per-node bounds.

Because leaves are sorted and each node records the largest item under
each child, a query only ever walks one root-to-leaf path.
"""
from __future__ import annotations

from typing import Any, Optional

from mrkl.merkle.node import Branch, Empty, Leaf, MerkleBranch, MerkleNode, Partial
from mrkl.schemas.errors import PrunedRegionException


def route(node: MerkleNode, item: Any) -> Optional[tuple[MerkleBranch, bool]]:
    """
    Pick the child of ``node`` that could hold ``item``.

    Returns:
        (child, went_left), or None when ``item`` is larger than
        everything under ``node``
    """
    if item <= node.left_bound:
        return node.left, True
    if not isinstance(node.right, Empty) and item <= node.right_bound:
        return node.right, False
    return None


def contains(node: MerkleNode, item: Any) -> bool:
    """
    Report whether ``item`` is one of the tree's leaves.

    Args:
        node: Root of the tree
        item: Item to look for (compared by order and equality, not digest)

    Returns:
        True if a leaf holds an item equal to ``item``

    Raises:
        PrunedRegionException: If the search path enters a pruned branch.
            After pruning, an absent item and a pruned one look the same,
            so no answer is given.
    """
    current = node
    while True:
        step = route(current, item)
        if step is None:
            return False

        branch, _ = step
        if isinstance(branch, Branch):
            current = branch.node
        elif isinstance(branch, Leaf):
            return branch.item == item
        elif isinstance(branch, Partial):
            raise PrunedRegionException(partial_digest=branch.digest)
        else:
            return False


__all__ = [
    "route",
    "contains",
]
