"""
Merkle Tree Builder
Bottom-up, level-synchronous construction of a tree from a complete item set.

Construction Rules (Hard Contracts):
1. Items are sorted ascending by their own order before building
2. Leaf digest: H(item) via hash_item
3. Fringe node: H(h_left || h_right), or H(h_left) with an Empty right child
4. Internal node: H(left.root || right.root), or H(left.root) with an Empty right child
5. Odd rows leave the last node unpaired (no duplication)
6. Each level halves the row, rounding up, until one node remains
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from mrkl.crypto.hashing import hash_concat, hash_item, hash_single
from mrkl.merkle.node import EMPTY, Branch, Leaf, MerkleNode
from mrkl.schemas.errors import ConstructionException


logger = logging.getLogger(__name__)


def make_leaf(item: Any) -> Leaf:
    """Wrap an item with its content digest."""
    return Leaf(item=item, digest=hash_item(item))


def build_fringe_node(items: Sequence[Any]) -> MerkleNode:
    """
    Build a height-0 node from one or two items.

    Args:
        items: The next one or two items of the sorted row

    Returns:
        Node whose children are leaves (or a leaf and Empty)
    """
    left = make_leaf(items[0])

    if len(items) > 1:
        right = make_leaf(items[1])
        return MerkleNode(
            left=left,
            right=right,
            root_digest=hash_concat(left.digest, right.digest),
            height=0,
            left_bound=left.item,
            right_bound=right.item,
        )

    return MerkleNode(
        left=left,
        right=EMPTY,
        root_digest=hash_single(left.digest),
        height=0,
        left_bound=left.item,
    )


def build_internal_node(children: Sequence[MerkleNode], height: int) -> MerkleNode:
    """
    Build a node at ``height`` from one or two nodes of the row below.

    Args:
        children: One or two nodes of height ``height - 1``
        height: Height of the node being built

    Returns:
        Node whose children are branches (or a branch and Empty)
    """
    left_node = children[0]

    if len(children) > 1:
        right_node = children[1]
        return MerkleNode(
            left=Branch(left_node),
            right=Branch(right_node),
            root_digest=hash_concat(left_node.root_digest, right_node.root_digest),
            height=height,
            left_bound=left_node.max_item,
            right_bound=right_node.max_item,
        )

    return MerkleNode(
        left=Branch(left_node),
        right=EMPTY,
        root_digest=hash_single(left_node.root_digest),
        height=height,
        left_bound=left_node.max_item,
    )


def construct(items: Iterable[Any]) -> MerkleNode:
    """
    Build a Merkle tree from a complete set of items.

    Algorithm:
    1. Sort the items
    2. Pair items from the front into fringe nodes (height 0)
    3. Pair nodes from the front into the next level, repeating
       until a single node remains

    Example: [x, y, z] builds

              H(H(h(x)||h(y)) || H(h(z)))
                 /                \\
           H(h(x)||h(y))        H(h(z))
              /    \\              |
           h(x)   h(y)          h(z)

    Args:
        items: Items to commit to. Any iterable; consumed once.

    Returns:
        The root node

    Raises:
        ConstructionException: If there are no items, or they cannot be
            ordered against each other
        CanonicalizationException: If an item has no content digest
    """
    data = list(items)

    if len(data) == 0:
        raise ConstructionException(
            "Not enough data to construct Merkle tree: at least one item is required",
            item_count=0,
        )

    try:
        data.sort()
    except TypeError as e:
        raise ConstructionException(
            f"Items must be mutually orderable: {e}",
            item_count=len(data),
        ) from e

    row: list[MerkleNode] = [
        build_fringe_node(data[i:i + 2]) for i in range(0, len(data), 2)
    ]

    height = 1
    while len(row) > 1:
        row = [
            build_internal_node(row[i:i + 2], height)
            for i in range(0, len(row), 2)
        ]
        height += 1

    root = row[0]
    logger.debug(
        f"Constructed Merkle tree over {len(data)} items "
        f"(root height {root.height}, digest {root.root_digest[:12]})"
    )
    return root


__all__ = [
    "make_leaf",
    "build_fringe_node",
    "build_internal_node",
    "construct",
]
