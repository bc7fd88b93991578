"""
Merkle Tree Node Model
Recursive node type and the four kinds of child a node can hold.

A node owns its two children exclusively; there is no sharing and no
back-reference. Children are one of:

- Branch:  another MerkleNode
- Leaf:    an item and its precomputed digest
- Partial: only the digest of a subtree that has been pruned away
- Empty:   explicit "no right child" marker for the unpaired element of an odd row

Every function that inspects children dispatches over all four kinds.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from mrkl.crypto.hashing import Digest
from mrkl.schemas.errors import PrunedRegionException


@dataclass
class Branch:
    """A child that is itself a subtree."""
    node: "MerkleNode"

    @property
    def digest(self) -> Digest:
        return self.node.root_digest


@dataclass(frozen=True)
class Leaf:
    """A child holding an original item and H(item)."""
    item: Any
    digest: Digest


@dataclass(frozen=True)
class Partial:
    """A pruned child. The subtree is gone; only its digest remains."""
    digest: Digest


@dataclass(frozen=True)
class Empty:
    """No child."""


MerkleBranch = Union[Branch, Leaf, Partial, Empty]

EMPTY = Empty()


@dataclass
class MerkleNode:
    """
    A node in a Merkle tree, which may be the root or an internal node.

    Attributes:
        left: Left child
        right: Right child (Empty when this node has a single child)
        root_digest: H(left || right), or H(left) when right is Empty
        height: 0 for fringe nodes whose children are leaves,
                child height + 1 otherwise
        left_bound: Largest item reachable through ``left``
        right_bound: Largest item reachable through ``right``; None when
                     ``right`` is Empty
    """
    left: MerkleBranch
    right: MerkleBranch
    root_digest: Digest
    height: int
    left_bound: Any
    right_bound: Any = None

    @property
    def max_item(self) -> Any:
        """Largest item under this node."""
        if isinstance(self.right, Empty):
            return self.left_bound
        return self.right_bound


def branch_kind(branch: MerkleBranch) -> str:
    """Lowercase kind name, for messages."""
    return type(branch).__name__.lower()


def branch_digest(branch: MerkleBranch) -> Optional[Digest]:
    """Digest carried by a child, or None for Empty."""
    if isinstance(branch, Branch):
        return branch.node.root_digest
    if isinstance(branch, (Leaf, Partial)):
        return branch.digest
    return None


def subtree_min(branch: MerkleBranch) -> Any:
    """
    Smallest item reachable through ``branch`` (its leftmost leaf).

    Raises:
        PrunedRegionException: If the leftmost path runs into a pruned branch
        LookupError: If the branch (or a left child on the path) is Empty
    """
    current = branch
    while True:
        if isinstance(current, Leaf):
            return current.item
        if isinstance(current, Branch):
            current = current.node.left
            continue
        if isinstance(current, Partial):
            raise PrunedRegionException(
                "minimum item lies in a pruned region",
                partial_digest=current.digest,
            )
        raise LookupError("empty branch has no minimum item")


def iter_leaves(node: MerkleNode) -> Iterator[Leaf]:
    """Yield surviving leaves left to right, skipping pruned regions."""
    for branch in (node.left, node.right):
        if isinstance(branch, Leaf):
            yield branch
        elif isinstance(branch, Branch):
            yield from iter_leaves(branch.node)


def has_partial(node: MerkleNode) -> bool:
    """True if any branch below ``node`` has been pruned."""
    for branch in (node.left, node.right):
        if isinstance(branch, Partial):
            return True
        if isinstance(branch, Branch) and has_partial(branch.node):
            return True
    return False


__all__ = [
    "Branch",
    "Leaf",
    "Partial",
    "Empty",
    "EMPTY",
    "MerkleBranch",
    "MerkleNode",
    "branch_kind",
    "branch_digest",
    "subtree_min",
    "iter_leaves",
    "has_partial",
]
