"""
Merkle Tree
The object callers hold: a root node plus the operations defined over it.

Usage:
    from mrkl.merkle import MerkleTree

    tree = MerkleTree.construct(["sally", "alice", "ronnie", "mj", "john john"])
    assert tree.validate().is_valid
    assert tree.contains("alice")

    proof = tree.generate_proof("mj")
    assert proof.verify("mj")

    tree.prune(["alice"])
    assert tree.validate_pruned().is_valid
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from mrkl.config.runtime import TreeConfig, get_default_config
from mrkl.crypto.hashing import Digest
from mrkl.merkle import builder, pruning, search, validation
from mrkl.merkle.node import (
    Branch,
    Empty,
    Leaf,
    MerkleBranch,
    MerkleNode,
    Partial,
    has_partial,
    iter_leaves,
)
from mrkl.merkle.proofs import MerkleProof, generate_proof
from mrkl.schemas.validation import ValidationResult


DIGEST_DISPLAY_LENGTH = 12


class MerkleTree:
    """
    A Merkle tree built once from a complete item set.

    Read-only apart from prune(), which is destructive and irreversible.
    Not safe for concurrent use while pruning.
    """

    def __init__(
        self,
        root: MerkleNode,
        item_count: int,
        config: Optional[TreeConfig] = None,
    ) -> None:
        self.root = root
        self.item_count = item_count
        self.config = config or get_default_config().tree

    @classmethod
    def construct(
        cls,
        items: Iterable[Any],
        config: Optional[TreeConfig] = None,
    ) -> "MerkleTree":
        """
        Build a tree from ``items``.

        Raises:
            ConstructionException: If ``items`` is empty or unorderable
        """
        data = list(items)
        return cls(builder.construct(data), item_count=len(data), config=config)

    @property
    def root_digest(self) -> Digest:
        return self.root.root_digest

    @property
    def height(self) -> int:
        """
        Number of hashing levels between an item digest and the root.

        Equals ceil(log2(n)) for n >= 2 items, and 1 for a single item.
        Also the length of every proof generated from this tree.
        """
        return self.root.height + 1

    @property
    def is_pruned(self) -> bool:
        return has_partial(self.root)

    def validate(self) -> ValidationResult:
        """Strict validation; any pruned content is InvalidTree."""
        return validation.validate_node(self.root, strict=True, config=self.config)

    def validate_pruned(self) -> ValidationResult:
        """Validation that accepts one pruned child per node."""
        return validation.validate_node(self.root, strict=False, config=self.config)

    def contains(self, item: Any) -> bool:
        """
        Membership test in O(log n).

        Raises:
            PrunedRegionException: If the answer was pruned away
        """
        return search.contains(self.root, item)

    def prune(self, to_keep: Iterable[Any]) -> bool:
        """Destructively prune to the paths of ``to_keep``; False if refused."""
        return pruning.prune(self.root, to_keep, config=self.config)

    def generate_proof(self, item: Any) -> Optional[MerkleProof]:
        """Inclusion proof for ``item``, or None if it is not provable."""
        return generate_proof(self.root, item)

    def leaves(self) -> list[Any]:
        """Surviving items, in order."""
        return [leaf.item for leaf in iter_leaves(self.root)]

    def render(self) -> str:
        """Multi-line drawing of the tree, one line per node or leaf."""
        lines = [_describe_node(self.root)]
        _render_children(self.root, "", lines)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"MerkleTree(root_digest={self.root_digest[:DIGEST_DISPLAY_LENGTH]!r}, "
            f"height={self.height}, item_count={self.item_count})"
        )


def _short(digest: Digest) -> str:
    return digest[:DIGEST_DISPLAY_LENGTH]


def _describe_node(node: MerkleNode) -> str:
    return f"node h={node.height} {_short(node.root_digest)}"


def _describe_branch(branch: MerkleBranch) -> str:
    if isinstance(branch, Branch):
        return _describe_node(branch.node)
    if isinstance(branch, Leaf):
        return f"leaf {branch.item!r} {_short(branch.digest)}"
    if isinstance(branch, Partial):
        return f"pruned {_short(branch.digest)}"
    return "empty"


def _render_children(node: MerkleNode, prefix: str, lines: list[str]) -> None:
    children = [node.left] if isinstance(node.right, Empty) else [node.left, node.right]
    for index, child in enumerate(children):
        last = index == len(children) - 1
        lines.append(f"{prefix}{'└── ' if last else '├── '}{_describe_branch(child)}")
        if isinstance(child, Branch):
            _render_children(child.node, prefix + ("    " if last else "│   "), lines)


__all__ = ["MerkleTree"]
