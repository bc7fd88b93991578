"""
Merkle Tree Validation
Recursive consistency checking of node digests, heights and bounds.

Two modes:
- strict: every branch must be present; any pruned content is InvalidTree
- pruned: a node may have one Partial child, whose digest is taken on trust
  and combined with the fully re-derived other side

Result precedence: when both a digest mismatch and a structural problem are
found at the same level, InvalidHash is reported. A digest mismatch means
tampering; a structural mismatch may only mean pruned data was skipped.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from mrkl.config.runtime import TreeConfig
from mrkl.crypto.hashing import hash_concat, hash_item, hash_single
from mrkl.merkle.node import (
    Branch,
    Empty,
    Leaf,
    MerkleNode,
    Partial,
    branch_kind,
    subtree_min,
)
from mrkl.schemas.errors import PrunedRegionException, TreeInvariantException
from mrkl.schemas.validation import ValidationResult


logger = logging.getLogger(__name__)


def _worse(first: ValidationResult, second: ValidationResult) -> ValidationResult:
    """Pick the result to propagate from two sibling results."""
    if first.is_invalid_hash:
        return first
    if second.is_invalid_hash:
        return second
    if not first.is_valid:
        return first
    return second


class TreeValidator:
    """
    Validates a tree rooted at a MerkleNode.

    Example:
        >>> validator = TreeValidator(strict=True)
        >>> validator.validate(root).is_valid
        True
    """

    def __init__(self, strict: bool = True, config: Optional[TreeConfig] = None) -> None:
        self.strict = strict
        self.config = config or TreeConfig()

    def validate(self, node: MerkleNode) -> ValidationResult:
        """
        Validate the whole tree under ``node``.

        Returns:
            ValidationResult

        Raises:
            TreeInvariantException: Only with ``fail_fast`` enabled, on the
                first invalid node
        """
        result = self._validate_node(node)
        mode = "strict" if self.strict else "pruned"
        logger.debug(f"{mode} validation of {node.root_digest[:12]}: {result.status.value}")
        return result

    # ------------------------------------------------------------------
    # Failure reporting
    # ------------------------------------------------------------------

    def _fail(self, node: MerkleNode, result: ValidationResult) -> ValidationResult:
        logger.debug(
            f"{result.status.value} at height {node.height} "
            f"({node.root_digest[:12]}): {result.reason}"
        )
        if self.config.fail_fast:
            raise TreeInvariantException(result.reason or "invalid tree", result=result)
        return result

    def _invalid_hash(self, node: MerkleNode, reason: str) -> ValidationResult:
        return self._fail(node, ValidationResult.invalid_hash(reason))

    def _invalid_tree(self, node: MerkleNode, reason: str) -> ValidationResult:
        return self._fail(node, ValidationResult.invalid_tree(reason))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _validate_node(self, node: MerkleNode) -> ValidationResult:
        left, right = node.left, node.right

        if isinstance(left, Partial) or isinstance(right, Partial):
            return self._validate_partial_node(node)

        if isinstance(left, Branch) and isinstance(right, Branch):
            left_result = self._validate_node(left.node)
            right_result = self._validate_node(right.node)
            if left_result.is_valid and right_result.is_valid:
                return self._validate_internal_node(node, left.node, right.node)
            return _worse(left_result, right_result)

        if isinstance(left, Branch) and isinstance(right, Empty):
            result = self._validate_node(left.node)
            if not result.is_valid:
                return result
            return self._validate_internal_node(node, left.node, None)

        if isinstance(left, Leaf) and isinstance(right, Leaf):
            return self._validate_fringe_node(node, left, right)

        if isinstance(left, Leaf) and isinstance(right, Empty):
            return self._validate_fringe_node(node, left, None)

        return self._invalid_tree(
            node,
            f"Malformed tree: {branch_kind(left)} child paired with {branch_kind(right)} child",
        )

    # ------------------------------------------------------------------
    # Node checks
    # ------------------------------------------------------------------

    def _validate_internal_node(
        self,
        node: MerkleNode,
        left_node: MerkleNode,
        right_node: Optional[MerkleNode],
    ) -> ValidationResult:
        """Check an internal node against its already-validated children."""
        if right_node is None:
            expected = hash_single(left_node.root_digest)
        else:
            expected = hash_concat(left_node.root_digest, right_node.root_digest)

        if expected != node.root_digest:
            return self._invalid_hash(node, "An internal node has an unexpected root digest")

        if node.height != left_node.height + 1 or (
            right_node is not None and node.height != right_node.height + 1
        ):
            return self._invalid_tree(
                node, "An internal node has height which differs from 1 + (child height)"
            )

        if not self.config.check_ordering:
            return ValidationResult.valid()

        if node.left_bound != left_node.max_item:
            return self._invalid_tree(node, "Left bound does not match the left subtree")

        if right_node is None:
            if node.right_bound is not None:
                return self._invalid_tree(node, "A node without a right child has a right bound")
            return ValidationResult.valid()

        if node.right_bound != right_node.max_item:
            return self._invalid_tree(node, "Right bound does not match the right subtree")

        try:
            right_min = subtree_min(right_node.left)
        except (PrunedRegionException, LookupError):
            # Order across a pruned edge cannot be checked
            return ValidationResult.valid()

        if node.left_bound > right_min:
            return self._invalid_tree(node, "Items are out of order across an internal node")

        return ValidationResult.valid()

    def _leaf_digest_ok(self, leaf: Leaf) -> bool:
        if not self.config.check_leaf_digests:
            return True
        return hash_item(leaf.item) == leaf.digest

    def _validate_fringe_node(
        self,
        node: MerkleNode,
        left: Leaf,
        right: Optional[Leaf],
    ) -> ValidationResult:
        """Check a height-0 node against its leaves."""
        if not self._leaf_digest_ok(left) or (right is not None and not self._leaf_digest_ok(right)):
            return self._invalid_hash(node, "A leaf digest does not match its item")

        if right is None:
            expected = hash_single(left.digest)
        else:
            expected = hash_concat(left.digest, right.digest)

        if expected != node.root_digest:
            return self._invalid_hash(node, "A fringe node has an unexpected root digest")

        if node.height != 0:
            return self._invalid_tree(node, "A fringe node has nonzero height")

        if not self.config.check_ordering:
            return ValidationResult.valid()

        right_item = right.item if right is not None else None
        if node.left_bound != left.item or node.right_bound != right_item:
            return self._invalid_tree(node, "A fringe node's bounds do not match its leaves")

        if right is not None and left.item > right.item:
            return self._invalid_tree(node, "Leaves are out of order")

        return ValidationResult.valid()

    def _validate_partial_node(self, node: MerkleNode) -> ValidationResult:
        """Check a node with at least one pruned child."""
        left, right = node.left, node.right

        if self.strict:
            return self._invalid_tree(node, "Unexpected pruned content in strict validation")

        if isinstance(left, Partial) and isinstance(right, Partial):
            return self._invalid_tree(
                node, "A node has two pruned children; its digest cannot be re-derived"
            )

        if isinstance(left, Partial):
            partial, other, partial_on_left = left, right, True
        else:
            partial, other, partial_on_left = right, left, False

        if isinstance(other, Branch):
            result = self._validate_node(other.node)
            if not result.is_valid:
                return result
            other_digest = other.node.root_digest
            expected_height = other.node.height + 1
            other_max: Any = other.node.max_item
        elif isinstance(other, Leaf):
            if not self._leaf_digest_ok(other):
                return self._invalid_hash(node, "A leaf digest does not match its item")
            other_digest = other.digest
            expected_height = 0
            other_max = other.item
        else:
            return self._invalid_tree(
                node,
                f"A pruned child is paired with {branch_kind(other)}; nothing to re-derive it against",
            )

        if partial_on_left:
            expected = hash_concat(partial.digest, other_digest)
        else:
            expected = hash_concat(other_digest, partial.digest)

        if expected != node.root_digest:
            return self._invalid_hash(node, "A partially pruned node has an unexpected root digest")

        if node.height != expected_height:
            return self._invalid_tree(
                node, "A partially pruned node has height which differs from its surviving child"
            )

        if self.config.check_ordering:
            bound = node.right_bound if partial_on_left else node.left_bound
            if bound != other_max:
                return self._invalid_tree(node, "Bound does not match the surviving child")

        return ValidationResult.valid()


def validate_node(
    node: MerkleNode,
    strict: bool = True,
    config: Optional[TreeConfig] = None,
) -> ValidationResult:
    """
    Validate the tree rooted at ``node``.

    Args:
        node: Root of the tree
        strict: Reject any pruned content when True; accept one pruned
                child per node when False
        config: Validation options (defaults to TreeConfig())

    Returns:
        ValidationResult
    """
    return TreeValidator(strict=strict, config=config).validate(node)


__all__ = [
    "TreeValidator",
    "validate_node",
]
