"""
Merkle Inclusion Proofs
Generation and verification of sibling-digest paths from a leaf to the root.

Proof Rules (Hard Contracts):
1. Verification starts from H(item)
2. Steps are read leaf to root; at each step:
   - LEFT  (sibling was on the left):  running = H(sibling || running)
   - RIGHT (sibling was on the right): running = H(running || sibling)
   - LONE  (node had no right child):  running = H(running)
3. A proof is valid iff the final running digest equals its root digest
4. A proof has exactly one step per level above the item row, so its
   length equals MerkleTree.height

A proof can be checked with nothing but the item and the proof itself.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from mrkl.crypto.hashing import Digest, hash_concat, hash_item, hash_single
from mrkl.merkle.node import Branch, Empty, Leaf, MerkleNode, Partial, branch_digest
from mrkl.merkle.search import route


logger = logging.getLogger(__name__)


class StepSide(str, Enum):
    """Where the sibling sat relative to the path node."""
    LEFT = "left"
    RIGHT = "right"
    LONE = "lone"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of a proof path.

    Attributes:
        side: Position of the sibling
        digest: Sibling digest; empty for LONE steps
    """
    side: StepSide
    digest: Digest = ""

    def __post_init__(self) -> None:
        """Validate step structure."""
        if self.side is StepSide.LONE:
            if self.digest:
                raise ValueError("A lone proof step carries no sibling digest")
        elif not self.digest:
            raise ValueError(f"A {self.side.value} proof step needs a sibling digest")

    def apply(self, running: Digest) -> Digest:
        """Fold this step into the running digest."""
        if self.side is StepSide.LEFT:
            return hash_concat(self.digest, running)
        if self.side is StepSide.RIGHT:
            return hash_concat(running, self.digest)
        return hash_single(running)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single item.

    Attributes:
        steps: Proof steps ordered leaf to root
        root_digest: Root digest this proof claims to reach
    """
    steps: tuple[ProofStep, ...]
    root_digest: Digest

    def verify(self, item: Any) -> bool:
        """
        Check that ``item`` hashes up through ``steps`` to ``root_digest``.

        Returns:
            True if the recomputed root equals the claimed root
        """
        running = hash_item(item)
        for step in self.steps:
            running = step.apply(running)
        return running == self.root_digest

    def matches_shape(self, root_digest: Digest, height: int) -> bool:
        """
        Cheap check that this proof was generated against a given tree.

        Args:
            root_digest: The tree's root digest
            height: The tree's height (MerkleTree.height)

        Returns:
            True if the step count and root digest both match
        """
        return len(self.steps) == height and self.root_digest == root_digest

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, for handing the proof to another component."""
        return {
            "root_digest": self.root_digest,
            "steps": [
                {"side": step.side.value, "digest": step.digest}
                for step in self.steps
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """
        Rebuild a proof from ``to_dict`` output.

        Raises:
            ValueError: If a step side is unknown or a step is malformed
            KeyError: If a required field is missing
        """
        steps = tuple(
            ProofStep(side=StepSide(step["side"]), digest=step.get("digest", ""))
            for step in data["steps"]
        )
        return cls(steps=steps, root_digest=data["root_digest"])


def generate_proof(node: MerkleNode, item: Any) -> Optional[MerkleProof]:
    """
    Build the inclusion proof for ``item``.

    Follows the same bound routing as search, recording the sibling of each
    node on the way down, then reverses the path to leaf-to-root order.
    Pruned siblings still supply their digest.

    Args:
        node: Root of the tree
        item: Item to prove

    Returns:
        MerkleProof, or None if the item is absent or lies in a pruned region
    """
    path: list[ProofStep] = []
    current = node

    while True:
        step = route(current, item)
        if step is None:
            return None

        branch, went_left = step
        if went_left:
            if isinstance(current.right, Empty):
                path.append(ProofStep(StepSide.LONE))
            else:
                path.append(ProofStep(StepSide.RIGHT, branch_digest(current.right)))
        else:
            path.append(ProofStep(StepSide.LEFT, branch_digest(current.left)))

        if isinstance(branch, Branch):
            current = branch.node
        elif isinstance(branch, Leaf):
            if branch.item != item:
                return None
            path.reverse()
            return MerkleProof(steps=tuple(path), root_digest=node.root_digest)
        elif isinstance(branch, Partial):
            logger.debug(f"No proof for item under pruned branch {branch.digest[:12]}")
            return None
        else:
            return None


def verify_proof(proof: MerkleProof, item: Any, root_digest: Optional[Digest] = None) -> bool:
    """
    Verify ``proof`` for ``item``, optionally pinning the expected root.

    Args:
        proof: Proof to check
        item: Item the proof is for
        root_digest: If given, the proof must also claim this root

    Returns:
        True if the proof is valid (and matches ``root_digest`` when given)
    """
    if root_digest is not None and proof.root_digest != root_digest:
        return False
    return proof.verify(item)


__all__ = [
    "StepSide",
    "ProofStep",
    "MerkleProof",
    "generate_proof",
    "verify_proof",
]
