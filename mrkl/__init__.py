"""
mrkl - sorted, prunable Merkle trees.

Build a tree once from a complete item set, then validate it, test
membership, generate inclusion proofs, or prune it down to a subset of
items while keeping the root digest verifiable.
"""

from mrkl.merkle import MerkleProof, MerkleTree
from mrkl.schemas import ValidationResult, ValidationStatus

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "MerkleProof",
    "ValidationResult",
    "ValidationStatus",
]
