"""
Merkle Tree and Commitments
Sorted, prunable Merkle tree with validation, search and inclusion proofs.

This module provides:
- MerkleTree: Facade over a built tree (the usual entry point)
- construct: Build a root node from items
- validate_node / TreeValidator: Strict and pruned validation
- contains: O(log n) bound-routed membership test
- prune: Destructive reduction to the paths of kept items
- MerkleProof / generate_proof / verify_proof: Inclusion proofs

Canonical Commitment Rules:
1. Leaf digest: hash_item(item) (sha256 hex)
2. Two children: H(left || right) over the hex digests
3. One child (odd row): H(left); no duplication of the last element
4. Items are sorted before building
5. A pruned branch keeps exactly the digest it had

Usage:
    from mrkl.merkle import MerkleTree

    tree = MerkleTree.construct(items)
    proof = tree.generate_proof(items[0])
    assert proof.verify(items[0])
    assert proof.matches_shape(tree.root_digest, tree.height)
"""
from .node import (
    EMPTY,
    Branch,
    Empty,
    Leaf,
    MerkleBranch,
    MerkleNode,
    Partial,
)

from .builder import construct
from .validation import TreeValidator, validate_node
from .search import contains
from .pruning import prune
from .proofs import (
    MerkleProof,
    ProofStep,
    StepSide,
    generate_proof,
    verify_proof,
)
from .tree import MerkleTree


__all__ = [
    # Node model
    "EMPTY",
    "Branch",
    "Empty",
    "Leaf",
    "MerkleBranch",
    "MerkleNode",
    "Partial",
    # Operations
    "construct",
    "TreeValidator",
    "validate_node",
    "contains",
    "prune",
    # Proofs
    "MerkleProof",
    "ProofStep",
    "StepSide",
    "generate_proof",
    "verify_proof",
    # Facade
    "MerkleTree",
]
