"""
Schemas & Canonicalization
File: validation.py

Purpose: Three-way result of validating a Merkle tree.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValidationStatus(str, Enum):
    """Outcome of validating a tree or subtree."""

    VALID = "valid"
    INVALID_HASH = "invalid_hash"
    INVALID_TREE = "invalid_tree"


class ValidationResult(BaseModel):
    """
    Result of validating a Merkle tree.

    ``INVALID_HASH`` means a digest did not match what its children derive
    (evidence of tampering or a construction bug). ``INVALID_TREE`` means the
    shape is wrong: bad height, unexpected pruned content, mismatched child
    kinds, or out-of-order items.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: ValidationStatus = Field(
        ...,
        description="Validation outcome",
    )
    reason: str | None = Field(
        default=None,
        description="Human-readable description of what failed",
    )

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID

    @property
    def is_invalid_hash(self) -> bool:
        return self.status is ValidationStatus.INVALID_HASH

    @property
    def is_invalid_tree(self) -> bool:
        return self.status is ValidationStatus.INVALID_TREE

    def __bool__(self) -> bool:
        return self.is_valid

    @classmethod
    def valid(cls) -> "ValidationResult":
        """Create a passing result."""
        return _VALID

    @classmethod
    def invalid_hash(cls, reason: str) -> "ValidationResult":
        """Create a digest-mismatch result."""
        return cls(status=ValidationStatus.INVALID_HASH, reason=reason)

    @classmethod
    def invalid_tree(cls, reason: str) -> "ValidationResult":
        """Create a structural-mismatch result."""
        return cls(status=ValidationStatus.INVALID_TREE, reason=reason)


_VALID = ValidationResult(status=ValidationStatus.VALID)
