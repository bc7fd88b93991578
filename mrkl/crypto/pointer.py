"""
Hash Pointer
A value paired with the digest it had when the pointer was taken.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from mrkl.crypto.hashing import Digest, hash_item


T = TypeVar("T")


@dataclass
class HashPointer(Generic[T]):
    """
    Points at a value and remembers its digest.

    If the value is later modified in place, verify_hash() reports it.

    Attributes:
        hash: Digest of the value at the time the pointer was created
        ptr: The value itself
    """
    hash: Digest
    ptr: T

    @classmethod
    def to(cls, value: T) -> "HashPointer[T]":
        """Create a pointer to ``value``, recording its current digest."""
        return cls(hash=hash_item(value), ptr=value)

    def verify_hash(self) -> bool:
        """Check that the value still hashes to the recorded digest."""
        return hash_item(self.ptr) == self.hash


__all__ = ["HashPointer"]
