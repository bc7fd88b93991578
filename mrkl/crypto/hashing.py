"""
Hashing Utilities
Content-hash capability for tree items and digest combination rules.

This module provides:
- SHA-256 hex digests for raw bytes and text
- hash_item: the digest of a tree item (the item capability contract)
- hash_concat / hash_single: the parent digest rules used by every node

Digest format: lowercase hex SHA-256, no prefix. Digests are opaque and
only ever compared by equality.

Security/Determinism Notes:
- Text is hashed as its exact UTF-8 bytes, no normalization
- Parent digests hash the concatenated hex text of the child digests
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Any, Protocol, runtime_checkable

from mrkl.schemas.canonical import dumps_canonical


Digest = str


@runtime_checkable
class Hashable(Protocol):
    """An item that knows its own content digest."""

    def get_hash(self) -> Digest:
        ...


def sha256_hex(data: bytes) -> Digest:
    """
    Compute the SHA-256 digest of raw bytes as lowercase hex.

    Example:
        >>> sha256_hex(b"hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).hexdigest()


def hash_text(text: str) -> Digest:
    """SHA-256 of the UTF-8 encoding of ``text``."""
    return sha256_hex(text.encode("utf-8"))


def hash_item(item: Any) -> Digest:
    """
    Compute the content digest of a tree item.

    Rules, in order:
    1. Objects implementing ``get_hash()`` supply their own digest
    2. ``str``: hash of the UTF-8 text
    3. ``bytes``: hash of the raw bytes
    4. Anything else: hash of its canonical JSON (see dumps_canonical)

    Args:
        item: The item to hash

    Returns:
        Hex digest string

    Raises:
        CanonicalizationException: If the item falls through to canonical
            JSON and cannot be serialized
    """
    if isinstance(item, Hashable):
        return item.get_hash()
    if isinstance(item, str):
        return hash_text(item)
    if isinstance(item, (bytes, bytearray)):
        return sha256_hex(bytes(item))
    return hash_text(dumps_canonical(item))


def hash_concat(left: Digest, right: Digest) -> Digest:
    """
    Digest of a two-child node: H(left || right).

    Order matters; swapping children changes the digest.
    """
    return hash_text(left + right)


def hash_single(only: Digest) -> Digest:
    """Digest of a node whose right child is empty: H(only)."""
    return hash_text(only)


__all__ = [
    "Digest",
    "Hashable",
    "sha256_hex",
    "hash_text",
    "hash_item",
    "hash_concat",
    "hash_single",
]
