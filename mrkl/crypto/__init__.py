"""
Core cryptographic utilities.

Provides the content-hash capability used to build and check trees,
and the HashPointer wrapper.
"""
from .hashing import (
    Digest,
    Hashable,
    sha256_hex,
    hash_text,
    hash_item,
    hash_concat,
    hash_single,
)
from .pointer import HashPointer

__all__ = [
    "Digest",
    "Hashable",
    "sha256_hex",
    "hash_text",
    "hash_item",
    "hash_concat",
    "hash_single",
    "HashPointer",
]
