"""
Schemas & Canonicalization

Purpose: Export the public API for the schemas module: error taxonomy,
canonical serialization, and validation results.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigException,
    ConstructionException,
    ErrorCodes,
    MerkleError,
    MerkleException,
    PrunedRegionException,
    TreeInvariantException,
)

# Validation results
from .validation import (
    ValidationResult,
    ValidationStatus,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigException",
    "ConstructionException",
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "PrunedRegionException",
    "TreeInvariantException",
    # Validation
    "ValidationResult",
    "ValidationStatus",
]
