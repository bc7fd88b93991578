"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for Merkle tree construction, search and
verification. Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Construction Errors
    CONSTRUCTION_ERROR = "CONSTRUCTION_ERROR"

    # Query Errors
    PRUNED_REGION = "PRUNED_REGION"

    # Validation Errors
    TREE_INVARIANT_VIOLATION = "TREE_INVARIANT_VIOLATION"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used where an error has to be handed to a collaborator (CLI output, a
    calling service) without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.CONSTRUCTION_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all mrkl errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MRKL_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(MerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class ConstructionException(MerkleException):
    """
    Exception raised when a tree cannot be built from the given items.

    Construction is a pure function of its input, so this is never retryable.
    """

    def __init__(
        self,
        message: str,
        item_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if item_count is not None:
            full_details["item_count"] = item_count
        super().__init__(
            message=message,
            code=ErrorCodes.CONSTRUCTION_ERROR,
            details=full_details,
            retryable=False,
        )


class PrunedRegionException(MerkleException):
    """
    Exception raised when a search has to descend into a pruned branch.

    "Not found" and "pruned away" are indistinguishable at that point,
    so the search refuses to answer.
    """

    def __init__(
        self,
        message: str = "cannot search pruned region",
        partial_digest: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if partial_digest:
            full_details["partial_digest"] = partial_digest
        super().__init__(
            message=message,
            code=ErrorCodes.PRUNED_REGION,
            details=full_details,
            retryable=False,
        )


class TreeInvariantException(MerkleException):
    """
    Exception raised by fail-fast validation on the first invalid node.

    Carries the validation result that triggered it.
    """

    def __init__(
        self,
        message: str,
        result: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if result is not None:
            full_details["status"] = result.status.value
            full_details["reason"] = result.reason
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_INVARIANT_VIOLATION,
            details=full_details,
            retryable=False,
        )
        self.result = result


class ConfigException(MerkleException):
    """Exception raised when configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
