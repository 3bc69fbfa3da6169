"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the Merkle engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine, CLI and API."""

    # Tree operations
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    INVALID_RANGE = "INVALID_RANGE"
    CONSTRUCTION_ERROR = "CONSTRUCTION_ERROR"

    # Proof decoding
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Serialization
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the API and CLI to report engine failures without
    exceptions, enabling structured handling and serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_RANGE],
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


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle engine errors.

    This exception carries structured error information and can be
    converted to a MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
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


class IndexOutOfRangeException(MerkleException, IndexError):
    """Raised when an element index is outside the tree's element count."""

    def __init__(
        self,
        message: str,
        index: Any = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class InvalidRangeException(MerkleException, ValueError):
    """Raised when a range has start >= end."""

    def __init__(
        self,
        message: str,
        start_index: Any = None,
        end_index: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if start_index is not None:
            full_details["start_index"] = start_index
        if end_index is not None:
            full_details["end_index"] = end_index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_RANGE,
            details=full_details,
            retryable=False,
        )


class ConstructionException(MerkleException):
    """Raised when a tree cannot be built (empty input under the reject policy)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONSTRUCTION_ERROR,
            details=details,
            retryable=False,
        )


class MalformedProofException(MerkleException):
    """Raised when a serialized proof cannot be decoded into an engine proof."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


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
