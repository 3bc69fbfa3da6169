"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module: error taxonomy
and canonical JSON. Proof wire schemas live in core.schemas.proof, which
depends on core.merkle and is imported directly.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConstructionException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidRangeException,
    MalformedProofException,
    MerkleError,
    MerkleException,
)


__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "CanonicalizationException",
    "ConstructionException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "InvalidRangeException",
    "MalformedProofException",
    "MerkleError",
    "MerkleException",
]
