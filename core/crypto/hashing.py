"""
Hashing Primitives
Leaf and node hashing for the Merkle tree engine.

This module provides:
- Hasher: the injectable hash strategy (algorithm + leaf/node rules)
- hash_leaf / hash_node: module-level functions bound to the default SHA-256 hasher

Commitment Rules (Hard Contracts):
1. Digests are lowercase hex strings everywhere (roots, proofs, comparisons).
2. Leaf hashing: leaf = H(element), str elements encoded as UTF-8.
3. Node hashing: node = H(left || right) over the two hex digests.
   Both children are fixed-width hex digests of the same algorithm, so the
   split between left and right is unambiguous. Verifiers must check width
   with Hasher.is_digest() before hashing untrusted siblings.

Known limitation:
- Leaves and nodes share one hash function with no domain tag, so an
  internal node H(l || r) equals the leaf hash of the element "l || r".
  A proof truncated by k levels therefore verifies for that forged
  element. Callers that need second-preimage resistance must also check
  that a proof has exactly the expected tree height (see
  verify_proof's height argument).
"""
from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import Union


Element = Union[str, bytes]

DEFAULT_HASH_ALGORITHM = "sha256"

# Fixed-output algorithms only; shake_* take a length and are excluded.
SUPPORTED_HASH_ALGORITHMS: tuple[str, ...] = (
    "sha256",
    "sha512",
    "sha3_256",
    "sha3_512",
    "blake2b",
    "blake2s",
)

_HEX_RE = re.compile(r"^[0-9a-f]+$")


def encode_element(element: Element) -> bytes:
    """
    Convert a leaf element to the bytes that get hashed.

    Args:
        element: str (encoded as UTF-8) or bytes (used as-is)

    Returns:
        Raw element bytes

    Raises:
        TypeError: If element is neither str nor bytes
    """
    if isinstance(element, bytes):
        return element
    if isinstance(element, str):
        return element.encode("utf-8")
    raise TypeError(
        f"Merkle elements must be str or bytes, got {type(element).__name__}"
    )


@dataclass(frozen=True)
class Hasher:
    """
    Hash strategy used by a Merkle tree and its verifiers.

    A tree and every verifier checking its proofs must use the same hasher.

    Example:
        >>> hasher = Hasher("sha256")
        >>> hasher.hash_leaf("")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
        >>> hasher.digest_size
        32
    """
    algorithm: str = DEFAULT_HASH_ALGORITHM
    digest_size: int = field(init=False)

    def __post_init__(self) -> None:
        if self.algorithm not in SUPPORTED_HASH_ALGORITHMS:
            raise ValueError(
                f"Unsupported hash algorithm {self.algorithm!r}; "
                f"expected one of {', '.join(SUPPORTED_HASH_ALGORITHMS)}"
            )
        object.__setattr__(self, "digest_size", hashlib.new(self.algorithm).digest_size)

    @property
    def hex_length(self) -> int:
        """Length of a hex digest produced by this hasher."""
        return self.digest_size * 2

    def digest(self, data: bytes) -> str:
        """Hash raw bytes and return the lowercase hex digest."""
        return hashlib.new(self.algorithm, data).hexdigest()

    def hash_leaf(self, element: Element) -> str:
        """
        Hash a single leaf element.

        Args:
            element: Leaf contents (may be empty)

        Returns:
            Hex digest of the element bytes
        """
        return self.digest(encode_element(element))

    def hash_node(self, left: str, right: str) -> str:
        """
        Hash two child digests into their parent.

        Args:
            left: Left child hex digest
            right: Right child hex digest

        Returns:
            Hex digest of left || right
        """
        return self.digest((left + right).encode("ascii"))

    def is_digest(self, value: object) -> bool:
        """Return True if value is a well-formed lowercase hex digest of this hasher."""
        return (
            isinstance(value, str)
            and len(value) == self.hex_length
            and _HEX_RE.match(value) is not None
        )


DEFAULT_HASHER = Hasher()


def get_hasher(algorithm: str | None = None) -> Hasher:
    """Return the hasher for algorithm, or the default SHA-256 hasher."""
    if algorithm is None or algorithm == DEFAULT_HASH_ALGORITHM:
        return DEFAULT_HASHER
    return Hasher(algorithm)


def hash_leaf(element: Element) -> str:
    """Hash a leaf with the default SHA-256 hasher."""
    return DEFAULT_HASHER.hash_leaf(element)


def hash_node(left: str, right: str) -> str:
    """Hash two child digests with the default SHA-256 hasher."""
    return DEFAULT_HASHER.hash_node(left, right)


__all__ = [
    "Element",
    "DEFAULT_HASH_ALGORITHM",
    "SUPPORTED_HASH_ALGORITHMS",
    "Hasher",
    "DEFAULT_HASHER",
    "get_hasher",
    "encode_element",
    "hash_leaf",
    "hash_node",
]
