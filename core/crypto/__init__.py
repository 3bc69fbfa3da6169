"""
Core cryptographic utilities.

Hash primitives and the injectable hash strategy used by the Merkle engine.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_HASHER,
    SUPPORTED_HASH_ALGORITHMS,
    Element,
    Hasher,
    encode_element,
    get_hasher,
    hash_leaf,
    hash_node,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "DEFAULT_HASHER",
    "SUPPORTED_HASH_ALGORITHMS",
    "Element",
    "Hasher",
    "encode_element",
    "get_hasher",
    "hash_leaf",
    "hash_node",
]
