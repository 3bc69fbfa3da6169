"""
Common test fixtures shared by all modules.

Provides:
- Element lists of assorted sizes (powers of two, odd counts, empty strings)
- reference_root: an independent recursive root computation with hashlib
- The worked-example root for ["some", "test", "elements"]
"""

import hashlib
from typing import Sequence

from core.merkle import MerkleTree


WORKED_EXAMPLE_ELEMENTS = ["some", "test", "elements"]

# sha256 root of ["some", "test", "elements", ""]
WORKED_EXAMPLE_ROOT = "040c89dca6bd37584693bb94e6a68b6212edbc7f063d39b28ad6874dbd4f30d2"

EMPTY_STRING_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def make_elements(count: int, prefix: str = "element") -> list[str]:
    """Create count distinct elements: element-0, element-1, ..."""
    return [f"{prefix}-{i}" for i in range(count)]


def make_tree(count: int, **kwargs) -> MerkleTree:
    """Build a tree over make_elements(count)."""
    return MerkleTree(make_elements(count), **kwargs)


def reference_root(elements: Sequence[str], algorithm: str = "sha256") -> str:
    """
    Compute a root without MerkleTree.

    Pads to the next power of two with "" and hashes pairs recursively.
    """
    def h(data: bytes) -> str:
        return hashlib.new(algorithm, data).hexdigest()

    width = 1
    while width < len(elements):
        width *= 2
    padded = list(elements) + [""] * (width - len(elements))

    def subtree(items: list[str]) -> str:
        if len(items) == 1:
            return h(items[0].encode("utf-8"))
        mid = len(items) // 2
        return h((subtree(items[:mid]) + subtree(items[mid:])).encode("ascii"))

    return subtree(padded)
