"""
Merkle Tree Implementation
Perfect binary Merkle tree: construction, root access, inclusion proofs,
proof verification and in-place element updates.

This module provides:
- MerkleTree: level-by-level node storage built from an ordered element list
- MerkleProof: single-element inclusion proof (value object)
- verify_proof: pure verifier for MerkleProof
- compute_tree_height: height of the minimal tree holding N elements

Canonical Commitment Rules (Hard Contracts):
1. Height: h = ceil(log2(max(N, 1))); the tree has 2^h leaf slots.
2. Padding: slots N..2^h-1 hold the empty string "".
3. Leaf hashing: level[0][i] = hasher.hash_leaf(element_i)
4. Parent hashing: level[k][p] = hasher.hash_node(level[k-1][2p], level[k-1][2p+1])
5. Empty input: by default a single empty leaf of height 0 (size 0).
   With allow_empty=False, empty input raises ConstructionException.

Direction Convention:
- directions[i] is True when the sibling at step i is the LEFT child,
  i.e. the path node is a right child (odd position).

Determinism Notes:
- No randomness or salt; identical padded inputs give identical roots.
- Leaves are never sorted; input order is the commitment order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from core.crypto.hashing import DEFAULT_HASHER, Element, Hasher
from core.merkle.range_proofs import AggregatedProof, _is_index, build_aggregated_proof
from core.schemas.errors import ConstructionException, IndexOutOfRangeException


logger = logging.getLogger(__name__)

PADDING_ELEMENT = ""


@dataclass(frozen=True)
class MerkleProof:
    """
    Inclusion proof for a single element.

    Attributes:
        element_hash: hash_leaf of the proven element
        siblings: sibling hashes from leaf level up to just below the root
        directions: True where the sibling at the same step is on the left
    """
    element_hash: str
    siblings: tuple[str, ...]
    directions: tuple[bool, ...]

    @property
    def index(self) -> int:
        """Leaf position implied by the directions (bit i set when sibling i is left)."""
        return sum(1 << i for i, is_left in enumerate(self.directions) if is_left)

    @property
    def height(self) -> int:
        """Height of the tree the proof was taken from."""
        return len(self.siblings)


def compute_tree_height(num_elements: int) -> int:
    """
    Compute the height of the minimal perfect tree holding num_elements.

    A tree of height h has 2^h leaf slots. Zero or one element gives height 0.

    Example:
        >>> [compute_tree_height(n) for n in (0, 1, 2, 3, 4, 5, 8, 9)]
        [0, 0, 1, 2, 2, 3, 3, 4]
    """
    if num_elements < 0:
        raise ValueError(f"Element count must be non-negative, got {num_elements}")
    return max(num_elements - 1, 0).bit_length()

class MerkleTree:
    """
    Binary Merkle tree over an ordered sequence of elements.

    Node hashes are stored as a list of levels: levels[0] holds the
    2^h leaf hashes and levels[h] holds the root. Each level is half
    the length of the one below it.

    Not thread-safe: update_element mutates the level arrays in place,
    so concurrent access must be serialized by the caller.

    Example:
        >>> tree = MerkleTree(["some", "test", "elements"])
        >>> tree.get_root()
        '040c89dca6bd37584693bb94e6a68b6212edbc7f063d39b28ad6874dbd4f30d2'
        >>> verify_proof(tree.get_root(), tree.get_proof(2))
        True
    """

    def __init__(
        self,
        elements: Sequence[Element],
        hasher: Hasher | None = None,
        allow_empty: bool = True,
    ) -> None:
        """
        Build the tree.

        Args:
            elements: Ordered leaf elements (str or bytes, possibly empty)
            hasher: Hash strategy; defaults to SHA-256
            allow_empty: If False, an empty element list is rejected

        Raises:
            ConstructionException: If elements is empty and allow_empty is False
            TypeError: If an element is neither str nor bytes
        """
        self._hasher = hasher or DEFAULT_HASHER
        self._elements: list[Element] = list(elements)

        if not self._elements and not allow_empty:
            raise ConstructionException(
                "Cannot build a Merkle tree from zero elements",
                details={"allow_empty": False},
            )

        self._height = compute_tree_height(len(self._elements))
        leaf_count = 1 << self._height

        # Pad on the right up to the next power of two
        padded = self._elements + [PADDING_ELEMENT] * (leaf_count - len(self._elements))

        current_level = [self._hasher.hash_leaf(element) for element in padded]
        self._levels: list[list[str]] = [current_level]

        while len(current_level) > 1:
            current_level = [
                self._hasher.hash_node(current_level[i], current_level[i + 1])
                for i in range(0, len(current_level), 2)
            ]
            self._levels.append(current_level)

        logger.debug(
            f"Built Merkle tree: size={len(self._elements)} height={self._height} "
            f"algorithm={self._hasher.algorithm} root={self.root}"
        )

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def size(self) -> int:
        """Number of provable elements (unpadded count)."""
        return len(self._elements)

    @property
    def height(self) -> int:
        return self._height

    @property
    def leaf_count(self) -> int:
        """Number of leaf slots, including padding."""
        return len(self._levels[0])

    @property
    def elements(self) -> list[Element]:
        return list(self._elements)

    @property
    def levels(self) -> list[list[str]]:
        """Copy of every level, leaves first."""
        return [list(level) for level in self._levels]

    @property
    def root(self) -> str:
        return self._levels[-1][0]

    def get_root(self) -> str:
        """Return the root hash. O(1)."""
        return self._levels[-1][0]

    def node(self, level: int, position: int) -> str:
        """Return the hash stored at (level, position)."""
        return self._levels[level][position]

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(size={self.size}, height={self._height}, "
            f"algorithm={self._hasher.algorithm!r}, root={self.root!r})"
        )

    # ------------------------------------------------------------------
    # Proofs and updates
    # ------------------------------------------------------------------

    def _check_index(self, index: Any) -> None:
        if not _is_index(index) or index < 0 or index >= len(self._elements):
            raise IndexOutOfRangeException(
                f"Element index {index!r} out of range for {len(self._elements)} elements",
                index=index,
                size=len(self._elements),
            )

    def get_proof(self, index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the element at index.

        Algorithm:
        1. Start at level 0, position = index
        2. At each level below the root:
           - Record the sibling hash at position XOR 1
           - Record direction: True if position is odd (sibling on the left)
           - Move up: position = position // 2

        Args:
            index: 0-based element index (padding slots are not provable)

        Returns:
            MerkleProof with h siblings and directions

        Raises:
            IndexOutOfRangeException: If index is not in [0, size)
        """
        self._check_index(index)

        siblings: list[str] = []
        directions: list[bool] = []
        position = index

        for level in self._levels[:-1]:
            siblings.append(level[position ^ 1])
            directions.append(position % 2 == 1)
            position //= 2

        return MerkleProof(
            element_hash=self._levels[0][index],
            siblings=tuple(siblings),
            directions=tuple(directions),
        )

    def update_element(self, index: int, element: Element) -> None:
        """
        Replace the element at index and recompute its path to the root.

        Proofs generated before the update stop verifying against the new
        root; regenerate them from the updated tree.

        Args:
            index: 0-based element index; the tree never grows
            element: New element contents

        Raises:
            IndexOutOfRangeException: If index is not in [0, size)
        """
        self._check_index(index)

        self._elements[index] = element
        self._levels[0][index] = self._hasher.hash_leaf(element)

        position = index
        for depth in range(1, len(self._levels)):
            position //= 2
            children = self._levels[depth - 1]
            self._levels[depth][position] = self._hasher.hash_node(
                children[2 * position], children[2 * position + 1]
            )

        logger.debug(f"Updated element {index}; new root={self.root}")

    def get_aggregated_proof(self, start_index: int, end_index: int) -> AggregatedProof:
        """
        Generate a compressed inclusion proof for elements [start_index, end_index).

        See core.merkle.range_proofs.build_aggregated_proof.

        Raises:
            InvalidRangeException: If start_index >= end_index
            IndexOutOfRangeException: If either bound falls outside [0, size]
        """
        return build_aggregated_proof(self, start_index, end_index)


def verify_proof(
    root: str,
    proof: MerkleProof,
    hasher: Hasher | None = None,
    height: int | None = None,
) -> bool:
    """
    Verify an inclusion proof against a known root.

    Algorithm:
    1. Start with proof.element_hash
    2. For each (sibling, direction) pair, leaf to root:
       - direction True (sibling left):  current = hash_node(sibling, current)
       - direction False (sibling right): current = hash_node(current, sibling)
    3. Compare the result with root

    Never raises: malformed proofs (length mismatch, non-digest hashes,
    wrong types) yield False.

    Args:
        root: Expected root hash
        proof: Proof to check
        hasher: Hash strategy the tree was built with; defaults to SHA-256
        height: Expected tree height. When given, a proof with any other
            number of siblings is rejected; this closes the truncated-proof
            forgery described in core.crypto.hashing.

    Returns:
        True if the proof recomputes root, False otherwise
    """
    hasher = hasher or DEFAULT_HASHER

    try:
        element_hash = proof.element_hash
        siblings = list(proof.siblings)
        directions = list(proof.directions)
    except (AttributeError, TypeError):
        logger.debug("Proof rejected: not a MerkleProof-shaped object")
        return False

    if len(siblings) != len(directions):
        logger.debug(
            f"Proof rejected: {len(siblings)} siblings but {len(directions)} directions"
        )
        return False

    if height is not None and len(siblings) != height:
        logger.debug(f"Proof rejected: {len(siblings)} siblings for a tree of height {height}")
        return False

    if not hasher.is_digest(element_hash) or not all(hasher.is_digest(s) for s in siblings):
        logger.debug("Proof rejected: element hash or sibling is not a well-formed digest")
        return False

    if not all(isinstance(d, bool) for d in directions):
        logger.debug("Proof rejected: directions must be booleans")
        return False

    current = element_hash
    for sibling, sibling_is_left in zip(siblings, directions):
        if sibling_is_left:
            current = hasher.hash_node(sibling, current)
        else:
            current = hasher.hash_node(current, sibling)

    return current == root


__all__ = [
    "PADDING_ELEMENT",
    "MerkleProof",
    "MerkleTree",
    "compute_tree_height",
    "verify_proof",
]
