"""
Aggregated Range Proofs
Compressed inclusion proofs for a contiguous span of elements.

This module provides:
- BoundaryNode: a subtree root adjacent to the covered span, tagged with (level, position)
- AggregatedProof: boundary nodes for [start_index, end_index) of a tree of given height
- required_boundary_positions: the (level, position) list a range needs
- build_aggregated_proof: proof generation from a built tree
- verify_aggregated_proof: pure verifier

Boundary Selection:
At every level below the root the covered positions form one contiguous
span [lo, hi]. Nodes strictly inside the span are rederived from the
supplied elements, so only the two neighbours that complete the outer
pairs are needed:
- lo odd  -> left neighbour (level, lo - 1)
- hi even -> right neighbour (level, hi + 1)
Then lo //= 2, hi //= 2. Nodes are ordered bottom-up, left before right.

A single element needs exactly h nodes (the ordinary proof). Two or more
elements need at most 2*(h-1) nodes, never more than the siblings of the
per-element proofs combined.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Sequence

from core.crypto.hashing import DEFAULT_HASHER, Element, Hasher
from core.schemas.errors import IndexOutOfRangeException, InvalidRangeException

if TYPE_CHECKING:
    from core.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)

# Upper bound on heights accepted from untrusted proofs.
MAX_TREE_HEIGHT = 64


@dataclass(frozen=True)
class BoundaryNode:
    """
    A node hash supplied by an aggregated proof.

    Attributes:
        level: Tree level (0 = leaves)
        position: Position within the level
        hash: Node hash at (level, position)
    """
    level: int
    position: int
    hash: str


@dataclass(frozen=True)
class AggregatedProof:
    """
    Inclusion proof for elements [start_index, end_index).

    The proven elements themselves are not part of the proof; the
    verifier receives them separately and hashes them.

    Attributes:
        start_index: First covered element (inclusive)
        end_index: End of the covered span (exclusive)
        height: Height of the tree the proof was taken from
        nodes: Boundary hashes, bottom-up, left before right per level
    """
    start_index: int
    end_index: int
    height: int
    nodes: tuple[BoundaryNode, ...]

    @property
    def size(self) -> int:
        """Number of hashes carried by the proof."""
        return len(self.nodes)


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def required_boundary_positions(
    start_index: int,
    end_index: int,
    height: int,
) -> list[tuple[int, int]]:
    """
    Compute the (level, position) of every boundary node a range needs.

    Args:
        start_index: First covered leaf (inclusive)
        end_index: End of the covered span (exclusive)
        height: Tree height; the range must fit in 2^height leaf slots

    Returns:
        Ordered (level, position) pairs, bottom-up, left before right

    Raises:
        ValueError: If the range is empty or does not fit the tree

    Example:
        >>> required_boundary_positions(2, 6, 3)
        [(1, 0), (1, 3)]
    """
    if not all(_is_index(v) for v in (start_index, end_index, height)):
        raise ValueError("start_index, end_index and height must be integers")
    if height < 0 or height > MAX_TREE_HEIGHT:
        raise ValueError(f"Tree height {height} outside [0, {MAX_TREE_HEIGHT}]")
    if start_index < 0 or start_index >= end_index or end_index > (1 << height):
        raise ValueError(
            f"Range [{start_index}, {end_index}) does not fit a tree of height {height}"
        )

    positions: list[tuple[int, int]] = []
    lo, hi = start_index, end_index - 1

    for level in range(height):
        if lo % 2 == 1:
            positions.append((level, lo - 1))
        if hi % 2 == 0:
            positions.append((level, hi + 1))
        lo //= 2
        hi //= 2

    return positions


def build_aggregated_proof(
    tree: MerkleTree,
    start_index: int,
    end_index: int,
) -> AggregatedProof:
    """
    Generate an aggregated proof for elements [start_index, end_index) of tree.

    The range may straddle the padding boundary as long as end_index <= tree.size;
    padding slots after end_index participate only as boundary hashes.

    Args:
        tree: Built MerkleTree
        start_index: First element to prove (inclusive)
        end_index: End of the span (exclusive)

    Returns:
        AggregatedProof carrying only the boundary hashes

    Raises:
        InvalidRangeException: If start_index >= end_index
        IndexOutOfRangeException: If a bound is not an integer or falls outside [0, size]
    """
    for name, value in (("start_index", start_index), ("end_index", end_index)):
        if not _is_index(value):
            raise IndexOutOfRangeException(
                f"{name} must be an integer, got {value!r}",
                index=value,
                size=tree.size,
            )

    if start_index >= end_index:
        raise InvalidRangeException(
            f"Invalid range [{start_index}, {end_index}): start must be below end",
            start_index=start_index,
            end_index=end_index,
        )

    if start_index < 0 or end_index > tree.size:
        raise IndexOutOfRangeException(
            f"Range [{start_index}, {end_index}) out of bounds for {tree.size} elements",
            details={"start_index": start_index, "end_index": end_index},
            size=tree.size,
        )

    nodes = tuple(
        BoundaryNode(level=level, position=position, hash=tree.node(level, position))
        for level, position in required_boundary_positions(start_index, end_index, tree.height)
    )

    logger.debug(
        f"Aggregated proof for [{start_index}, {end_index}): "
        f"{len(nodes)} nodes at height {tree.height}"
    )

    return AggregatedProof(
        start_index=start_index,
        end_index=end_index,
        height=tree.height,
        nodes=nodes,
    )


def verify_aggregated_proof(
    root: str,
    elements: Sequence[Element],
    start_index: int,
    end_index: int,
    proof: AggregatedProof,
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify that elements occupy [start_index, end_index) of the tree with root.

    Algorithm:
    1. Hash the supplied elements into the level-0 span
    2. For each level below the root:
       - If the span starts at an odd position, prepend the left boundary hash
       - If the span ends at an even position, append the right boundary hash
       - Fold adjacent pairs with hash_node and halve the span
    3. Compare the single remaining hash with root

    Never raises: any structural mismatch yields False, including an
    element count other than end_index - start_index, bounds that
    disagree with the proof, or boundary nodes that differ in count,
    level or position from what the range alignment requires. A bare
    str or bytes is not accepted in place of the element sequence.

    Args:
        root: Expected root hash
        elements: The elements claimed to occupy the range, in order
        start_index: First covered element (inclusive)
        end_index: End of the span (exclusive)
        proof: AggregatedProof for the same range
        hasher: Hash strategy the tree was built with; defaults to SHA-256

    Returns:
        True if the proof recomputes root, False otherwise
    """
    hasher = hasher or DEFAULT_HASHER

    if isinstance(elements, (str, bytes)):
        logger.debug("Aggregated proof rejected: elements must be a sequence, not a single str/bytes")
        return False

    try:
        height = proof.height
        nodes = list(proof.nodes)
        proof_range = (proof.start_index, proof.end_index)
        expected = required_boundary_positions(start_index, end_index, height)
        elements = list(elements)
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug(f"Aggregated proof rejected: {e}")
        return False

    if proof_range != (start_index, end_index):
        logger.debug(
            f"Aggregated proof rejected: proof covers {proof_range}, "
            f"caller asked for {(start_index, end_index)}"
        )
        return False

    if len(elements) != end_index - start_index:
        logger.debug(
            f"Aggregated proof rejected: {len(elements)} elements for a range of "
            f"{end_index - start_index}"
        )
        return False

    try:
        supplied = [(node.level, node.position) for node in nodes]
        hashes = [node.hash for node in nodes]
    except AttributeError:
        logger.debug("Aggregated proof rejected: boundary nodes are malformed")
        return False

    if supplied != expected:
        logger.debug(
            f"Aggregated proof rejected: expected boundary nodes {expected}, got {supplied}"
        )
        return False

    if not all(hasher.is_digest(h) for h in hashes):
        logger.debug("Aggregated proof rejected: boundary hash is not a well-formed digest")
        return False

    try:
        span = [hasher.hash_leaf(element) for element in elements]
    except TypeError as e:
        logger.debug(f"Aggregated proof rejected: {e}")
        return False

    remaining = iter(hashes)
    lo = start_index

    for _ in range(height):
        hi = lo + len(span) - 1
        if lo % 2 == 1:
            span.insert(0, next(remaining))
            lo -= 1
        if hi % 2 == 0:
            span.append(next(remaining))
        span = [hasher.hash_node(span[i], span[i + 1]) for i in range(0, len(span), 2)]
        lo //= 2

    return len(span) == 1 and span[0] == root


__all__ = [
    "BoundaryNode",
    "AggregatedProof",
    "required_boundary_positions",
    "build_aggregated_proof",
    "verify_aggregated_proof",
]
