"""
Merkle Tree Engine
Binary Merkle tree vector commitment with inclusion, update and range proofs.

This module provides:
- MerkleTree: construction, root access, get_proof, update_element, get_aggregated_proof
- MerkleProof / verify_proof: single-element inclusion proofs
- AggregatedProof / verify_aggregated_proof: compressed proofs for contiguous ranges

Canonical Commitment Rules:
1. Leaf hashing: hash_leaf(element) = H(element bytes)
2. Parent hashing: hash_node(left, right) = H(left_hex || right_hex)
3. Padding: empty-string leaves up to the next power of two
4. Empty tree: one empty leaf, height 0 (or rejected with allow_empty=False)
5. Directions: True means the sibling is on the left

Usage:
    from core.merkle import MerkleTree, verify_proof, verify_aggregated_proof

    tree = MerkleTree(["some", "test", "elements"])
    root = tree.get_root()

    proof = tree.get_proof(2)
    assert verify_proof(root, proof)

    range_proof = tree.get_aggregated_proof(0, 3)
    assert verify_aggregated_proof(root, ["some", "test", "elements"], 0, 3, range_proof)
"""
from .range_proofs import (
    MAX_TREE_HEIGHT,
    AggregatedProof,
    BoundaryNode,
    build_aggregated_proof,
    required_boundary_positions,
    verify_aggregated_proof,
)

from .merkle_tree import (
    PADDING_ELEMENT,
    MerkleProof,
    MerkleTree,
    compute_tree_height,
    verify_proof,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "AggregatedProof",
    "BoundaryNode",
    "PADDING_ELEMENT",
    "MAX_TREE_HEIGHT",
    # Core functions
    "verify_proof",
    "verify_aggregated_proof",
    "build_aggregated_proof",
    "required_boundary_positions",
    "compute_tree_height",
]
