"""
Schemas & Canonicalization
File: proof.py

Purpose: Wire schemas for Merkle proofs and tree summaries, shared by the
HTTP API and the CLI. Converts between Pydantic models and the engine's
frozen dataclasses.

Hash fields are plain strings here on purpose: a malformed hash must reach
the verifier and be rejected as an invalid proof (False), not fail request
validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.merkle.merkle_tree import MerkleProof, MerkleTree
from core.merkle.range_proofs import AggregatedProof, BoundaryNode

from .errors import MalformedProofException


class ProofModel(BaseModel):
    """Serialized single-element inclusion proof."""

    model_config = ConfigDict(extra="forbid")

    element_hash: str = Field(..., description="hash_leaf of the proven element")
    siblings: list[str] = Field(
        default_factory=list,
        description="Sibling hashes, leaf level first",
    )
    directions: list[bool] = Field(
        default_factory=list,
        description="True where the sibling at the same step is on the left",
    )

    @classmethod
    def from_proof(cls, proof: MerkleProof) -> "ProofModel":
        return cls(
            element_hash=proof.element_hash,
            siblings=list(proof.siblings),
            directions=list(proof.directions),
        )

    def to_proof(self) -> MerkleProof:
        """
        Convert to the engine's MerkleProof.

        Raises:
            MalformedProofException: If siblings and directions differ in length
        """
        if len(self.siblings) != len(self.directions):
            raise MalformedProofException(
                f"Proof has {len(self.siblings)} siblings but "
                f"{len(self.directions)} directions",
                field_path="directions",
            )
        return MerkleProof(
            element_hash=self.element_hash,
            siblings=tuple(self.siblings),
            directions=tuple(self.directions),
        )


class BoundaryNodeModel(BaseModel):
    """Serialized boundary node of an aggregated proof."""

    model_config = ConfigDict(extra="forbid")

    level: int = Field(..., ge=0, description="Tree level (0 = leaves)")
    position: int = Field(..., ge=0, description="Position within the level")
    hash: str = Field(..., description="Node hash at (level, position)")


class AggregatedProofModel(BaseModel):
    """Serialized aggregated proof for a contiguous range."""

    model_config = ConfigDict(extra="forbid")

    start_index: int = Field(..., ge=0, description="First covered element (inclusive)")
    end_index: int = Field(..., ge=0, description="End of the covered span (exclusive)")
    height: int = Field(..., ge=0, description="Height of the tree")
    nodes: list[BoundaryNodeModel] = Field(default_factory=list)

    @classmethod
    def from_proof(cls, proof: AggregatedProof) -> "AggregatedProofModel":
        return cls(
            start_index=proof.start_index,
            end_index=proof.end_index,
            height=proof.height,
            nodes=[
                BoundaryNodeModel(level=n.level, position=n.position, hash=n.hash)
                for n in proof.nodes
            ],
        )

    def to_proof(self) -> AggregatedProof:
        """
        Convert to the engine's AggregatedProof.

        Raises:
            MalformedProofException: If the range is empty or inverted
        """
        if self.start_index >= self.end_index:
            raise MalformedProofException(
                f"Aggregated proof covers an empty range "
                f"[{self.start_index}, {self.end_index})",
                field_path="end_index",
            )
        return AggregatedProof(
            start_index=self.start_index,
            end_index=self.end_index,
            height=self.height,
            nodes=tuple(
                BoundaryNode(level=n.level, position=n.position, hash=n.hash)
                for n in self.nodes
            ),
        )


class TreeSummary(BaseModel):
    """Root and shape of a built tree."""

    model_config = ConfigDict(extra="forbid")

    root: str = Field(..., description="Root hash (lowercase hex)")
    size: int = Field(..., ge=0, description="Number of provable elements")
    height: int = Field(..., ge=0, description="Tree height")
    leaf_count: int = Field(..., ge=1, description="Leaf slots including padding")
    hash_algorithm: str = Field(..., description="Hash algorithm used")

    @classmethod
    def from_tree(cls, tree: MerkleTree) -> "TreeSummary":
        return cls(
            root=tree.get_root(),
            size=tree.size,
            height=tree.height,
            leaf_count=tree.leaf_count,
            hash_algorithm=tree.hasher.algorithm,
        )


__all__ = [
    "ProofModel",
    "BoundaryNodeModel",
    "AggregatedProofModel",
    "TreeSummary",
]
