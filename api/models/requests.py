"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from core.schemas.proof import AggregatedProofModel, ProofModel


class TreeRequest(BaseModel):
    """Request body for POST /tree/root."""

    elements: list[str] = Field(
        ...,
        description="Ordered elements to commit to (may be empty strings)",
    )
    hash_algorithm: str | None = Field(
        default=None,
        description="Hash algorithm; defaults to the server configuration",
    )


class ProofRequest(TreeRequest):
    """Request body for POST /tree/proof."""

    index: int = Field(..., description="0-based element index")


class AggregatedProofRequest(TreeRequest):
    """Request body for POST /tree/aggregated-proof."""

    start_index: int = Field(..., description="First element (inclusive)")
    end_index: int = Field(..., description="End of the range (exclusive)")


class VerifyProofRequest(BaseModel):
    """Request body for POST /verify/proof."""

    root: str = Field(..., description="Root hash to verify against")
    proof: ProofModel = Field(..., description="Inclusion proof")
    hash_algorithm: str | None = Field(default=None)


class VerifyAggregatedProofRequest(BaseModel):
    """Request body for POST /verify/aggregated-proof."""

    root: str = Field(..., description="Root hash to verify against")
    elements: list[str] = Field(..., description="Elements claimed to occupy the range")
    start_index: int = Field(..., description="First element (inclusive)")
    end_index: int = Field(..., description="End of the range (exclusive)")
    proof: AggregatedProofModel = Field(..., description="Aggregated proof")
    hash_algorithm: str | None = Field(default=None)
