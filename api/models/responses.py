"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.proof import AggregatedProofModel, ProofModel


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-commit-api"
    version: str = "v1"


class ProofResponse(BaseModel):
    """Response for POST /tree/proof."""

    root: str = Field(..., description="Root the proof verifies against")
    index: int = Field(..., description="Proven element index")
    proof: ProofModel


class AggregatedProofResponse(BaseModel):
    """Response for POST /tree/aggregated-proof."""

    root: str = Field(..., description="Root the proof verifies against")
    proof: AggregatedProofModel
    naive_size: int = Field(
        ...,
        description="Sibling count of the equivalent per-element proofs",
    )


class VerifyResponse(BaseModel):
    """Response for the verification endpoints."""

    ok: bool = Field(..., description="Whether the proof recomputes the root")
    root: str = Field(..., description="Root that was checked")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
