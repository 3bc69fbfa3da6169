"""API request and response models."""

from api.models.requests import (
    TreeRequest,
    ProofRequest,
    AggregatedProofRequest,
    VerifyProofRequest,
    VerifyAggregatedProofRequest,
)
from api.models.responses import (
    HealthResponse,
    ProofResponse,
    AggregatedProofResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "TreeRequest",
    "ProofRequest",
    "AggregatedProofRequest",
    "VerifyProofRequest",
    "VerifyAggregatedProofRequest",
    "HealthResponse",
    "ProofResponse",
    "AggregatedProofResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
