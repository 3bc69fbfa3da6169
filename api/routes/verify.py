"""
Verify Routes

Check inclusion and range proofs against a root. A proof that does not
verify is a normal 200 response with ok=false.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import check_element_count, get_hasher
from api.models.requests import VerifyAggregatedProofRequest, VerifyProofRequest
from api.models.responses import VerifyResponse
from core.merkle import verify_aggregated_proof, verify_proof


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verify", tags=["verification"])


@router.post("/proof", response_model=VerifyResponse)
async def verify_single_proof(request: VerifyProofRequest) -> VerifyResponse:
    """Verify a single-element inclusion proof."""
    hasher = get_hasher(request.hash_algorithm)
    ok = verify_proof(request.root, request.proof.to_proof(), hasher=hasher)
    logger.info(f"Proof verification against {request.root}: ok={ok}")
    return VerifyResponse(ok=ok, root=request.root)


@router.post("/aggregated-proof", response_model=VerifyResponse)
async def verify_range_proof(request: VerifyAggregatedProofRequest) -> VerifyResponse:
    """Verify an aggregated proof for a contiguous range of elements."""
    check_element_count(request.elements)
    hasher = get_hasher(request.hash_algorithm)
    ok = verify_aggregated_proof(
        request.root,
        request.elements,
        request.start_index,
        request.end_index,
        request.proof.to_proof(),
        hasher=hasher,
    )
    logger.info(
        f"Aggregated proof verification [{request.start_index}, {request.end_index}) "
        f"against {request.root}: ok={ok}"
    )
    return VerifyResponse(ok=ok, root=request.root)
