"""
Tree Routes

Commit to an element list and produce proofs from it.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import build_tree
from api.models.requests import AggregatedProofRequest, ProofRequest, TreeRequest
from api.models.responses import AggregatedProofResponse, ProofResponse
from core.schemas.proof import AggregatedProofModel, ProofModel, TreeSummary


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tree", tags=["tree"])


@router.post("/root", response_model=TreeSummary)
async def tree_root(request: TreeRequest) -> TreeSummary:
    """Build a tree from the posted elements and return its root and shape."""
    tree = build_tree(request.elements, request.hash_algorithm)
    logger.info(f"Committed {tree.size} elements: root={tree.get_root()}")
    return TreeSummary.from_tree(tree)


@router.post("/proof", response_model=ProofResponse)
async def tree_proof(request: ProofRequest) -> ProofResponse:
    """
    Inclusion proof for the element at request.index.

    Fails with INDEX_OUT_OF_RANGE if the index is not below the element count.
    """
    tree = build_tree(request.elements, request.hash_algorithm)
    proof = tree.get_proof(request.index)
    return ProofResponse(
        root=tree.get_root(),
        index=request.index,
        proof=ProofModel.from_proof(proof),
    )


@router.post("/aggregated-proof", response_model=AggregatedProofResponse)
async def tree_aggregated_proof(request: AggregatedProofRequest) -> AggregatedProofResponse:
    """
    Aggregated proof for elements [start_index, end_index).

    Fails with INVALID_RANGE if start_index >= end_index and with
    INDEX_OUT_OF_RANGE if a bound exceeds the element count.
    """
    tree = build_tree(request.elements, request.hash_algorithm)
    proof = tree.get_aggregated_proof(request.start_index, request.end_index)
    naive_size = (request.end_index - request.start_index) * tree.height
    logger.info(
        f"Aggregated proof [{request.start_index}, {request.end_index}): "
        f"{proof.size} hashes vs {naive_size} naive"
    )
    return AggregatedProofResponse(
        root=tree.get_root(),
        proof=AggregatedProofModel.from_proof(proof),
        naive_size=naive_size,
    )
