"""
Merkle Commitment API (FastAPI)

Stateless HTTP API over the Merkle tree engine:
- POST /tree/root - Commit to elements
- POST /tree/proof - Inclusion proof
- POST /tree/aggregated-proof - Range proof
- POST /verify/proof - Verify inclusion proof
- POST /verify/aggregated-proof - Verify range proof
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
