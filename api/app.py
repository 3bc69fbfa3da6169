"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI

from api.routes import health, tree, verify
from api.errors import APIError, api_error_handler, generic_error_handler, merkle_error_handler
from core.config.runtime import get_default_config
from core.schemas.errors import MerkleException


# Configure logging - respects MERKLE_LOG_LEVEL and the config file's logging.log_level
def _resolve_log_level() -> int:
    """Resolve log level from configuration, defaulting to INFO."""
    raw = get_default_config().logging.log_level
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Commitment API",
        description="""
Stateless HTTP API over the binary Merkle tree engine.

## Endpoints

- **POST /tree/root** - Commit to an element list and return the root
- **POST /tree/proof** - Inclusion proof for one element
- **POST /tree/aggregated-proof** - Compressed proof for a contiguous range
- **POST /verify/proof** - Verify an inclusion proof against a root
- **POST /verify/aggregated-proof** - Verify a range proof against a root
- **GET /health** - Health check

Hashes are lowercase hex strings. Proof directions are `true` when the
sibling is on the left of the path node.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MerkleException, merkle_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(tree.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_default_config()
    uvicorn.run(app, host=config.api.host, port=config.api.port)
