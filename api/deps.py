"""
API Dependencies

Factories for the hasher and trees used by request handlers.
Every request builds its own tree; nothing is shared between requests.
"""

from __future__ import annotations

import logging
from typing import Sequence

from api.errors import InvalidRequestError, TooManyElementsError
from core.config.runtime import RuntimeConfig, get_default_config
from core.crypto.hashing import Hasher, get_hasher as resolve_hasher
from core.merkle import MerkleTree

logger = logging.getLogger(__name__)


def get_config() -> RuntimeConfig:
    """Return the process-wide runtime configuration."""
    return get_default_config()


def get_hasher(algorithm: str | None = None) -> Hasher:
    """
    Resolve the hasher for a request.

    Args:
        algorithm: Per-request algorithm; falls back to the configured one

    Raises:
        InvalidRequestError: If the algorithm is not supported
    """
    name = algorithm or get_config().merkle.hash_algorithm
    try:
        return resolve_hasher(name)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={"hash_algorithm": name})


def check_element_count(elements: Sequence[str]) -> None:
    """Reject element lists larger than api.max_elements."""
    limit = get_config().api.max_elements
    if len(elements) > limit:
        raise TooManyElementsError(len(elements), limit)


def build_tree(elements: Sequence[str], algorithm: str | None = None) -> MerkleTree:
    """
    Build a tree for one request using the configured empty-input policy.

    Raises:
        TooManyElementsError: If the list exceeds api.max_elements
        InvalidRequestError: If the algorithm is not supported
        ConstructionException: If elements is empty and empty trees are rejected
    """
    check_element_count(elements)
    hasher = get_hasher(algorithm)
    config = get_config()
    tree = MerkleTree(elements, hasher=hasher, allow_empty=config.merkle.allow_empty)
    logger.debug(f"Built request tree: {tree!r}")
    return tree
