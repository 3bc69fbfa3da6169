"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle engine,
CLI and API.
"""

from .runtime import (
    ApiConfig,
    LoggingConfig,
    MerkleConfig,
    RuntimeConfig,
    get_default_config,
    load_config,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "MerkleConfig",
    "RuntimeConfig",
    "get_default_config",
    "load_config",
    "set_default_config",
]
