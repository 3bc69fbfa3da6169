"""
CLI Configuration

Resolves the runtime configuration for CLI commands and provides the
template written by `merkle config --init`.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from core.config.runtime import RuntimeConfig, load_config as load_runtime_config
from core.crypto.hashing import Hasher


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables (MERKLE_* prefix) override file settings.

    Args:
        config_path: Optional path to a .yaml/.yml/.json config file

    Returns:
        Merged configuration
    """
    return load_runtime_config(config_path)


def resolve_hasher(args: Namespace) -> Hasher:
    """
    Build the hasher for a command.

    --hash-algorithm on the command line wins over the config file.

    Raises:
        ValueError: If the algorithm is not supported
    """
    config: RuntimeConfig = args.cli_config
    algorithm = getattr(args, "hash_algorithm", None) or config.merkle.hash_algorithm
    return Hasher(algorithm)


def get_default_config_template() -> str:
    """Get a template configuration file (YAML)."""
    return """# merkle-commit configuration
merkle:
  # sha256, sha512, sha3_256, sha3_512, blake2b or blake2s
  hash_algorithm: sha256
  # false rejects empty element lists instead of committing to one empty leaf
  allow_empty: true

logging:
  log_level: INFO
  log_file: null

api:
  host: 127.0.0.1
  port: 8000
  max_elements: 100000
"""
