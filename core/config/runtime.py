"""
Runtime Configuration

Central configuration for the Merkle engine, logging and the HTTP API.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_HASH_ALGORITHM, Hasher

load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "MERKLE_"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class MerkleConfig:
    """Configuration for tree construction and verification."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    allow_empty: bool = True

    def build_hasher(self) -> Hasher:
        """Build the hash strategy; raises ValueError for unsupported algorithms."""
        return Hasher(self.hash_algorithm)


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    log_level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class ApiConfig:
    """Configuration for the HTTP API."""
    host: str = "127.0.0.1"
    port: int = 8000
    max_elements: int = 100_000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: Hash algorithm (sha256, sha3_256, blake2b, ...)
        - MERKLE_ALLOW_EMPTY: Accept empty element lists (true/false)
        - MERKLE_LOG_LEVEL: Log level name
        - MERKLE_LOG_FILE: Optional log file path
        - MERKLE_API_HOST / MERKLE_API_PORT: API bind address
        - MERKLE_API_MAX_ELEMENTS: Largest element list the API accepts
        """
        overrides: dict[str, Any] = {}

        # Merkle settings
        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("merkle", {})["hash_algorithm"] = os.getenv(
                f"{ENV_PREFIX}HASH_ALGORITHM"
            )
        if os.getenv(f"{ENV_PREFIX}ALLOW_EMPTY"):
            overrides.setdefault("merkle", {})["allow_empty"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}ALLOW_EMPTY", "true")
            )

        # Logging
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        # API
        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT", "8000"))
        if os.getenv(f"{ENV_PREFIX}API_MAX_ELEMENTS"):
            overrides.setdefault("api", {})["max_elements"] = int(
                os.getenv(f"{ENV_PREFIX}API_MAX_ELEMENTS", "100000")
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        path = Path(path)
        if path.suffix == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {}) or {}
        logging_data = data.get("logging", {}) or {}
        api_data = data.get("api", {}) or {}

        return cls(
            merkle=MerkleConfig(**merkle_data),
            logging=LoggingConfig(**logging_data),
            api=ApiConfig(**api_data),
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "hash_algorithm": self.merkle.hash_algorithm,
                "allow_empty": self.merkle.allow_empty,
            },
            "logging": {
                "log_level": self.logging.log_level,
                "log_file": self.logging.log_file,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "max_elements": self.api.max_elements,
            },
            "extra": self.extra,
        }


DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("merkle.yaml"),
    Path("merkle.json"),
    Path.home() / ".config" / "merkle" / "config.yaml",
)


def load_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from a file, then overlay environment variables.

    Search order when path is None:
      1. ./merkle.yaml
      2. ./merkle.json
      3. ~/.config/merkle/config.yaml

    Environment variables ALWAYS override config file values.

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if path is not None:
        logger.debug(f"Loading config from {path}")
        return RuntimeConfig.from_file(path).with_env_overrides()

    for candidate in DEFAULT_CONFIG_PATHS:
        if candidate.exists():
            logger.debug(f"Loading config from {candidate}")
            return RuntimeConfig.from_file(candidate).with_env_overrides()

    return RuntimeConfig().with_env_overrides()


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
