"""
Pytest configuration and shared fixtures for Merkle engine tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_elements = _common.make_elements
make_tree = _common.make_tree
WORKED_EXAMPLE_ELEMENTS = _common.WORKED_EXAMPLE_ELEMENTS


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def worked_example_tree():
    """Provide the tree over ["some", "test", "elements"]."""
    from core.merkle import MerkleTree
    return MerkleTree(list(WORKED_EXAMPLE_ELEMENTS))


@pytest.fixture
def eight_element_tree():
    """Provide a full tree of height 3 with no padding."""
    return make_tree(8)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every MERKLE_* variable so config tests start from defaults."""
    import os
    for key in list(os.environ):
        if key.startswith("MERKLE_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def default_config():
    """Install a fresh default RuntimeConfig and reset it afterwards."""
    from core.config.runtime import RuntimeConfig, set_default_config
    config = RuntimeConfig()
    set_default_config(config)
    yield config
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
