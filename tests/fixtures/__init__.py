"""
Test fixtures package for Merkle engine tests.

This package provides factory functions and reference values:
- common.py: element factories, reference_root and known digests

Usage:
    from fixtures import make_tree, reference_root

    def test_something():
        tree = make_tree(5)
        assert tree.get_root() == reference_root(tree.elements)
"""

from .common import (
    EMPTY_STRING_SHA256,
    WORKED_EXAMPLE_ELEMENTS,
    WORKED_EXAMPLE_ROOT,
    make_elements,
    make_tree,
    reference_root,
)

__all__ = [
    "EMPTY_STRING_SHA256",
    "WORKED_EXAMPLE_ELEMENTS",
    "WORKED_EXAMPLE_ROOT",
    "make_elements",
    "make_tree",
    "reference_root",
]
