"""
Merkle CLI

Command-line interface for the Merkle commitment engine.

Usage:
    python -m merkle_cli root some test elements
    python -m merkle_cli prove --index 2 some test elements --out proof.json
    python -m merkle_cli verify --root <hex> --proof proof.json
    python -m merkle_cli range-prove --start 0 --end 2 some test elements --out range.json
    python -m merkle_cli range-verify --root <hex> --bundle range.json
"""

__version__ = "0.1.0"
