"""
CLI command modules.
"""

from merkle_cli.commands import prove, verify

__all__ = ["prove", "verify"]
