"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli root [ELEMENT ...] [--elements-file PATH]
    python -m merkle_cli prove --index N [ELEMENT ...] [--elements-file PATH] [--out PATH]
    python -m merkle_cli verify --root HEX --proof PATH
    python -m merkle_cli range-prove --start S --end E [ELEMENT ...] [--out PATH]
    python -m merkle_cli range-verify --root HEX --bundle PATH
    python -m merkle_cli config --init | --show

Environment Variables:
    MERKLE_HASH_ALGORITHM       Hash algorithm (default: sha256)
    MERKLE_ALLOW_EMPTY          Accept empty element lists (default: true)
    MERKLE_LOG_LEVEL            Log level (default: INFO)
    MERKLE_LOG_FILE             Optional log file
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.crypto.hashing import SUPPORTED_HASH_ALGORITHMS
from core.schemas.canonical import dumps_canonical
from core.schemas.errors import MerkleException
from merkle_cli.commands import prove, verify
from merkle_cli.config import get_default_config_template, load_config
from merkle_cli.inputs import InputError


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_element_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "elements",
        nargs="*",
        help="Elements in commitment order (ignored when --elements-file is given)",
    )
    parser.add_argument(
        "--elements-file", "-f",
        type=str,
        default=None,
        help="JSON array of strings, or text with one element per line",
    )


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--hash-algorithm",
        type=str,
        default=None,
        choices=SUPPORTED_HASH_ALGORITHMS,
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Merkle commitment CLI - build roots, generate and verify inclusion and range proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.yaml, ./merkle.json or ~/.config/merkle/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the root of an element list",
        description="Build the tree and print its root, size and height.",
    )
    _add_element_inputs(root_parser)
    _add_common_flags(root_parser)
    root_parser.set_defaults(func=prove.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one element",
        description="Build the tree and write a JSON inclusion proof for --index.",
    )
    prove_parser.add_argument("--index", "-i", type=int, required=True, help="0-based element index")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Output file (default: stdout)")
    _add_element_inputs(prove_parser)
    _add_common_flags(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
        description="Exit 0 if the proof recomputes --root, 2 otherwise.",
    )
    verify_parser.add_argument("--root", "-r", type=str, required=True, help="Trusted root hash")
    verify_parser.add_argument("--proof", "-p", type=str, required=True, help="Proof JSON file")
    _add_common_flags(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- range-prove command ---
    range_prove_parser = subparsers.add_parser(
        "range-prove",
        help="Generate an aggregated proof for a contiguous range",
        description="Build the tree and write a JSON bundle proving elements [start, end).",
    )
    range_prove_parser.add_argument("--start", type=int, required=True, help="First index (inclusive)")
    range_prove_parser.add_argument("--end", type=int, required=True, help="End index (exclusive)")
    range_prove_parser.add_argument("--out", "-o", type=str, default=None, help="Output file (default: stdout)")
    _add_element_inputs(range_prove_parser)
    _add_common_flags(range_prove_parser)
    range_prove_parser.set_defaults(func=prove.range_prove_cmd)

    # --- range-verify command ---
    range_verify_parser = subparsers.add_parser(
        "range-verify",
        help="Verify an aggregated range proof bundle against a root",
        description="Exit 0 if the bundle's elements and proof recompute --root, 2 otherwise.",
    )
    range_verify_parser.add_argument("--root", "-r", type=str, required=True, help="Trusted root hash")
    range_verify_parser.add_argument("--bundle", "-b", type=str, required=True, help="Bundle JSON file from range-prove")
    _add_common_flags(range_verify_parser)
    range_verify_parser.set_defaults(func=verify.range_verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.yaml",
        help="Path for config file (default: merkle.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(dumps_canonical(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: merkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.log_level
    setup_logging(level=log_level, log_file=config.logging.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (MerkleException, InputError, ValueError, OSError) as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
