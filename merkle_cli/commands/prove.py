"""
CLI Commit/Prove Commands

Build a tree from elements and emit its root, an inclusion proof or an
aggregated range proof.

Usage:
    merkle root some test elements
    merkle prove --index 2 some test elements --out proof.json
    merkle range-prove --start 1 --end 3 --elements-file elements.json --out range.json
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.merkle import MerkleTree
from core.schemas.canonical import dumps_canonical
from core.schemas.proof import AggregatedProofModel, ProofModel, TreeSummary
from merkle_cli.config import resolve_hasher
from merkle_cli.inputs import load_elements, write_output


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


def build_tree(args: Namespace) -> MerkleTree:
    """Build the tree for a command from its element inputs and config."""
    elements = load_elements(args)
    hasher = resolve_hasher(args)
    tree = MerkleTree(
        elements,
        hasher=hasher,
        allow_empty=args.cli_config.merkle.allow_empty,
    )
    logger.info(f"Built tree over {tree.size} elements (height {tree.height})")
    return tree


def root_cmd(args: Namespace) -> int:
    """Print the root and shape of the tree."""
    tree = build_tree(args)
    summary = TreeSummary.from_tree(tree)

    if args.json:
        print(dumps_canonical(summary, indent=2))
    else:
        print(f"root: {summary.root}")
        print(f"size: {summary.size}")
        print(f"height: {summary.height}")
        print(f"leaf_count: {summary.leaf_count}")
        print(f"hash_algorithm: {summary.hash_algorithm}")

    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Emit {root, index, hash_algorithm, proof} for one element as JSON."""
    tree = build_tree(args)
    proof = tree.get_proof(args.index)

    document = {
        "root": tree.get_root(),
        "index": args.index,
        "hash_algorithm": tree.hasher.algorithm,
        "proof": ProofModel.from_proof(proof),
    }
    write_output(dumps_canonical(document, indent=2), args.out)
    return EXIT_SUCCESS


def range_prove_cmd(args: Namespace) -> int:
    """Emit a bundle {root, start_index, end_index, elements, proof} as JSON."""
    tree = build_tree(args)
    proof = tree.get_aggregated_proof(args.start, args.end)
    naive_size = (args.end - args.start) * tree.height

    logger.info(
        f"Aggregated proof [{args.start}, {args.end}): {proof.size} hashes "
        f"vs {naive_size} for individual proofs"
    )

    document = {
        "root": tree.get_root(),
        "start_index": args.start,
        "end_index": args.end,
        "hash_algorithm": tree.hasher.algorithm,
        "elements": tree.elements[args.start:args.end],
        "proof": AggregatedProofModel.from_proof(proof),
    }
    write_output(dumps_canonical(document, indent=2), args.out)
    return EXIT_SUCCESS
