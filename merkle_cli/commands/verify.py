"""
CLI Verify Commands

Check proof files produced by `merkle prove` / `merkle range-prove`
against a trusted root.

Usage:
    merkle verify --root <hex> --proof proof.json [--json]
    merkle range-verify --root <hex> --bundle range.json [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from core.merkle import verify_aggregated_proof, verify_proof
from core.schemas.errors import MalformedProofException
from core.schemas.proof import AggregatedProofModel, ProofModel
from merkle_cli.config import resolve_hasher
from merkle_cli.inputs import read_json_file


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


def _report(ok: bool, root: str, output_json: bool) -> int:
    if output_json:
        print(json.dumps({"ok": ok, "root": root}, indent=2))
    else:
        print(f"root: {root}")
        print(f"valid: {str(ok).lower()}")

    if ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED


def _parse(model: type, data: object, path: Path):
    try:
        return model.model_validate(data).to_proof()
    except ValidationError as e:
        raise MalformedProofException(
            f"Malformed proof in {path}: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def verify_cmd(args: Namespace) -> int:
    """
    Verify a single-element proof file.

    The file may be the full `merkle prove` output or a bare proof object.
    """
    path = Path(args.proof)
    data = read_json_file(path)
    proof = _parse(ProofModel, data.get("proof", data), path)

    ok = verify_proof(args.root, proof, hasher=resolve_hasher(args))
    return _report(ok, args.root, args.json)


def range_verify_cmd(args: Namespace) -> int:
    """Verify a `merkle range-prove` bundle against --root."""
    path = Path(args.bundle)
    data = read_json_file(path)

    if "proof" not in data or "elements" not in data:
        raise MalformedProofException(
            f"{path} is not a range proof bundle (needs 'proof' and 'elements')"
        )

    proof = _parse(AggregatedProofModel, data["proof"], path)
    start_index = data.get("start_index", proof.start_index)
    end_index = data.get("end_index", proof.end_index)

    ok = verify_aggregated_proof(
        args.root,
        data["elements"],
        start_index,
        end_index,
        proof,
        hasher=resolve_hasher(args),
    )
    return _report(ok, args.root, args.json)
