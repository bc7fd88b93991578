"""
CLI Prove Command

Generate an inclusion proof for one item and check it against the tree.

Usage:
    mrkl prove items.txt ITEM [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from mrkl.schemas.errors import ErrorCodes, MerkleError
from mrkl_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_tree,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """Print the proof for ``args.item``; exit 2 if there is none or it fails."""
    tree = build_tree(args)
    proof = tree.generate_proof(args.item)

    if proof is None:
        error = MerkleError(
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            message=f"No proof: {args.item!r} is not in the tree",
            details={"item": args.item},
        )
        if args.json:
            print(json.dumps({"ok": False, "error": error.model_dump()}, indent=2))
        else:
            print(error.message)
        return EXIT_VERIFICATION_FAILED

    shape_ok = proof.matches_shape(tree.root_digest, tree.height)
    verified = proof.verify(args.item)
    logger.info(f"Proof for {args.item!r}: shape_ok={shape_ok} verified={verified}")

    if args.json:
        print(json.dumps(
            {"ok": shape_ok and verified, "item": args.item, "proof": proof.to_dict()},
            indent=2,
        ))
    else:
        print(f"root_digest: {proof.root_digest}")
        for index, step in enumerate(proof.steps):
            digest = step.digest or "-"
            print(f"  {index}: {step.side.value:<5} {digest}")
        print(f"shape_ok: {str(shape_ok).lower()}")
        print(f"verified: {str(verified).lower()}")

    return EXIT_SUCCESS if shape_ok and verified else EXIT_VERIFICATION_FAILED
