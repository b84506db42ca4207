#!/usr/bin/env python3
"""Recover the signer of an MPHTLC_LGP claim signature."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from mphtlc_claims.digest import claim_signing_digest
from mphtlc_claims.encoding import checksum_address
from mphtlc_claims.errors import ClaimAuthorizationError
from mphtlc_claims.signing import recover_signer


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--lock-id", required=True, help="Escrow lock identifier (bytes32 hex string)")
    parser.add_argument("--receiver", required=True, help="Address authorised to claim the lock")
    parser.add_argument("--chain-id", required=True, help="EVM chain identifier the claim was signed for")
    parser.add_argument("--contract", required=True, help="Verifying MPHTLC_LGP contract address")
    parser.add_argument("--signature", required=True, help="65-byte signature as 0x-prefixed hex")
    parser.add_argument(
        "--expected",
        default=None,
        help="Expected signer. When given the exit code reports whether it matches.",
    )
    parser.add_argument("--json", action="store_true", help="Emit the result as JSON")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        digest = claim_signing_digest(args.lock_id, args.receiver, args.chain_id, args.contract)
        signer = recover_signer(digest, args.signature)
        expected = checksum_address(args.expected, "expected signer") if args.expected else None
    except ClaimAuthorizationError as exc:
        print(f"[❌] {exc}", file=sys.stderr)
        return 1

    matches = expected is None or signer == expected
    if args.json:
        payload = {"signing_digest": "0x" + digest.hex(), "signer": signer}
        if expected is not None:
            payload.update(expected=expected, matches=matches)
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(signer)
        if not matches:
            print(f"[❌] signer does not match expected {expected}", file=sys.stderr)
    return 0 if matches else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
