#!/usr/bin/env python3
"""Sign an MPHTLC_LGP ``Claim(lockId, receiver)`` authorisation."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional, Sequence

from mphtlc_claims.authorization import sign_claim
from mphtlc_claims.config import load_settings
from mphtlc_claims.errors import ClaimAuthorizationError, ConfigError, RemoteSignerError
from mphtlc_claims.signers import RemoteHashSigner


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--lock-id", required=True, help="Escrow lock identifier (bytes32 hex string)")
    parser.add_argument("--receiver", required=True, help="Address authorised to claim the lock")
    parser.add_argument(
        "--chain-id",
        default=None,
        help="EVM chain identifier. Defaults to CHAIN_ID (11155111 when unset).",
    )
    parser.add_argument(
        "--contract",
        default=None,
        help="Verifying MPHTLC_LGP contract. Defaults to the 'htlc' entry of DEPLOYED_JSON.",
    )
    parser.add_argument(
        "--signer-url",
        default=None,
        help="Hash-signing service to use instead of SIGNER_PK.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the full signed claim as JSON for downstream scripting.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        help="Logging verbosity (DEBUG, INFO, WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings()
        chain_id = args.chain_id if args.chain_id is not None else settings.chain_id
        contract = args.contract or settings.deployed().htlc
        signer = RemoteHashSigner(args.signer_url) if args.signer_url else settings.build_signer()
        signed = sign_claim(args.lock_id, args.receiver, chain_id, contract, signer)
    except (ClaimAuthorizationError, ConfigError, RemoteSignerError) as exc:
        print(f"[❌] {exc}", file=sys.stderr)
        return 1

    if args.json:
        json.dump(signed.as_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(signed.signature.hex)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
