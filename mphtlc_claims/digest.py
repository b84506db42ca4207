"""Structured hashing of ``Claim(bytes32 lockId,address receiver)`` payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Union

from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from .domain import EIP712_DOMAIN_FIELDS, ClaimDomain
from .encoding import BytesLike, normalise_address, normalise_digest, normalise_lock_id
from .errors import ClaimAuthorizationError

_LOGGER = logging.getLogger(__name__)

CLAIM_TYPE = "Claim(bytes32 lockId,address receiver)"
CLAIM_TYPEHASH = keccak(text=CLAIM_TYPE)
CLAIM_FIELDS = [
    {"name": "lockId", "type": "bytes32"},
    {"name": "receiver", "type": "address"},
]

EIP712_PREFIX = b"\x19\x01"


def compute_claim_struct_hash(lock_id: BytesLike, receiver: BytesLike) -> bytes:
    """Return ``keccak256(abi.encode(CLAIM_TYPEHASH, lockId, receiver))``."""

    lock_bytes = normalise_lock_id(lock_id)
    receiver_bytes = normalise_address(receiver, "receiver")
    encoded = encode(["bytes32", "bytes32", "address"], [CLAIM_TYPEHASH, lock_bytes, receiver_bytes])
    return keccak(encoded)


def build_signing_digest(domain_separator: BytesLike, claim_struct_hash: BytesLike) -> bytes:
    """Return ``keccak256("\\x19\\x01" || domainSeparator || structHash)``."""

    separator = normalise_digest(domain_separator, "domain separator", ClaimAuthorizationError)
    struct_hash = normalise_digest(claim_struct_hash, "claim struct hash", ClaimAuthorizationError)
    return keccak(EIP712_PREFIX + separator + struct_hash)


@dataclass(frozen=True)
class Claim:
    """Authorisation for ``receiver`` to unlock the escrow identified by ``lock_id``."""

    lock_id: bytes
    receiver: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "lock_id", normalise_lock_id(self.lock_id))
        object.__setattr__(self, "receiver", normalise_address(self.receiver, "receiver"))

    @property
    def receiver_address(self) -> str:
        return to_checksum_address(self.receiver)

    def struct_hash(self) -> bytes:
        return compute_claim_struct_hash(self.lock_id, self.receiver)

    def signing_digest(self, domain: ClaimDomain) -> bytes:
        digest = build_signing_digest(domain.separator, self.struct_hash())
        _LOGGER.debug(
            "Claim digest lock=0x%s receiver=%s chain=%s: 0x%s",
            self.lock_id.hex(),
            self.receiver_address,
            domain.chain_id,
            digest.hex(),
        )
        return digest

    def as_typed_data(self) -> Dict[str, Any]:
        return {"lockId": self.lock_id, "receiver": self.receiver_address}


def claim_signing_digest(
    lock_id: BytesLike,
    receiver: BytesLike,
    chain_id: Union[int, str],
    contract: BytesLike,
) -> bytes:
    """Compute the digest a signer must sign to authorise a claim."""

    return Claim(lock_id, receiver).signing_digest(ClaimDomain.for_contract(chain_id, contract))  # type: ignore[arg-type]


def claim_typed_data(
    lock_id: BytesLike,
    receiver: BytesLike,
    chain_id: Union[int, str],
    contract: BytesLike,
) -> Dict[str, Any]:
    """Return the full EIP-712 payload for wallets that sign typed data directly.

    ``lockId`` is carried as raw bytes; callers that need JSON should hex
    encode it.
    """

    claim = Claim(lock_id, receiver)  # type: ignore[arg-type]
    domain = ClaimDomain.for_contract(chain_id, contract)
    return {
        "types": {
            "EIP712Domain": list(EIP712_DOMAIN_FIELDS),
            "Claim": list(CLAIM_FIELDS),
        },
        "primaryType": "Claim",
        "domain": domain.as_typed_data(),
        "message": claim.as_typed_data(),
    }


__all__ = [
    "CLAIM_FIELDS",
    "CLAIM_TYPE",
    "CLAIM_TYPEHASH",
    "EIP712_PREFIX",
    "Claim",
    "build_signing_digest",
    "claim_signing_digest",
    "claim_typed_data",
    "compute_claim_struct_hash",
]
