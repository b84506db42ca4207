"""Recoverable secp256k1 signatures over claim signing digests."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Union

from eth_account import Account
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import to_checksum_address

from .encoding import SECP256K1_N, BytesLike, normalise_address, normalise_digest, normalise_private_key
from .errors import InvalidSignature

_LOGGER = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65
_HALF_N = SECP256K1_N // 2


@dataclass(frozen=True)
class ClaimSignature:
    """65-byte ``r || s || v`` signature as accepted by ``ECDSA.recover``."""

    r: int
    s: int
    v: int

    def __post_init__(self) -> None:
        v = self.v + 27 if self.v in (0, 1) else self.v
        if v not in (27, 28):
            raise InvalidSignature(f"recovery id must be 0, 1, 27 or 28, got {self.v}")
        if not 0 < self.r < SECP256K1_N or not 0 < self.s < SECP256K1_N:
            raise InvalidSignature("signature scalars are outside the secp256k1 range")
        if self.s > _HALF_N:
            raise InvalidSignature("signature s value is in the upper half of the curve order")
        object.__setattr__(self, "v", v)

    @classmethod
    def from_bytes(cls, value: Union[bytes, bytearray]) -> "ClaimSignature":
        raw = bytes(value)
        if len(raw) != SIGNATURE_LENGTH:
            raise InvalidSignature(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
        return cls(
            r=int.from_bytes(raw[:32], "big"),
            s=int.from_bytes(raw[32:64], "big"),
            v=raw[64],
        )

    @classmethod
    def from_hex(cls, value: str) -> "ClaimSignature":
        text = value.strip()
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise InvalidSignature(f"signature is not valid hex: {value!r}") from exc
        return cls.from_bytes(raw)

    @classmethod
    def coerce(cls, value: Any) -> "ClaimSignature":
        if isinstance(value, cls):
            return value
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(value)
        if isinstance(value, str):
            return cls.from_hex(value)
        raise InvalidSignature(f"unsupported signature type {type(value).__name__}")

    def to_bytes(self) -> bytes:
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.v])

    @property
    def hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    @property
    def recovery_id(self) -> int:
        return self.v - 27

    def as_dict(self) -> Dict[str, Any]:
        return {
            "r": f"0x{self.r:064x}",
            "s": f"0x{self.s:064x}",
            "v": self.v,
            "signature": self.hex,
        }


def sign_digest(signing_digest: BytesLike, private_key: Any) -> ClaimSignature:
    """Sign a 32-byte digest with an explicit private key.

    The digest is signed as-is, without an EIP-191 personal-message prefix.

    Raises:
        InvalidPrivateKey: If ``private_key`` is missing, malformed or zero.
        InvalidSignature: If ``signing_digest`` is not 32 bytes.
    """

    key = normalise_private_key(private_key)
    digest = normalise_digest(signing_digest)
    signed = Account.unsafe_sign_hash(digest, key)
    return ClaimSignature(r=signed.r, s=signed.s, v=signed.v)


def recover_signer(signing_digest: BytesLike, signature: Any) -> str:
    """Return the checksummed address that produced ``signature`` over the digest."""

    digest = normalise_digest(signing_digest)
    parsed = ClaimSignature.coerce(signature)
    try:
        address = Account._recover_hash(digest, vrs=(parsed.v, parsed.r, parsed.s))
    except (BadSignature, ValidationError, ValueError) as exc:
        raise InvalidSignature(f"unable to recover signer: {exc}") from exc
    _LOGGER.debug("Recovered %s from digest 0x%s", address, digest.hex())
    return address


def verify_signature(signing_digest: BytesLike, signature: Any, expected_signer: BytesLike) -> bool:
    """Return ``True`` when ``signature`` over the digest recovers to ``expected_signer``."""

    expected = to_checksum_address(normalise_address(expected_signer, "expected signer"))
    return recover_signer(signing_digest, signature) == expected


__all__ = [
    "SIGNATURE_LENGTH",
    "ClaimSignature",
    "recover_signer",
    "sign_digest",
    "verify_signature",
]
