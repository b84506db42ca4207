"""Normalisation of caller-supplied claim inputs into canonical byte values.

Every helper accepts either raw ``bytes`` or a hex string (with or without a
``0x`` prefix) and returns the exact bytes that enter the EIP-712 encoding.
Invalid input raises the matching :mod:`mphtlc_claims.errors` exception.
"""
from __future__ import annotations

from typing import Any, Type, Union

from eth_utils import decode_hex, is_checksum_address, to_checksum_address

from .errors import (
    ClaimAuthorizationError,
    InvalidAddress,
    InvalidChainId,
    InvalidLockId,
    InvalidPrivateKey,
    InvalidSignature,
)

BytesLike = Union[bytes, bytearray, str]

ADDRESS_LENGTH = 20
LOCK_ID_LENGTH = 32
DIGEST_LENGTH = 32
PRIVATE_KEY_LENGTH = 32

UINT256_MAX = 2**256 - 1
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def _strip_prefix(text: str) -> str:
    text = text.strip()
    if text[:2] in ("0x", "0X"):
        return text[2:]
    return text


def _to_bytes(value: Any, length: int, error: Type[ClaimAuthorizationError], label: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        body = _strip_prefix(value)
        if not body:
            raise error(f"{label} is empty")
        try:
            raw = decode_hex(body)
        except ValueError as exc:
            raise error(f"{label} is not valid hex: {value!r}") from exc
    else:
        raise error(f"{label} must be bytes or a hex string, got {type(value).__name__}")

    if len(raw) != length:
        raise error(f"{label} must be exactly {length} bytes, got {len(raw)}")
    return raw


def normalise_address(value: BytesLike, label: str = "address") -> bytes:
    """Return the raw 20 bytes of an address.

    Lowercase and uppercase hex are accepted as-is. Mixed-case strings are
    treated as EIP-55 checksummed and rejected when the checksum is wrong.
    """

    raw = _to_bytes(value, ADDRESS_LENGTH, InvalidAddress, label)
    if isinstance(value, str):
        body = _strip_prefix(value)
        if body != body.lower() and body != body.upper() and not is_checksum_address(f"0x{body}"):
            raise InvalidAddress(f"{label} has an invalid EIP-55 checksum: {value!r}")
    return raw


def checksum_address(value: BytesLike, label: str = "address") -> str:
    """Return the EIP-55 checksummed form of ``value``."""

    return to_checksum_address(normalise_address(value, label))


def normalise_lock_id(value: BytesLike) -> bytes:
    return _to_bytes(value, LOCK_ID_LENGTH, InvalidLockId, "lock id")


def normalise_digest(
    value: BytesLike,
    label: str = "signing digest",
    error: Type[ClaimAuthorizationError] = InvalidSignature,
) -> bytes:
    return _to_bytes(value, DIGEST_LENGTH, error, label)


def normalise_chain_id(value: Union[int, str]) -> int:
    """Return ``value`` as a positive integer that fits in a ``uint256``.

    Strings are parsed as decimal, or hex when ``0x`` prefixed. Floats and
    booleans are rejected outright so that large identifiers are never
    rounded on the way in.
    """

    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidChainId(f"chain id must be an integer, got {type(value).__name__}")

    if isinstance(value, str):
        text = value.strip()
        try:
            chain_id = int(text, 16) if text[:2] in ("0x", "0X") else int(text, 10)
        except ValueError as exc:
            raise InvalidChainId(f"chain id is not an integer: {value!r}") from exc
    else:
        chain_id = value

    if chain_id <= 0:
        raise InvalidChainId(f"chain id must be positive, got {chain_id}")
    if chain_id > UINT256_MAX:
        raise InvalidChainId("chain id does not fit in a uint256")
    return chain_id


def normalise_private_key(value: Any) -> bytes:
    """Return 32 bytes of secp256k1 private key material.

    The scalar must lie in ``[1, n - 1]``; zero and values at or above the
    curve order are rejected.
    """

    if value is None:
        raise InvalidPrivateKey("private key is missing")
    raw = _to_bytes(value, PRIVATE_KEY_LENGTH, InvalidPrivateKey, "private key")
    scalar = int.from_bytes(raw, "big")
    if not 0 < scalar < SECP256K1_N:
        raise InvalidPrivateKey("private key is outside the secp256k1 scalar range")
    return raw


__all__ = [
    "ADDRESS_LENGTH",
    "DIGEST_LENGTH",
    "LOCK_ID_LENGTH",
    "SECP256K1_N",
    "UINT256_MAX",
    "checksum_address",
    "normalise_address",
    "normalise_chain_id",
    "normalise_digest",
    "normalise_lock_id",
    "normalise_private_key",
]
