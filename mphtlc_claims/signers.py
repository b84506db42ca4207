"""Signing backends that turn a claim digest into a recoverable signature.

Two backends are provided:

* :class:`LocalKeySigner` holds key material passed in explicitly by the
  caller. There is no process-wide wallet object.
* :class:`RemoteHashSigner` talks to a hash-signing service (for example a
  threshold-signature coordinator) that only returns the ``(r, s)`` pair. The
  recovery id is derived locally by checking which candidate recovers to the
  service's advertised address.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import requests
from eth_account import Account

from .encoding import SECP256K1_N, BytesLike, checksum_address, normalise_digest, normalise_private_key
from .errors import InvalidAddress, InvalidSignature, RemoteSignerError
from .signing import ClaimSignature, recover_signer, sign_digest

_LOGGER = logging.getLogger(__name__)


class HashSigner(Protocol):
    @property
    def address(self) -> str:
        ...

    def sign_digest(self, digest: BytesLike) -> ClaimSignature:
        ...


class LocalKeySigner:
    """Sign digests with an in-memory secp256k1 key."""

    def __init__(self, private_key: Any) -> None:
        self._key = normalise_private_key(private_key)
        self._address = Account.from_key(self._key).address

    def __repr__(self) -> str:
        return f"LocalKeySigner(address={self._address!r})"

    @property
    def address(self) -> str:
        return self._address

    def sign_digest(self, digest: BytesLike) -> ClaimSignature:
        return sign_digest(digest, self._key)


def _parse_scalar(value: Any, name: str) -> int:
    if not isinstance(value, str):
        raise RemoteSignerError(f"signer response field {name!r} must be a hex string")
    text = value.strip()
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if len(text) != 64:
        raise RemoteSignerError(f"signer response field {name!r} must be 32 bytes")
    try:
        return int(text, 16)
    except ValueError as exc:
        raise RemoteSignerError(f"signer response field {name!r} is not hex") from exc


def derive_recovery_id(digest: BytesLike, r: int, s: int, expected_address: BytesLike) -> ClaimSignature:
    """Return the ``(r, s, v)`` signature whose recovery yields ``expected_address``.

    Signers that return a high ``s`` are normalised to the low-``s`` form
    first, since on-chain verifiers reject the malleable variant.

    Raises:
        InvalidSignature: If neither recovery id matches the expected signer.
    """

    expected = checksum_address(expected_address, "expected signer")
    message_hash = normalise_digest(digest)
    if s > SECP256K1_N // 2:
        s = SECP256K1_N - s

    for v in (27, 28):
        candidate = ClaimSignature(r=r, s=s, v=v)
        try:
            recovered = recover_signer(message_hash, candidate)
        except InvalidSignature:
            continue
        if recovered == expected:
            return candidate

    raise InvalidSignature(f"cannot derive recovery id: signature does not match {expected}")


@dataclass
class RemoteHashSigner:
    """Client for a service exposing ``/address``, ``/health`` and ``/signHash``."""

    base_url: str
    session: Optional[requests.Session] = None
    timeout: Optional[float] = 10.0
    _address: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
        self.base_url = self.base_url.rstrip("/")
        self._headers = {
            "Accept": "application/json",
            "User-Agent": "mphtlc-claims/1.0",
        }

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        _LOGGER.debug("%s %s", method, url)
        try:
            if method == "GET":
                response = self.session.get(url, headers=self._headers, timeout=self.timeout)
            else:
                response = self.session.post(url, json=payload, headers=self._headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise RemoteSignerError(f"signer request {method} {path} failed: {exc}") from exc
        return response

    def _json(self, response: requests.Response, path: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteSignerError(f"signer returned invalid JSON for {path}") from exc
        if not isinstance(data, dict):
            raise RemoteSignerError(f"unexpected payload for {path}: {data!r}")
        return data

    def health(self) -> bool:
        try:
            self._request("GET", "/health")
        except RemoteSignerError as exc:
            _LOGGER.warning("Signer at %s is unhealthy: %s", self.base_url, exc)
            return False
        return True

    @property
    def address(self) -> str:
        if self._address is None:
            data = self._json(self._request("GET", "/address"), "/address")
            raw = data.get("address")
            if not isinstance(raw, str):
                raise RemoteSignerError("signer /address response is missing 'address'")
            try:
                self._address = checksum_address(raw, "signer address")
            except InvalidAddress as exc:
                raise RemoteSignerError(str(exc)) from exc
            _LOGGER.info("Remote signer %s reports address %s", self.base_url, self._address)
        return self._address

    def sign_digest(self, digest: BytesLike) -> ClaimSignature:
        message_hash = normalise_digest(digest)
        data = self._json(
            self._request("POST", "/signHash", {"hash_hex": "0x" + message_hash.hex()}),
            "/signHash",
        )
        r = _parse_scalar(data.get("r"), "r")
        s = _parse_scalar(data.get("s"), "s")
        return derive_recovery_id(message_hash, r, s, self.address)


__all__ = [
    "HashSigner",
    "LocalKeySigner",
    "RemoteHashSigner",
    "derive_recovery_id",
]
