"""Environment-driven configuration for the claim signing scripts.

Nothing in the signing core reads this module; it exists so command-line
callers can resolve key material, the target chain and deployed contract
addresses the same way.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .encoding import checksum_address, normalise_chain_id
from .errors import ClaimAuthorizationError, ConfigError
from .signers import HashSigner, LocalKeySigner, RemoteHashSigner

_LOGGER = logging.getLogger(__name__)

DEFAULT_CHAIN_ID = 11155111
DEFAULT_DEPLOYED_JSON = "./configs/deployed.json"


@dataclass(frozen=True)
class DeployedContracts:
    """Addresses written by the deployment tooling."""

    token: str
    htlc: str


@dataclass(frozen=True)
class SignerSettings:
    signer_pk: Optional[str] = field(repr=False)
    chain_id: int
    signer_url: Optional[str]
    deployed_json: str

    def build_signer(self) -> HashSigner:
        """Return a remote signer when ``TSS_SIGNER_URL`` is set, else a local key signer.

        Raises:
            ConfigError: If neither a signer URL nor ``SIGNER_PK`` is configured.
        """

        if self.signer_url:
            _LOGGER.info("Using remote hash signer at %s", self.signer_url)
            return RemoteHashSigner(self.signer_url)
        if not self.signer_pk:
            raise ConfigError("Set SIGNER_PK (or TSS_SIGNER_URL) before signing claims.")
        return LocalKeySigner(self.signer_pk)

    def deployed(self, project_root: Union[str, Path, None] = None) -> DeployedContracts:
        return load_deployed(self.deployed_json, project_root)


def _get(env: Mapping[str, str], key: str) -> Optional[str]:
    value = env.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(env: Optional[Mapping[str, str]] = None) -> SignerSettings:
    """Resolve signer settings from ``env``.

    Parameters
    ----------
    env:
        Optional mapping used to resolve environment variables. When omitted
        ``os.environ`` is used after loading a ``.env`` file found from
        the current working directory.

    Raises
    ------
    ConfigError
        If ``CHAIN_ID`` is not a positive integer.
    """

    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    raw_chain_id = _get(env, "CHAIN_ID") or str(DEFAULT_CHAIN_ID)
    try:
        chain_id = normalise_chain_id(raw_chain_id)
    except ClaimAuthorizationError as exc:
        raise ConfigError(f"bad CHAIN_ID: {exc}") from exc

    return SignerSettings(
        signer_pk=_get(env, "SIGNER_PK"),
        chain_id=chain_id,
        signer_url=_get(env, "TSS_SIGNER_URL"),
        deployed_json=_get(env, "DEPLOYED_JSON") or DEFAULT_DEPLOYED_JSON,
    )


def load_deployed(path: Union[str, Path], project_root: Union[str, Path, None] = None) -> DeployedContracts:
    """Read ``{"token": ..., "htlc": ...}`` from the deployment JSON.

    Relative paths are resolved against ``project_root`` (the current
    directory when omitted).
    """

    resolved = Path(path)
    if not resolved.is_absolute() and project_root is not None:
        resolved = Path(project_root) / resolved

    try:
        payload = json.loads(resolved.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"deployment file not found: {resolved}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"deployment file is not valid JSON: {resolved}") from exc

    if not isinstance(payload, Mapping):
        raise ConfigError(f"deployment file must contain an object: {resolved}")
    token = payload.get("token")
    htlc = payload.get("htlc")
    if not token or not htlc:
        raise ConfigError("deployed.json missing token/htlc")

    try:
        return DeployedContracts(
            token=checksum_address(token, "token"),
            htlc=checksum_address(htlc, "htlc"),
        )
    except ClaimAuthorizationError as exc:
        raise ConfigError(f"deployment file has a bad address: {exc}") from exc


__all__ = [
    "DEFAULT_CHAIN_ID",
    "DEFAULT_DEPLOYED_JSON",
    "DeployedContracts",
    "SignerSettings",
    "load_deployed",
    "load_settings",
]
