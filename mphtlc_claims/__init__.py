"""EIP-712 claim authorisations for the MPHTLC_LGP escrow contract."""
from __future__ import annotations

from .authorization import SignedClaim, sign_claim, verify_claim
from .digest import (
    CLAIM_TYPE,
    CLAIM_TYPEHASH,
    EIP712_PREFIX,
    Claim,
    build_signing_digest,
    claim_signing_digest,
    claim_typed_data,
    compute_claim_struct_hash,
)
from .domain import (
    EIP712_DOMAIN_TYPE,
    EIP712_DOMAIN_TYPEHASH,
    PROTOCOL_NAME,
    PROTOCOL_VERSION,
    ClaimDomain,
    build_domain_separator,
)
from .errors import (
    ClaimAuthorizationError,
    ConfigError,
    InvalidAddress,
    InvalidChainId,
    InvalidLockId,
    InvalidPrivateKey,
    InvalidSignature,
    RemoteSignerError,
)
from .signers import HashSigner, LocalKeySigner, RemoteHashSigner, derive_recovery_id
from .signing import ClaimSignature, recover_signer, sign_digest, verify_signature

__all__ = [
    "CLAIM_TYPE",
    "CLAIM_TYPEHASH",
    "EIP712_DOMAIN_TYPE",
    "EIP712_DOMAIN_TYPEHASH",
    "EIP712_PREFIX",
    "PROTOCOL_NAME",
    "PROTOCOL_VERSION",
    "Claim",
    "ClaimAuthorizationError",
    "ClaimDomain",
    "ClaimSignature",
    "ConfigError",
    "HashSigner",
    "InvalidAddress",
    "InvalidChainId",
    "InvalidLockId",
    "InvalidPrivateKey",
    "InvalidSignature",
    "LocalKeySigner",
    "RemoteHashSigner",
    "RemoteSignerError",
    "SignedClaim",
    "build_domain_separator",
    "build_signing_digest",
    "claim_signing_digest",
    "claim_typed_data",
    "compute_claim_struct_hash",
    "derive_recovery_id",
    "recover_signer",
    "sign_claim",
    "sign_digest",
    "verify_claim",
    "verify_signature",
]
