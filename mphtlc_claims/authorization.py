"""High-level helpers that sign and verify complete claim authorisations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

from .digest import Claim
from .domain import ClaimDomain
from .encoding import BytesLike, checksum_address
from .signers import HashSigner
from .signing import ClaimSignature, recover_signer


@dataclass(frozen=True)
class SignedClaim:
    """A claim together with the digest and signature that authorise it."""

    claim: Claim
    domain: ClaimDomain
    struct_hash: bytes
    signing_digest: bytes
    signature: ClaimSignature
    signer: str

    def as_dict(self) -> Dict[str, Any]:
        """Serialise the authorisation to a JSON-friendly dictionary."""

        return {
            "lock_id": "0x" + self.claim.lock_id.hex(),
            "receiver": self.claim.receiver_address,
            "chain_id": self.domain.chain_id,
            "verifying_contract": self.domain.contract_address,
            "domain_name": self.domain.name,
            "domain_version": self.domain.version,
            "domain_separator": "0x" + self.domain.separator.hex(),
            "struct_hash": "0x" + self.struct_hash.hex(),
            "signing_digest": "0x" + self.signing_digest.hex(),
            "signature": self.signature.hex,
            "signer": self.signer,
        }


def sign_claim(
    lock_id: BytesLike,
    receiver: BytesLike,
    chain_id: Union[int, str],
    contract: BytesLike,
    signer: HashSigner,
) -> SignedClaim:
    """Build the claim digest for ``(lock_id, receiver)`` and sign it with ``signer``."""

    claim = Claim(lock_id, receiver)  # type: ignore[arg-type]
    domain = ClaimDomain.for_contract(chain_id, contract)
    struct_hash = claim.struct_hash()
    digest = claim.signing_digest(domain)
    signature = signer.sign_digest(digest)
    return SignedClaim(
        claim=claim,
        domain=domain,
        struct_hash=struct_hash,
        signing_digest=digest,
        signature=signature,
        signer=signer.address,
    )


def verify_claim(
    lock_id: BytesLike,
    receiver: BytesLike,
    chain_id: Union[int, str],
    contract: BytesLike,
    signature: Any,
    expected_signer: BytesLike,
) -> bool:
    """Return ``True`` if ``signature`` authorises the claim in the given domain.

    The digest is rebuilt from the supplied fields, so a signature produced for
    another chain, contract, lock or receiver recovers to a different address.
    """

    digest = Claim(lock_id, receiver).signing_digest(  # type: ignore[arg-type]
        ClaimDomain.for_contract(chain_id, contract)
    )
    return recover_signer(digest, signature) == checksum_address(expected_signer, "expected signer")


__all__ = ["SignedClaim", "sign_claim", "verify_claim"]
