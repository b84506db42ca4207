"""EIP-712 domain separator for the MPHTLC_LGP escrow contract.

The separator binds every claim signature to a single protocol version, chain
and verifying contract. It is computed the same way as OpenZeppelin's
``EIP712`` base contract::

    keccak256(abi.encode(
        keccak256("EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"),
        keccak256(bytes(name)),
        keccak256(bytes(version)),
        chainId,
        verifyingContract
    ))
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from .encoding import BytesLike, normalise_address, normalise_chain_id

_LOGGER = logging.getLogger(__name__)

PROTOCOL_NAME = "MPHTLC_LGP"
PROTOCOL_VERSION = "1"

EIP712_DOMAIN_TYPE = "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
EIP712_DOMAIN_TYPEHASH = keccak(text=EIP712_DOMAIN_TYPE)

EIP712_DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]


def build_domain_separator(
    protocol_name: str,
    version: str,
    chain_id: Union[int, str],
    contract: BytesLike,
) -> bytes:
    """Return the 32-byte EIP-712 domain separator.

    Raises:
        InvalidChainId: If ``chain_id`` is not a positive uint256.
        InvalidAddress: If ``contract`` is not a 20-byte address.
    """

    resolved_chain_id = normalise_chain_id(chain_id)
    contract_bytes = normalise_address(contract, "verifying contract")
    encoded = encode(
        ["bytes32", "bytes32", "bytes32", "uint256", "address"],
        [
            EIP712_DOMAIN_TYPEHASH,
            keccak(text=protocol_name),
            keccak(text=version),
            resolved_chain_id,
            contract_bytes,
        ],
    )
    separator = keccak(encoded)
    _LOGGER.debug(
        "Domain separator for %s v%s chain=%s contract=0x%s: 0x%s",
        protocol_name,
        version,
        resolved_chain_id,
        contract_bytes.hex(),
        separator.hex(),
    )
    return separator


@dataclass(frozen=True)
class ClaimDomain:
    """Chain and verifying contract a claim is scoped to."""

    chain_id: int
    verifying_contract: bytes
    name: str = PROTOCOL_NAME
    version: str = PROTOCOL_VERSION
    separator: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        chain_id = normalise_chain_id(self.chain_id)
        contract = normalise_address(self.verifying_contract, "verifying contract")
        object.__setattr__(self, "chain_id", chain_id)
        object.__setattr__(self, "verifying_contract", contract)
        object.__setattr__(
            self,
            "separator",
            build_domain_separator(self.name, self.version, chain_id, contract),
        )

    @classmethod
    def for_contract(cls, chain_id: Union[int, str], contract: BytesLike) -> "ClaimDomain":
        return cls(chain_id=chain_id, verifying_contract=contract)  # type: ignore[arg-type]

    @property
    def contract_address(self) -> str:
        return to_checksum_address(self.verifying_contract)

    def as_typed_data(self) -> Dict[str, Any]:
        """Return the ``domain`` member of an EIP-712 typed-data payload."""

        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.contract_address,
        }


__all__ = [
    "ClaimDomain",
    "EIP712_DOMAIN_FIELDS",
    "EIP712_DOMAIN_TYPE",
    "EIP712_DOMAIN_TYPEHASH",
    "PROTOCOL_NAME",
    "PROTOCOL_VERSION",
    "build_domain_separator",
]
