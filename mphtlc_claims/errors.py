"""Exceptions raised while building, signing and verifying claim authorisations."""
from __future__ import annotations


class ClaimAuthorizationError(ValueError):
    """Base class for malformed claim inputs. Never worth retrying."""


class InvalidAddress(ClaimAuthorizationError):
    """Raised when a receiver or contract address is not a 20-byte value."""


class InvalidChainId(ClaimAuthorizationError):
    """Raised when a chain identifier is non-positive or not a uint256."""


class InvalidLockId(ClaimAuthorizationError):
    """Raised when a lock identifier is not exactly 32 bytes."""


class InvalidPrivateKey(ClaimAuthorizationError):
    """Raised when signing key material is missing, malformed or out of range."""


class InvalidSignature(ClaimAuthorizationError):
    """Raised when a signature cannot be parsed or no signer can be recovered."""


class RemoteSignerError(RuntimeError):
    """Raised when a remote hash-signing service responds unexpectedly."""


class ConfigError(RuntimeError):
    """Raised when signer configuration is incomplete or unreadable."""


__all__ = [
    "ClaimAuthorizationError",
    "ConfigError",
    "InvalidAddress",
    "InvalidChainId",
    "InvalidLockId",
    "InvalidPrivateKey",
    "InvalidSignature",
    "RemoteSignerError",
]
