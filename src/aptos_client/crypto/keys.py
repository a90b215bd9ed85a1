"""
Abstract key and signature interfaces.

Every public key variant exposes its raw bytes, its BCS form, the
authentication key (and so the address) it derives, and signature
verification.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import IntEnum

from ..codec import BcsSerializable
from ..core.address import AccountAddress, AuthenticationKey


class AnyPublicKeyVariant(IntEnum):
    """ULEB128 tags of the AnyPublicKey wrapper."""

    ED25519 = 0
    SECP256K1 = 1
    SECP256R1 = 2
    KEYLESS = 3
    FEDERATED_KEYLESS = 4


class AnySignatureVariant(IntEnum):
    """ULEB128 tags of the AnySignature wrapper."""

    ED25519 = 0
    SECP256K1 = 1
    WEBAUTHN = 2
    KEYLESS = 3


class Signature(BcsSerializable):
    """Base class for single and composite signatures."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Raw signature bytes (without BCS length prefix)."""

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return type(self) is type(other) and self.to_bcs() == other.to_bcs()

    def __hash__(self) -> int:
        return hash(self.to_bcs())


class PublicKey(BcsSerializable):
    """Base class for public key variants."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Raw key bytes as used in authentication key derivation."""

    @abstractmethod
    def auth_key(self) -> AuthenticationKey:
        """Derive the authentication key for this key."""

    @abstractmethod
    def verify_signature(self, message: bytes, signature: Signature) -> bool:
        """
        Verify a signature over ``message``.

        Returns:
            True if valid, False otherwise
        """

    def account_address(self) -> AccountAddress:
        return self.auth_key().account_address()

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return type(self) is type(other) and self.to_bcs() == other.to_bcs()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.to_bcs()))
