"""
Ed25519 cryptographic operations.

Provides Ed25519 key generation, signing, and verification on top of the
``cryptography`` package, plus the BCS forms of keys and signatures.
"""

from __future__ import annotations

from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..codec import BinaryReader, BinaryWriter
from ..core.address import AuthenticationKey, AuthKeyScheme
from ..runtime.errors import ErrorCode, MalformedInputError
from .derivation import derive_private_key
from .keys import PublicKey, Signature

PUBLIC_KEY_LENGTH = 32
PRIVATE_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class Ed25519Error(MalformedInputError):
    """Invalid Ed25519 key or signature material."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_LENGTH, cause=cause)


def _from_hex(hex_string: str) -> bytes:
    text = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise Ed25519Error(f"Invalid hex string: {e}", cause=e)


class Ed25519Signature(Signature):
    """64-byte Ed25519 signature."""

    def __init__(self, signature: bytes):
        """
        Args:
            signature: 64-byte Ed25519 signature

        Raises:
            Ed25519Error: If the length is wrong
        """
        if len(signature) != SIGNATURE_LENGTH:
            raise Ed25519Error(f"Ed25519 signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
        self._signature = bytes(signature)

    @classmethod
    def from_hex(cls, signature_hex: str) -> Ed25519Signature:
        return cls(_from_hex(signature_hex))

    def to_bytes(self) -> bytes:
        return self._signature

    def serialize(self, writer: BinaryWriter) -> None:
        writer.len_prefixed_bytes(self._signature)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> Ed25519Signature:
        return cls(reader.len_prefixed_bytes())

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Ed25519Signature.from_hex('{self._signature.hex()}')"


class Ed25519PublicKey(PublicKey):
    """
    Ed25519 public key.

    Provides verification, address derivation and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Ed25519 public key

        Raises:
            Ed25519Error: If key is invalid
        """
        if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise Ed25519Error(
                f"Ed25519 public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key_bytes)}"
            )

        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise Ed25519Error(f"Invalid Ed25519 public key: {e}", cause=e)

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PublicKey:
        """Create public key from hex string, with or without ``0x``."""
        return cls(_from_hex(hex_string))

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Ed25519PublicKey:
        return cls(key_bytes)

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def auth_key(self) -> AuthenticationKey:
        return AuthenticationKey.from_scheme(AuthKeyScheme.ED25519, self._key_bytes)

    def verify_signature(self, message: bytes, signature: Union[Signature, bytes]) -> bool:
        """
        Verify a signature against a message.

        Args:
            message: Message that was signed
            signature: Ed25519Signature, or its 64 raw bytes

        Returns:
            True if signature is valid
        """
        if isinstance(signature, Ed25519Signature):
            raw = signature.to_bytes()
        elif isinstance(signature, (bytes, bytearray)):
            raw = bytes(signature)
        else:
            return False

        if len(raw) != SIGNATURE_LENGTH:
            return False

        try:
            self._crypto_key.verify(raw, message)
            return True
        except InvalidSignature:
            return False

    def serialize(self, writer: BinaryWriter) -> None:
        writer.len_prefixed_bytes(self._key_bytes)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> Ed25519PublicKey:
        return cls(reader.len_prefixed_bytes())

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Ed25519PublicKey.from_hex('{self._key_bytes.hex()}')"


class Ed25519PrivateKey:
    """
    Ed25519 private key.

    Held in memory only; never serialized by the library.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize from 32-byte private key seed.

        Args:
            private_key_bytes: 32-byte Ed25519 private key seed

        Raises:
            Ed25519Error: If key is invalid
        """
        if len(private_key_bytes) != PRIVATE_KEY_LENGTH:
            raise Ed25519Error(
                f"Ed25519 private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(private_key_bytes)}"
            )

        self._key_bytes = bytes(private_key_bytes)
        self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._key_bytes)
        self._public_key = Ed25519PublicKey(
            self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def generate(cls) -> Ed25519PrivateKey:
        """Generate a new random Ed25519 private key."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        private_bytes = crypto_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(private_bytes)

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PrivateKey:
        """Create private key from hex string, with or without ``0x``."""
        return cls(_from_hex(hex_string))

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Ed25519PrivateKey:
        return cls(key_bytes)

    @classmethod
    def from_derivation_path(cls, path: str, mnemonic: str) -> Ed25519PrivateKey:
        """
        Derive a private key from a BIP-39 mnemonic along a hardened path.

        Args:
            path: Path such as ``m/44'/637'/0'/0'/0'``
            mnemonic: Space-separated mnemonic words
        """
        return cls(derive_private_key(path, mnemonic))

    def to_bytes(self) -> bytes:
        """Get the 32-byte private key seed."""
        return self._key_bytes

    def to_hex(self) -> str:
        return "0x" + self._key_bytes.hex()

    def public_key(self) -> Ed25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def sign(self, message: bytes) -> Ed25519Signature:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        return Ed25519Signature(self._crypto_key.sign(message))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ed25519PrivateKey):
            return NotImplemented
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return f"Ed25519PrivateKey(public={self._public_key.to_hex()})"

    def __repr__(self) -> str:
        return f"Ed25519PrivateKey(public={self._public_key.to_hex()})"
