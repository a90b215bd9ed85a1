"""
Keyless (OpenID-issued) public keys.

A keyless key is the issuer URL plus a 32-byte commitment to the user's
identity. It can be placed inside a MultiKey key set and used for address
derivation; signatures from it are not verified by this library.
"""

from __future__ import annotations

from ..codec import BinaryReader, BinaryWriter
from ..core.address import AuthenticationKey, AuthKeyScheme
from ..runtime.errors import CapabilityGapError, ErrorCode, MalformedInputError
from .keys import AnyPublicKeyVariant, PublicKey, Signature

ID_COMMITMENT_LENGTH = 32


class KeylessPublicKey(PublicKey):
    """Issuer plus identity commitment."""

    def __init__(self, iss: str, id_commitment: bytes):
        """
        Args:
            iss: OpenID issuer, e.g. ``https://accounts.google.com``
            id_commitment: 32-byte identity commitment

        Raises:
            MalformedInputError: If the commitment length is wrong
        """
        if len(id_commitment) != ID_COMMITMENT_LENGTH:
            raise MalformedInputError(
                f"Id commitment must be {ID_COMMITMENT_LENGTH} bytes, got {len(id_commitment)}",
                ErrorCode.INVALID_LENGTH,
            )
        self._iss = iss
        self._id_commitment = bytes(id_commitment)

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> KeylessPublicKey:
        return cls.from_bcs(key_bytes)

    @classmethod
    def from_hex(cls, hex_string: str) -> KeylessPublicKey:
        text = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string
        try:
            raw = bytes.fromhex(text)
        except ValueError as e:
            raise MalformedInputError(f"Invalid hex string: {e}", cause=e)
        return cls.from_bytes(raw)

    @property
    def iss(self) -> str:
        return self._iss

    @property
    def id_commitment(self) -> bytes:
        return self._id_commitment

    def to_bytes(self) -> bytes:
        return self.to_bcs()

    def auth_key(self) -> AuthenticationKey:
        """Auth key of a standalone keyless account: ``uleb(3) || bcs`` under scheme 0."""
        writer = BinaryWriter()
        writer.uleb128(AnyPublicKeyVariant.KEYLESS)
        writer.fixed_bytes(self.to_bytes())
        return AuthenticationKey.from_scheme(AuthKeyScheme.SINGLE_KEY, writer.to_bytes())

    def verify_signature(self, message: bytes, signature: Signature) -> bool:
        raise CapabilityGapError(
            "Keyless signature verification is not supported; keyless keys are used for address derivation only"
        )

    def serialize(self, writer: BinaryWriter) -> None:
        writer.str(self._iss)
        writer.len_prefixed_bytes(self._id_commitment)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> KeylessPublicKey:
        iss = reader.str()
        id_commitment = reader.len_prefixed_bytes()
        return cls(iss, id_commitment)

    def __repr__(self) -> str:
        return f"KeylessPublicKey(iss={self._iss!r}, id_commitment=0x{self._id_commitment.hex()})"
