"""
M-of-N Ed25519 multi-signature keys and signatures.

The key set serializes as the concatenated 32-byte keys followed by the
threshold byte; signatures as the concatenated 64-byte signatures followed by
the 4-byte signer bitmap. Both travel as one length-prefixed blob.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..codec import BinaryReader, BinaryWriter
from ..core.address import AuthenticationKey, AuthKeyScheme
from ..runtime.errors import ErrorCode, MalformedInputError
from .bitmap import BITMAP_LENGTH, MAX_SIGNERS, Bitmap
from .ed25519 import PUBLIC_KEY_LENGTH, SIGNATURE_LENGTH, Ed25519PublicKey, Ed25519Signature
from .keys import PublicKey, Signature


def validate_threshold(key_count: int, threshold: int) -> None:
    """
    Check ``1 <= threshold <= key_count <= 32``.

    Raises:
        MalformedInputError: If the key set or threshold is out of range
    """
    if key_count == 0:
        raise MalformedInputError("Public key list must not be empty", ErrorCode.INVALID_THRESHOLD)
    if key_count > MAX_SIGNERS:
        raise MalformedInputError(
            f"At most {MAX_SIGNERS} public keys are supported, got {key_count}",
            ErrorCode.INVALID_THRESHOLD,
        )
    if not 1 <= threshold <= key_count:
        raise MalformedInputError(
            f"Threshold must be in [1, {key_count}], got {threshold}", ErrorCode.INVALID_THRESHOLD
        )


class MultiEd25519PublicKey(PublicKey):
    """Ordered Ed25519 key set with a signature threshold."""

    def __init__(self, keys: Sequence[Ed25519PublicKey], threshold: int):
        """
        Args:
            keys: Ed25519 public keys; order is significant
            threshold: Minimum number of signatures

        Raises:
            MalformedInputError: If the key list or threshold is invalid
        """
        validate_threshold(len(keys), threshold)
        self._keys: Tuple[Ed25519PublicKey, ...] = tuple(keys)
        self._threshold = threshold

    @property
    def keys(self) -> Tuple[Ed25519PublicKey, ...]:
        return self._keys

    @property
    def threshold(self) -> int:
        return self._threshold

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> MultiEd25519PublicKey:
        """Parse ``concat(keys) || threshold``."""
        n, rem = divmod(len(key_bytes) - 1, PUBLIC_KEY_LENGTH)
        if len(key_bytes) < PUBLIC_KEY_LENGTH + 1 or rem != 0:
            raise MalformedInputError(
                f"Invalid MultiEd25519 public key length {len(key_bytes)}", ErrorCode.INVALID_LENGTH
            )
        keys = [
            Ed25519PublicKey(key_bytes[i * PUBLIC_KEY_LENGTH : (i + 1) * PUBLIC_KEY_LENGTH])
            for i in range(n)
        ]
        return cls(keys, key_bytes[-1])

    def to_bytes(self) -> bytes:
        return b"".join(key.to_bytes() for key in self._keys) + bytes([self._threshold])

    def auth_key(self) -> AuthenticationKey:
        return AuthenticationKey.from_scheme(AuthKeyScheme.MULTI_ED25519, self.to_bytes())

    def index_of(self, key: Ed25519PublicKey) -> int:
        """
        Position of ``key`` in the set.

        Raises:
            MalformedInputError: If the key is not part of the set
        """
        for i, candidate in enumerate(self._keys):
            if candidate == key:
                return i
        raise MalformedInputError(f"Public key {key} not found in key set", ErrorCode.SIGNER_NOT_FOUND)

    def verify_signature(self, message: bytes, signature: Signature) -> bool:
        """
        Verify that at least ``threshold`` valid signatures cover ``message``.

        Each signature is checked against the key in the bitmap slot it
        occupies.
        """
        if not isinstance(signature, MultiEd25519Signature):
            return False
        indices = signature.bitmap.indices()
        if len(indices) < self._threshold:
            return False
        for index, sig in zip(indices, signature.signatures):
            if index >= len(self._keys):
                return False
            if not self._keys[index].verify_signature(message, sig):
                return False
        return True

    def serialize(self, writer: BinaryWriter) -> None:
        writer.len_prefixed_bytes(self.to_bytes())

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> MultiEd25519PublicKey:
        return cls.from_bytes(reader.len_prefixed_bytes())

    def __repr__(self) -> str:
        return f"MultiEd25519PublicKey({self._threshold}-of-{len(self._keys)})"


class MultiEd25519Signature(Signature):
    """Ed25519 signatures in ascending signer-slot order plus their bitmap."""

    def __init__(self, signatures: Sequence[Ed25519Signature], bitmap: Bitmap):
        """
        Raises:
            MalformedInputError: If the bitmap does not mark one slot per signature
        """
        if not signatures:
            raise MalformedInputError("Signature list must not be empty")
        if bitmap.count() != len(signatures):
            raise MalformedInputError(
                f"Bitmap marks {bitmap.count()} signers but {len(signatures)} signatures given",
                ErrorCode.INVALID_BITMAP,
            )
        self._signatures: Tuple[Ed25519Signature, ...] = tuple(signatures)
        self._bitmap = bitmap

    @classmethod
    def from_indexed(cls, pairs: Sequence[Tuple[int, Ed25519Signature]]) -> MultiEd25519Signature:
        """Build from ``(slot, signature)`` pairs in strictly increasing slot order."""
        bitmap = Bitmap.from_indices(index for index, _ in pairs)
        return cls([sig for _, sig in pairs], bitmap)

    @classmethod
    def from_bytes(cls, sig_bytes: bytes) -> MultiEd25519Signature:
        """Parse ``concat(signatures) || bitmap``."""
        n, rem = divmod(len(sig_bytes) - BITMAP_LENGTH, SIGNATURE_LENGTH)
        if len(sig_bytes) < SIGNATURE_LENGTH + BITMAP_LENGTH or rem != 0:
            raise MalformedInputError(
                f"Invalid MultiEd25519 signature length {len(sig_bytes)}", ErrorCode.INVALID_LENGTH
            )
        signatures = [
            Ed25519Signature(sig_bytes[i * SIGNATURE_LENGTH : (i + 1) * SIGNATURE_LENGTH])
            for i in range(n)
        ]
        return cls(signatures, Bitmap(sig_bytes[-BITMAP_LENGTH:]))

    @property
    def signatures(self) -> Tuple[Ed25519Signature, ...]:
        return self._signatures

    @property
    def bitmap(self) -> Bitmap:
        return self._bitmap

    def to_bytes(self) -> bytes:
        return b"".join(sig.to_bytes() for sig in self._signatures) + self._bitmap.to_bytes()

    def serialize(self, writer: BinaryWriter) -> None:
        writer.len_prefixed_bytes(self.to_bytes())

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> MultiEd25519Signature:
        return cls.from_bytes(reader.len_prefixed_bytes())

    def __repr__(self) -> str:
        return f"MultiEd25519Signature(signers={self._bitmap.indices()})"


__all__: List[str] = [
    "MultiEd25519PublicKey",
    "MultiEd25519Signature",
    "validate_threshold",
]
