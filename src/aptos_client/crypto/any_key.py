"""
Variant-tagged keys and signatures, and the MultiKey structures built on them.

``AnyPublicKey`` and ``AnySignature`` prefix the inner key or signature with
a ULEB128 variant tag so that one MultiKey set can mix key types. A MultiKey
public key is ``vector<AnyPublicKey>`` followed by a u8 threshold and derives
its authentication key under scheme 3.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

from ..codec import BinaryReader, BinaryWriter
from ..core.address import AuthenticationKey, AuthKeyScheme
from ..runtime.errors import ErrorCode, MalformedInputError, UnsupportedVariantError
from .bitmap import Bitmap
from .ed25519 import Ed25519PublicKey, Ed25519Signature
from .keyless import KeylessPublicKey
from .keys import AnyPublicKeyVariant, AnySignatureVariant, PublicKey, Signature
from .multi_ed25519 import validate_threshold


class AnyPublicKey(PublicKey):
    """A public key tagged with its variant."""

    def __init__(self, public_key: PublicKey):
        """
        Args:
            public_key: Ed25519 or keyless public key

        Raises:
            UnsupportedVariantError: For any other key type
        """
        if isinstance(public_key, AnyPublicKey):
            public_key = public_key.inner
        if isinstance(public_key, Ed25519PublicKey):
            self._variant = AnyPublicKeyVariant.ED25519
        elif isinstance(public_key, KeylessPublicKey):
            self._variant = AnyPublicKeyVariant.KEYLESS
        else:
            raise UnsupportedVariantError(f"{type(public_key).__name__} cannot be wrapped as AnyPublicKey")
        self._inner = public_key

    @property
    def variant(self) -> AnyPublicKeyVariant:
        return self._variant

    @property
    def inner(self) -> PublicKey:
        return self._inner

    def to_bytes(self) -> bytes:
        return self.to_bcs()

    def auth_key(self) -> AuthenticationKey:
        # A lone wrapped key keeps the address of the key it wraps
        return self._inner.auth_key()

    def verify_signature(self, message: bytes, signature: Signature) -> bool:
        if isinstance(signature, AnySignature):
            signature = signature.inner
        return self._inner.verify_signature(message, signature)

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(self._variant)
        self._inner.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> AnyPublicKey:
        variant = reader.uleb128()
        if variant == AnyPublicKeyVariant.ED25519:
            return cls(Ed25519PublicKey.deserialize(reader))
        if variant == AnyPublicKeyVariant.KEYLESS:
            return cls(KeylessPublicKey.deserialize(reader))
        raise UnsupportedVariantError(f"Unsupported AnyPublicKey variant {variant}", details={"variant": variant})

    def __repr__(self) -> str:
        return f"AnyPublicKey({self._inner!r})"


class AnySignature(Signature):
    """A signature tagged with its variant; only Ed25519 is supported."""

    def __init__(self, signature: Signature):
        if isinstance(signature, AnySignature):
            signature = signature.inner
        if not isinstance(signature, Ed25519Signature):
            raise UnsupportedVariantError(f"{type(signature).__name__} cannot be wrapped as AnySignature")
        self._variant = AnySignatureVariant.ED25519
        self._inner = signature

    @property
    def variant(self) -> AnySignatureVariant:
        return self._variant

    @property
    def inner(self) -> Ed25519Signature:
        return self._inner

    def to_bytes(self) -> bytes:
        return self.to_bcs()

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(self._variant)
        self._inner.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> AnySignature:
        variant = reader.uleb128()
        if variant == AnySignatureVariant.ED25519:
            return cls(Ed25519Signature.deserialize(reader))
        raise UnsupportedVariantError(f"Unsupported AnySignature variant {variant}", details={"variant": variant})

    def __repr__(self) -> str:
        return f"AnySignature({self._inner!r})"


class MultiKeyPublicKey(PublicKey):
    """Ordered set of variant-tagged keys with a signature threshold."""

    def __init__(self, keys: Sequence[PublicKey], threshold: int):
        """
        Args:
            keys: Public keys (raw or already wrapped); order is significant
            threshold: Minimum number of signatures

        Raises:
            MalformedInputError: If the key list or threshold is invalid
        """
        validate_threshold(len(keys), threshold)
        self._keys: Tuple[AnyPublicKey, ...] = tuple(
            key if isinstance(key, AnyPublicKey) else AnyPublicKey(key) for key in keys
        )
        self._threshold = threshold

    @property
    def keys(self) -> Tuple[AnyPublicKey, ...]:
        return self._keys

    @property
    def threshold(self) -> int:
        return self._threshold

    def to_bytes(self) -> bytes:
        return self.to_bcs()

    def auth_key(self) -> AuthenticationKey:
        return AuthenticationKey.from_scheme(AuthKeyScheme.MULTI_KEY, self.to_bcs())

    def index_of(self, key: PublicKey) -> int:
        """
        Position of ``key`` in the set.

        Raises:
            MalformedInputError: If the key is not part of the set
        """
        target = key.inner if isinstance(key, AnyPublicKey) else key
        for i, candidate in enumerate(self._keys):
            if candidate.inner == target:
                return i
        raise MalformedInputError(f"Public key {key} not found in key set", ErrorCode.SIGNER_NOT_FOUND)

    def verify_signature(self, message: bytes, signature: Signature) -> bool:
        if not isinstance(signature, MultiKeySignature):
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
        writer.sequence(self._keys, BinaryWriter.struct)
        writer.u8(self._threshold)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> MultiKeyPublicKey:
        keys = reader.sequence(AnyPublicKey.deserialize)
        threshold = reader.u8()
        return cls(keys, threshold)

    def __repr__(self) -> str:
        return f"MultiKeyPublicKey({self._threshold}-of-{len(self._keys)})"


class MultiKeySignature(Signature):
    """Variant-tagged signatures in ascending signer-slot order plus their bitmap."""

    def __init__(self, signatures: Sequence[Union[AnySignature, Ed25519Signature]], bitmap: Bitmap):
        if not signatures:
            raise MalformedInputError("Signature list must not be empty")
        if bitmap.count() != len(signatures):
            raise MalformedInputError(
                f"Bitmap marks {bitmap.count()} signers but {len(signatures)} signatures given",
                ErrorCode.INVALID_BITMAP,
            )
        self._signatures: Tuple[AnySignature, ...] = tuple(
            sig if isinstance(sig, AnySignature) else AnySignature(sig) for sig in signatures
        )
        self._bitmap = bitmap

    @classmethod
    def from_indexed(
        cls, pairs: Sequence[Tuple[int, Union[AnySignature, Ed25519Signature]]]
    ) -> MultiKeySignature:
        """Build from ``(slot, signature)`` pairs in strictly increasing slot order."""
        bitmap = Bitmap.from_indices(index for index, _ in pairs)
        return cls([sig for _, sig in pairs], bitmap)

    @property
    def signatures(self) -> Tuple[AnySignature, ...]:
        return self._signatures

    @property
    def bitmap(self) -> Bitmap:
        return self._bitmap

    def to_bytes(self) -> bytes:
        return self.to_bcs()

    def serialize(self, writer: BinaryWriter) -> None:
        writer.sequence(self._signatures, BinaryWriter.struct)
        writer.len_prefixed_bytes(self._bitmap.to_bytes())

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> MultiKeySignature:
        signatures = reader.sequence(AnySignature.deserialize)
        bitmap = Bitmap(reader.len_prefixed_bytes())
        return cls(signatures, bitmap)

    def __repr__(self) -> str:
        return f"MultiKeySignature(signers={self._bitmap.indices()})"
