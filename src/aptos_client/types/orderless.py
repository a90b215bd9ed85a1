"""
Orderless transaction payloads.

Payload variant 4 wraps an executable (script, entry function or empty) and
an extra config carrying an optional multisig address and an optional replay
protection nonce. A payload with a nonce is replay-protected by the nonce
instead of the sender's sequence number.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..core.address import AccountAddress
from ..runtime.errors import UnsupportedVariantError
from .payload import EntryFunctionPayload, ScriptPayload, TransactionPayload, TransactionPayloadVariant


class TransactionInnerPayloadVariant(IntEnum):
    V1 = 0


class TransactionExecutableVariant(IntEnum):
    SCRIPT = 0
    ENTRY_FUNCTION = 1
    EMPTY = 2


class TransactionExtraConfigVariant(IntEnum):
    V1 = 0


class TransactionExecutable(BcsSerializable):
    """What an orderless payload runs."""

    VARIANT: ClassVar[TransactionExecutableVariant]

    @abstractmethod
    def serialize_body(self, writer: BinaryWriter) -> None:
        """Write the executable without its variant tag."""

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(self.VARIANT)
        self.serialize_body(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TransactionExecutable:
        variant = reader.uleb128()
        if variant == TransactionExecutableVariant.SCRIPT:
            return TransactionExecutableScript(ScriptPayload.deserialize_body(reader))
        if variant == TransactionExecutableVariant.ENTRY_FUNCTION:
            return TransactionExecutableEntryFunction(EntryFunctionPayload.deserialize_body(reader))
        if variant == TransactionExecutableVariant.EMPTY:
            return TransactionExecutableEmpty()
        raise UnsupportedVariantError(f"Unknown transaction executable variant {variant}", details={"variant": variant})


@dataclass(frozen=True)
class TransactionExecutableScript(TransactionExecutable):
    VARIANT: ClassVar[TransactionExecutableVariant] = TransactionExecutableVariant.SCRIPT
    script: ScriptPayload

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.script.serialize_body(writer)


@dataclass(frozen=True)
class TransactionExecutableEntryFunction(TransactionExecutable):
    VARIANT: ClassVar[TransactionExecutableVariant] = TransactionExecutableVariant.ENTRY_FUNCTION
    entry_function: EntryFunctionPayload

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.entry_function.serialize_body(writer)


@dataclass(frozen=True)
class TransactionExecutableEmpty(TransactionExecutable):
    VARIANT: ClassVar[TransactionExecutableVariant] = TransactionExecutableVariant.EMPTY

    def serialize_body(self, writer: BinaryWriter) -> None:
        pass


@dataclass(frozen=True)
class TransactionExtraConfigV1(BcsSerializable):
    multisig_address: Optional[AccountAddress] = None
    replay_protection_nonce: Optional[int] = None

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(TransactionExtraConfigVariant.V1)
        writer.option(self.multisig_address, BinaryWriter.struct)
        writer.option(self.replay_protection_nonce, BinaryWriter.u64)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TransactionExtraConfigV1:
        variant = reader.uleb128()
        if variant != TransactionExtraConfigVariant.V1:
            raise UnsupportedVariantError(f"Unknown extra config variant {variant}", details={"variant": variant})
        multisig_address = reader.option(AccountAddress.deserialize)
        nonce = reader.option(BinaryReader.u64)
        return cls(multisig_address, nonce)


@dataclass(frozen=True)
class TransactionInnerPayloadV1(TransactionPayload):
    """Payload v4: ``uleb(4) uleb(0) executable extra_config``."""

    VARIANT: ClassVar[TransactionPayloadVariant] = TransactionPayloadVariant.PAYLOAD

    executable: TransactionExecutable
    extra_config: TransactionExtraConfigV1

    @classmethod
    def orderless(
        cls,
        entry_function: EntryFunctionPayload,
        nonce: int,
        multisig_address: Optional[AccountAddress] = None,
    ) -> TransactionInnerPayloadV1:
        """Wrap an entry function call with a replay protection nonce."""
        return cls(
            TransactionExecutableEntryFunction(entry_function),
            TransactionExtraConfigV1(multisig_address, nonce),
        )

    @property
    def is_orderless(self) -> bool:
        return self.extra_config.replay_protection_nonce is not None

    def serialize_body(self, writer: BinaryWriter) -> None:
        writer.uleb128(TransactionInnerPayloadVariant.V1)
        self.executable.serialize(writer)
        self.extra_config.serialize(writer)

    @classmethod
    def deserialize_body(cls, reader: BinaryReader) -> TransactionInnerPayloadV1:
        variant = reader.uleb128()
        if variant != TransactionInnerPayloadVariant.V1:
            raise UnsupportedVariantError(f"Unknown inner payload variant {variant}", details={"variant": variant})
        executable = TransactionExecutable.deserialize(reader)
        extra_config = TransactionExtraConfigV1.deserialize(reader)
        return cls(executable, extra_config)
