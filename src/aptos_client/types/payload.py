"""
Transaction payloads.

A payload is a ULEB128 variant followed by its body. Script and entry
function payloads are built here; the orderless "v4" payload lives in
``orderless.py``. Module bundles and multisig payloads are recognised but
not supported.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Sequence, Tuple, Union

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..runtime.errors import UnsupportedVariantError
from .arguments import SerializedArgument, TransactionArgument
from .identifier import Identifier
from .module_id import ModuleId
from .type_tag import TypeTag


class TransactionPayloadVariant(IntEnum):
    SCRIPT = 0
    MODULE_BUNDLE = 1
    ENTRY_FUNCTION = 2
    MULTISIG = 3
    PAYLOAD = 4


class TransactionPayload(BcsSerializable):
    """Base class for payload variants."""

    VARIANT: ClassVar[TransactionPayloadVariant]

    @abstractmethod
    def serialize_body(self, writer: BinaryWriter) -> None:
        """Write the payload without its variant tag."""

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(self.VARIANT)
        self.serialize_body(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TransactionPayload:
        variant = reader.uleb128()
        if variant == TransactionPayloadVariant.SCRIPT:
            return ScriptPayload.deserialize_body(reader)
        if variant == TransactionPayloadVariant.ENTRY_FUNCTION:
            return EntryFunctionPayload.deserialize_body(reader)
        if variant == TransactionPayloadVariant.PAYLOAD:
            # Import here to avoid circular imports
            from .orderless import TransactionInnerPayloadV1

            return TransactionInnerPayloadV1.deserialize_body(reader)
        raise UnsupportedVariantError(f"Unsupported transaction payload variant {variant}", details={"variant": variant})


@dataclass(frozen=True)
class ScriptPayload(TransactionPayload):
    """Compiled Move script with type arguments and tagged arguments."""

    VARIANT: ClassVar[TransactionPayloadVariant] = TransactionPayloadVariant.SCRIPT

    code: bytes
    type_args: Tuple[TypeTag, ...] = field(default_factory=tuple)
    args: Tuple[TransactionArgument, ...] = field(default_factory=tuple)

    def serialize_body(self, writer: BinaryWriter) -> None:
        writer.len_prefixed_bytes(self.code)
        writer.sequence(self.type_args, BinaryWriter.struct)
        writer.sequence(self.args, BinaryWriter.struct)

    @classmethod
    def deserialize_body(cls, reader: BinaryReader) -> ScriptPayload:
        code = reader.len_prefixed_bytes()
        type_args = tuple(reader.sequence(TypeTag.deserialize))
        args = tuple(reader.sequence(TransactionArgument.deserialize))
        return cls(code, type_args, args)


def _write_entry_argument(writer: BinaryWriter, arg: TransactionArgument) -> None:
    writer.len_prefixed_bytes(arg.entry_function_bytes())


@dataclass(frozen=True, eq=False)
class EntryFunctionPayload(TransactionPayload):
    """
    Call of a public entry function.

    Arguments are written in entry-function form, each as a length-prefixed
    blob. Decoded payloads hold ``SerializedArgument`` values, so equality is
    by canonical bytes.
    """

    VARIANT: ClassVar[TransactionPayloadVariant] = TransactionPayloadVariant.ENTRY_FUNCTION

    module: ModuleId
    function: Identifier
    type_args: Tuple[TypeTag, ...] = field(default_factory=tuple)
    args: Tuple[TransactionArgument, ...] = field(default_factory=tuple)

    @classmethod
    def natural(
        cls,
        module: str,
        function: str,
        type_args: Sequence[Union[TypeTag, str]] = (),
        args: Sequence[TransactionArgument] = (),
    ) -> EntryFunctionPayload:
        """
        Build from source-level names.

        Example:
            ``EntryFunctionPayload.natural("0x1::aptos_account", "transfer", [], [AddressArgument(to), U64Argument(100)])``
        """
        tags = tuple(tag if isinstance(tag, TypeTag) else TypeTag.from_str(tag) for tag in type_args)
        return cls(ModuleId.from_str(module), Identifier(function), tags, tuple(args))

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.module.serialize(writer)
        self.function.serialize(writer)
        writer.sequence(self.type_args, BinaryWriter.struct)
        writer.sequence(self.args, _write_entry_argument)

    @classmethod
    def deserialize_body(cls, reader: BinaryReader) -> EntryFunctionPayload:
        module = ModuleId.deserialize(reader)
        function = Identifier.deserialize(reader)
        type_args = tuple(reader.sequence(TypeTag.deserialize))
        args = tuple(reader.sequence(lambda r: SerializedArgument(r.len_prefixed_bytes())))
        return cls(module, function, type_args, args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryFunctionPayload):
            return NotImplemented
        return self.to_bcs() == other.to_bcs()

    def __hash__(self) -> int:
        return hash(self.to_bcs())

    def __str__(self) -> str:
        return f"{self.module}::{self.function}"
