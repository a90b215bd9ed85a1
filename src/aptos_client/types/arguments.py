"""
Transaction arguments.

Each argument has two encodings:

- the script form written by ``serialize``: a variant tag followed by the
  value, used for script payloads;
- the entry-function form returned by ``entry_function_bytes``: the raw
  value bytes with no tag. Entry-function payloads length-prefix these bytes.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, ClassVar, Dict, Optional, Tuple

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..codec.writer import MAX_U8, MAX_U16, MAX_U32, MAX_U64, MAX_U128, MAX_U256
from ..core.address import AccountAddress
from ..runtime.errors import CapabilityGapError, MalformedInputError, UnsupportedVariantError


class ScriptArgumentTag(IntEnum):
    U8 = 0
    U64 = 1
    U128 = 2
    ADDRESS = 3
    U8_VECTOR = 4
    BOOL = 5
    U16 = 6
    U32 = 7
    U256 = 8
    SERIALIZED = 9


def _check_uint(value: int, limit: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise MalformedInputError(f"{value!r} is not a valid {name}")


class TransactionArgument(BcsSerializable):
    """Base class for typed transaction arguments."""

    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = None

    @abstractmethod
    def encode_value(self, writer: BinaryWriter) -> None:
        """Write the untagged value bytes."""

    def entry_function_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.encode_value(writer)
        return writer.to_bytes()

    def serialize(self, writer: BinaryWriter) -> None:
        if self.SCRIPT_TAG is None:
            raise CapabilityGapError(f"{type(self).__name__} can only be used as an entry function argument")
        writer.uleb128(self.SCRIPT_TAG)
        self.encode_value(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TransactionArgument:
        """Decode a tagged script argument."""
        tag = reader.uleb128()
        decoder = _SCRIPT_DECODERS.get(tag)
        if decoder is None:
            raise UnsupportedVariantError(f"Unknown script argument tag {tag}", details={"variant": tag})
        return decoder(reader)


@dataclass(frozen=True)
class U8Argument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U8
    value: int

    def __post_init__(self):
        _check_uint(self.value, MAX_U8, "u8")

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.u8(self.value)


@dataclass(frozen=True)
class U16Argument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U16
    value: int

    def __post_init__(self):
        _check_uint(self.value, MAX_U16, "u16")

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.u16(self.value)


@dataclass(frozen=True)
class U32Argument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U32
    value: int

    def __post_init__(self):
        _check_uint(self.value, MAX_U32, "u32")

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.u32(self.value)


@dataclass(frozen=True)
class U64Argument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U64
    value: int

    def __post_init__(self):
        _check_uint(self.value, MAX_U64, "u64")

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.u64(self.value)


@dataclass(frozen=True)
class U128Argument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U128
    value: int

    def __post_init__(self):
        _check_uint(self.value, MAX_U128, "u128")

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.u128(self.value)


@dataclass(frozen=True)
class U256Argument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U256
    value: int

    def __post_init__(self):
        _check_uint(self.value, MAX_U256, "u256")

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.u256(self.value)


@dataclass(frozen=True)
class BoolArgument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.BOOL
    value: bool

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.bool(self.value)


@dataclass(frozen=True)
class AddressArgument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.ADDRESS
    value: AccountAddress

    def encode_value(self, writer: BinaryWriter) -> None:
        self.value.serialize(writer)


@dataclass(frozen=True)
class U8VectorArgument(TransactionArgument):
    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U8_VECTOR
    value: bytes

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.len_prefixed_bytes(self.value)


@dataclass(frozen=True)
class StringArgument(TransactionArgument):
    """A Move ``String``; on the wire it is the UTF-8 ``vector<u8>``."""

    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.U8_VECTOR
    value: str

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.str(self.value)


@dataclass(frozen=True)
class VectorArgument(TransactionArgument):
    """``vector<T>`` for any T: a length, then each item's entry-function bytes."""

    items: Tuple[TransactionArgument, ...] = field(default_factory=tuple)

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.uleb128(len(self.items))
        for item in self.items:
            item.encode_value(writer)

    @classmethod
    def u64s(cls, values) -> VectorArgument:
        return cls(tuple(U64Argument(v) for v in values))

    @classmethod
    def addresses(cls, values) -> VectorArgument:
        return cls(tuple(AddressArgument(v) for v in values))


@dataclass(frozen=True)
class MoveOption(TransactionArgument):
    """
    ``Option<T>``: a present flag, then the inner value's entry-function bytes.
    """

    value: Optional[TransactionArgument] = None

    def encode_value(self, writer: BinaryWriter) -> None:
        if self.value is None:
            writer.bool(False)
        else:
            writer.bool(True)
            self.value.encode_value(writer)

    def is_some(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class SerializedArgument(TransactionArgument):
    """
    An argument whose value bytes are already encoded.

    Entry-function arguments decode to this type since their blobs carry no
    type information.
    """

    SCRIPT_TAG: ClassVar[Optional[ScriptArgumentTag]] = ScriptArgumentTag.SERIALIZED
    value: bytes

    def encode_value(self, writer: BinaryWriter) -> None:
        writer.fixed_bytes(self.value)

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(ScriptArgumentTag.SERIALIZED)
        writer.len_prefixed_bytes(self.value)


_SCRIPT_DECODERS: Dict[int, Callable[[BinaryReader], TransactionArgument]] = {
    ScriptArgumentTag.U8: lambda r: U8Argument(r.u8()),
    ScriptArgumentTag.U16: lambda r: U16Argument(r.u16()),
    ScriptArgumentTag.U32: lambda r: U32Argument(r.u32()),
    ScriptArgumentTag.U64: lambda r: U64Argument(r.u64()),
    ScriptArgumentTag.U128: lambda r: U128Argument(r.u128()),
    ScriptArgumentTag.U256: lambda r: U256Argument(r.u256()),
    ScriptArgumentTag.BOOL: lambda r: BoolArgument(r.bool()),
    ScriptArgumentTag.ADDRESS: lambda r: AddressArgument(AccountAddress.deserialize(r)),
    ScriptArgumentTag.U8_VECTOR: lambda r: U8VectorArgument(r.len_prefixed_bytes()),
    ScriptArgumentTag.SERIALIZED: lambda r: SerializedArgument(r.len_prefixed_bytes()),
}
