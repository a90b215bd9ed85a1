"""
Move type tags.

A type tag is a variant byte followed by the element type for vectors or a
struct tag for structs. Tags can be parsed from their Move source form, e.g.
``vector<u8>`` or ``0x1::coin::CoinStore<0x1::aptos_coin::AptosCoin>``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..core.address import AccountAddress
from ..runtime.errors import MalformedInputError, UnsupportedVariantError


class TypeTagVariant(IntEnum):
    BOOL = 0
    U8 = 1
    U64 = 2
    U128 = 3
    ADDRESS = 4
    SIGNER = 5
    VECTOR = 6
    STRUCT = 7
    U16 = 8
    U32 = 9
    U256 = 10


_PRIMITIVES = {
    "bool": TypeTagVariant.BOOL,
    "u8": TypeTagVariant.U8,
    "u16": TypeTagVariant.U16,
    "u32": TypeTagVariant.U32,
    "u64": TypeTagVariant.U64,
    "u128": TypeTagVariant.U128,
    "u256": TypeTagVariant.U256,
    "address": TypeTagVariant.ADDRESS,
    "signer": TypeTagVariant.SIGNER,
}
_PRIMITIVE_NAMES = {v: k for k, v in _PRIMITIVES.items()}


def _split_type_args(text: str) -> List[str]:
    """Split a generic argument list on top-level commas."""
    parts: List[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                raise MalformedInputError(f"Unbalanced '>' in type arguments: {text!r}")
        elif ch == "," and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
    if depth != 0:
        raise MalformedInputError(f"Unbalanced '<' in type arguments: {text!r}")
    parts.append(text[start:].strip())
    return parts


@dataclass(frozen=True)
class StructTag(BcsSerializable):
    """``address::module::name<type_args>``"""

    address: AccountAddress
    module: str
    name: str
    type_args: Tuple[TypeTag, ...] = field(default_factory=tuple)

    @classmethod
    def from_str(cls, text: str) -> StructTag:
        """
        Parse a struct tag such as ``0x1::aptos_coin::AptosCoin``.

        Raises:
            MalformedInputError: If the text is not a valid struct tag
        """
        text = text.strip()
        type_args: Tuple[TypeTag, ...] = ()
        start = text.find("<")
        base = text
        if start != -1:
            if not text.endswith(">"):
                raise MalformedInputError(f"Invalid struct tag: {text!r}")
            base = text[:start]
            type_args = tuple(TypeTag.from_str(arg) for arg in _split_type_args(text[start + 1 : -1]))
        parts = base.split("::")
        if len(parts) != 3 or not all(parts):
            raise MalformedInputError(f"Invalid struct tag: {text!r}")
        return cls(AccountAddress.from_str_relaxed(parts[0]), parts[1], parts[2], type_args)

    @classmethod
    def aptos_coin(cls) -> StructTag:
        return cls.from_str("0x1::aptos_coin::AptosCoin")

    def serialize(self, writer: BinaryWriter) -> None:
        self.address.serialize(writer)
        writer.str(self.module)
        writer.str(self.name)
        writer.sequence(self.type_args, BinaryWriter.struct)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> StructTag:
        address = AccountAddress.deserialize(reader)
        module = reader.str()
        name = reader.str()
        type_args = tuple(reader.sequence(TypeTag.deserialize))
        return cls(address, module, name, type_args)

    def __str__(self) -> str:
        out = f"{self.address.short_str()}::{self.module}::{self.name}"
        if self.type_args:
            out += "<" + ", ".join(str(arg) for arg in self.type_args) + ">"
        return out


@dataclass(frozen=True)
class TypeTag(BcsSerializable):
    """
    A Move type.

    ``value`` holds the element type for vectors and the struct tag for
    structs; it is None for primitives.
    """

    variant: TypeTagVariant
    value: Optional[Union[TypeTag, StructTag]] = None

    def __post_init__(self):
        if self.variant == TypeTagVariant.VECTOR and not isinstance(self.value, TypeTag):
            raise MalformedInputError("Vector type tag requires an element type")
        if self.variant == TypeTagVariant.STRUCT and not isinstance(self.value, StructTag):
            raise MalformedInputError("Struct type tag requires a struct tag")
        if self.variant not in (TypeTagVariant.VECTOR, TypeTagVariant.STRUCT) and self.value is not None:
            raise MalformedInputError(f"{self.variant.name} type tag takes no value")

    @classmethod
    def vector(cls, element: TypeTag) -> TypeTag:
        return cls(TypeTagVariant.VECTOR, element)

    @classmethod
    def struct(cls, tag: StructTag) -> TypeTag:
        return cls(TypeTagVariant.STRUCT, tag)

    @classmethod
    def from_str(cls, text: str) -> TypeTag:
        """Parse a primitive, ``vector<T>`` or struct type."""
        text = text.strip()
        if text in _PRIMITIVES:
            return cls(_PRIMITIVES[text])
        if text.startswith("vector<") and text.endswith(">"):
            return cls.vector(cls.from_str(text[len("vector<") : -1]))
        return cls.struct(StructTag.from_str(text))

    def serialize(self, writer: BinaryWriter) -> None:
        writer.u8(self.variant)
        if self.value is not None:
            self.value.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TypeTag:
        tag = reader.u8()
        try:
            variant = TypeTagVariant(tag)
        except ValueError:
            raise UnsupportedVariantError(f"Unknown type tag {tag}", details={"variant": tag})
        if variant == TypeTagVariant.VECTOR:
            return cls.vector(cls.deserialize(reader))
        if variant == TypeTagVariant.STRUCT:
            return cls.struct(StructTag.deserialize(reader))
        return cls(variant)

    def __str__(self) -> str:
        if self.variant == TypeTagVariant.VECTOR:
            return f"vector<{self.value}>"
        if self.variant == TypeTagVariant.STRUCT:
            return str(self.value)
        return _PRIMITIVE_NAMES[self.variant]
