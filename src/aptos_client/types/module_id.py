"""Fully qualified Move module names."""

from __future__ import annotations

from dataclasses import dataclass

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..core.address import AccountAddress
from ..runtime.errors import MalformedInputError
from .identifier import Identifier


@dataclass(frozen=True)
class ModuleId(BcsSerializable):
    """Module address plus module name."""

    address: AccountAddress
    name: Identifier

    @classmethod
    def from_str(cls, module_id: str) -> ModuleId:
        """
        Parse ``<address>::<module>``, e.g. ``0x1::coin``.

        Raises:
            MalformedInputError: If the string is not two ``::``-separated parts
        """
        parts = module_id.split("::")
        if len(parts) != 2:
            raise MalformedInputError(f"Invalid module id: {module_id!r}")
        return cls(AccountAddress.from_str_relaxed(parts[0]), Identifier(parts[1]))

    def serialize(self, writer: BinaryWriter) -> None:
        self.address.serialize(writer)
        self.name.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> ModuleId:
        address = AccountAddress.deserialize(reader)
        name = Identifier.deserialize(reader)
        return cls(address, name)

    def __str__(self) -> str:
        return f"{self.address.short_str()}::{self.name}"
