"""Move identifiers (module and function names)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..runtime.errors import MalformedInputError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Identifier(BcsSerializable):
    """A Move identifier, serialized as a BCS string."""

    value: str

    def __post_init__(self):
        if not _IDENTIFIER.match(self.value):
            raise MalformedInputError(f"Invalid Move identifier: {self.value!r}")

    def serialize(self, writer: BinaryWriter) -> None:
        writer.str(self.value)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> Identifier:
        return cls(reader.str())

    def __str__(self) -> str:
        return self.value
