"""
Base class for types with a canonical binary form.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Type, TypeVar

from ..runtime.errors import EncodingError, ErrorCode
from .reader import BinaryReader
from .writer import BinaryWriter

S = TypeVar("S", bound="BcsSerializable")


class BcsSerializable(ABC):
    """
    Mixin for values that serialize to BCS.

    Subclasses implement ``serialize`` and the ``deserialize`` classmethod;
    ``to_bcs`` and ``from_bcs`` wrap them with a fresh writer/reader per call.
    """

    @abstractmethod
    def serialize(self, writer: BinaryWriter) -> None:
        """Append this value's canonical encoding to ``writer``."""

    @classmethod
    def deserialize(cls: Type[S], reader: BinaryReader) -> S:
        raise NotImplementedError(f"{cls.__name__} does not support decoding")

    def to_bcs(self) -> bytes:
        """Encode to a standalone byte string."""
        writer = BinaryWriter()
        self.serialize(writer)
        return writer.to_bytes()

    @classmethod
    def from_bcs(cls: Type[S], data: bytes) -> S:
        """
        Decode a value that must span the whole input.

        Raises:
            EncodingError: If bytes remain after the value
        """
        reader = BinaryReader(data)
        value = cls.deserialize(reader)
        if not reader.eof:
            raise EncodingError(
                f"{reader.remaining} trailing bytes after {cls.__name__}",
                ErrorCode.TRAILING_BYTES,
            )
        return value
