"""
Binary Reader - BCS deserializer

Consumes a buffer in the order the writer produced it. Reads never pad or
truncate: running out of input raises DecodeTruncationError.
"""

from __future__ import annotations

import builtins
import struct
from typing import Callable, List, Optional, Type, TypeVar

from ..runtime.errors import DecodeOverflowError, DecodeTruncationError, EncodingError, ErrorCode
from .writer import MAX_ULEB128

T = TypeVar("T")

MAX_ULEB128_SHIFT = 35


class BinaryReader:
    """
    Binary reader for BCS.

    Holds its own copy of the input and a read offset.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    @property
    def eof(self) -> builtins.bool:
        """
        Check if at end of buffer.

        Returns:
            True if at end of buffer
        """
        return self._off >= len(self._buf)

    def _take(self, n: int) -> builtins.bytes:
        if n > self.remaining:
            raise DecodeTruncationError(
                f"Attempting to read {n} bytes with {self.remaining} remaining",
                details={"offset": self._off, "wanted": n},
            )
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def bool(self) -> builtins.bool:
        """
        Read a boolean byte.

        Raises:
            EncodingError: If the byte is neither 0 nor 1
        """
        value = self.u8()
        if value > 1:
            raise EncodingError(f"Invalid bool byte 0x{value:02x}", details={"offset": self._off - 1})
        return value == 1

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        return self._take(1)[0]

    def u16(self) -> int:
        """Read unsigned 16-bit integer in little-endian format."""
        return struct.unpack("<H", self._take(2))[0]

    def u32(self) -> int:
        """Read unsigned 32-bit integer in little-endian format."""
        return struct.unpack("<I", self._take(4))[0]

    def u64(self) -> int:
        """Read unsigned 64-bit integer in little-endian format."""
        return struct.unpack("<Q", self._take(8))[0]

    def u128(self) -> int:
        """Read a 16-byte little-endian unsigned integer."""
        return int.from_bytes(self._take(16), "little")

    def u256(self) -> int:
        """Read a 32-byte little-endian unsigned integer."""
        return int.from_bytes(self._take(32), "little")

    def uleb128(self) -> int:
        """
        Read unsigned integer in ULEB128 format.

        Only the shortest encoding is accepted, in at most five groups.

        Returns:
            Decoded unsigned integer value

        Raises:
            DecodeOverflowError: If the value exceeds u32 or uses more than five groups
            DecodeTruncationError: If input ends before the last group
            EncodingError: If the last group is a redundant zero
        """
        start = self._off
        value = 0
        shift = 0
        while True:
            if shift >= MAX_ULEB128_SHIFT:
                raise DecodeOverflowError(
                    "ULEB128 value longer than 5 bytes", details={"offset": start}
                )
            b = self.u8()
            value |= (b & 0x7F) << shift
            if value > MAX_ULEB128:
                raise DecodeOverflowError(
                    "ULEB128 value overflows u32", details={"offset": start}
                )
            if b < 0x80:
                if b == 0 and shift > 0:
                    raise EncodingError(
                        "Non-canonical ULEB128 encoding",
                        ErrorCode.NON_CANONICAL,
                        details={"offset": start},
                    )
                return value
            shift += 7

    def fixed_bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        return self._take(n)

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with ULEB128 length prefix.

        Returns:
            Bytes with length read from the prefix
        """
        n = self.uleb128()
        return self._take(n)

    def str(self) -> builtins.str:
        """
        Read UTF-8 string with length prefix.

        Raises:
            EncodingError: If the bytes are not valid UTF-8
        """
        raw = self.len_prefixed_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError("Invalid UTF-8 string", cause=e)

    def sequence(self, decoder: Callable[["BinaryReader"], T]) -> List[T]:
        """
        Read a length-prefixed sequence.

        Args:
            decoder: Called as ``decoder(reader)`` for each item
        """
        n = self.uleb128()
        return [decoder(self) for _ in range(n)]

    def option(self, decoder: Callable[["BinaryReader"], T]) -> Optional[T]:
        """Read a presence flag, then the value if present."""
        if self.bool():
            return decoder(self)
        return None

    def struct(self, cls: Type[T]) -> T:
        """Read a value using ``cls.deserialize(reader)``."""
        return cls.deserialize(self)  # type: ignore[attr-defined]
