"""
Binary Writer - BCS serializer

Implements the canonical binary encoding used on the wire: little-endian
fixed-width integers, ULEB128 lengths and variant tags, and length-prefixed
byte vectors and strings.
"""

from __future__ import annotations

import builtins
import struct
from typing import Any, Callable, Iterable, Optional, TypeVar, Union

from ..runtime.errors import DecodeOverflowError, MalformedInputError

T = TypeVar("T")

MAX_U8 = 0xFF
MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF
MAX_U64 = 0xFFFFFFFFFFFFFFFF
MAX_U128 = (1 << 128) - 1
MAX_U256 = (1 << 256) - 1

# Lengths and variant tags are bounded to u32
MAX_ULEB128 = MAX_U32


def _check_range(v: int, limit: int, name: str) -> None:
    if not isinstance(v, int) or v < 0 or v > limit:
        raise DecodeOverflowError(f"Value {v!r} does not fit in {name}")


class BinaryWriter:
    """
    Binary writer for BCS.

    Each writer owns its buffer; create one writer per encoding call. Writes
    are appended in call order.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._buf = bytearray()

    def bool(self, v: builtins.bool) -> None:
        """
        Write a boolean as a single 0/1 byte.

        Args:
            v: Boolean value
        """
        self._buf.append(1 if v else 0)

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)

        Raises:
            DecodeOverflowError: If value is out of range
        """
        _check_range(v, MAX_U8, "u8")
        self._buf.append(v)

    def u16(self, v: int) -> None:
        """Write unsigned 16-bit integer in little-endian format."""
        _check_range(v, MAX_U16, "u16")
        self._buf += struct.pack("<H", v)

    def u32(self, v: int) -> None:
        """Write unsigned 32-bit integer in little-endian format."""
        _check_range(v, MAX_U32, "u32")
        self._buf += struct.pack("<I", v)

    def u64(self, v: int) -> None:
        """Write unsigned 64-bit integer in little-endian format."""
        _check_range(v, MAX_U64, "u64")
        self._buf += struct.pack("<Q", v)

    def u128(self, v: Union[int, builtins.bytes]) -> None:
        """
        Write unsigned 128-bit integer as a 16-byte little-endian block.

        Args:
            v: Integer, or an already little-endian 16-byte block
        """
        self._wide(v, 16, MAX_U128, "u128")

    def u256(self, v: Union[int, builtins.bytes]) -> None:
        """
        Write unsigned 256-bit integer as a 32-byte little-endian block.

        Args:
            v: Integer, or an already little-endian 32-byte block
        """
        self._wide(v, 32, MAX_U256, "u256")

    def _wide(self, v: Union[int, builtins.bytes], width: int, limit: int, name: str) -> None:
        if isinstance(v, (builtins.bytes, bytearray)):
            if len(v) != width:
                raise MalformedInputError(f"{name} block must be {width} bytes, got {len(v)}")
            self._buf += v
            return
        _check_range(v, limit, name)
        self._buf += v.to_bytes(width, "little")

    def uleb128(self, v: int) -> None:
        """
        Write unsigned integer in ULEB128 format.

        Seven data bits per byte, high bit set on every byte but the last.

        Args:
            v: Unsigned integer value, at most 2^32 - 1

        Raises:
            DecodeOverflowError: If value is negative or exceeds u32
        """
        _check_range(v, MAX_ULEB128, "uleb128")
        x = v
        while x >= 0x80:
            self._buf.append((x & 0x7F) | 0x80)
            x >>= 7
        self._buf.append(x)

    def fixed_bytes(self, v: builtins.bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._buf += v

    def len_prefixed_bytes(self, v: builtins.bytes) -> None:
        """
        Write bytes with ULEB128 length prefix.

        Args:
            v: Bytes to write with length prefix
        """
        self.uleb128(len(v))
        self._buf += v

    def str(self, s: builtins.str) -> None:
        """
        Write UTF-8 string with length prefix.

        Args:
            s: String to write
        """
        self.len_prefixed_bytes(s.encode("utf-8"))

    def sequence(self, values: Iterable[T], encoder: Callable[["BinaryWriter", T], Any]) -> None:
        """
        Write a length-prefixed sequence.

        Args:
            values: Items to write
            encoder: Called as ``encoder(writer, item)`` for each item
        """
        items = list(values)
        self.uleb128(len(items))
        for item in items:
            encoder(self, item)

    def option(self, value: Optional[T], encoder: Callable[["BinaryWriter", T], Any]) -> None:
        """
        Write an optional value: a presence flag, then the value if present.

        Args:
            value: Value or None
            encoder: Called as ``encoder(writer, value)`` when present
        """
        if value is None:
            self.bool(False)
        else:
            self.bool(True)
            encoder(self, value)

    def struct(self, value: Any) -> None:
        """
        Write a serializable value using its own ``serialize`` method.

        Args:
            value: Object with ``serialize(writer)``
        """
        value.serialize(self)

    def to_bytes(self) -> builtins.bytes:
        """
        Return the bytes written so far.

        Returns:
            Bytes containing all written data
        """
        return builtins.bytes(self._buf)
