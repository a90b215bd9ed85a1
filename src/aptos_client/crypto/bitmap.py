"""
Signer bitmap for threshold signatures.

Four bytes, one bit per key slot. Slot ``i`` is bit ``7 - i % 8`` of byte
``i // 8``, so slot 0 is the most significant bit of the first byte.
"""

from __future__ import annotations

from typing import Iterable, List

from ..runtime.errors import ErrorCode, MalformedInputError

BITMAP_LENGTH = 4
MAX_SIGNERS = BITMAP_LENGTH * 8


class Bitmap:
    """Immutable 4-byte signer bitmap."""

    def __init__(self, value: bytes):
        """
        Args:
            value: Exactly 4 bitmap bytes

        Raises:
            MalformedInputError: If the length is wrong
        """
        if len(value) != BITMAP_LENGTH:
            raise MalformedInputError(
                f"Bitmap must be {BITMAP_LENGTH} bytes, got {len(value)}", ErrorCode.INVALID_BITMAP
            )
        self._bits = bytes(value)

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> Bitmap:
        """
        Build a bitmap from signer slots.

        Args:
            indices: Strictly increasing slots in ``[0, 32)``

        Raises:
            MalformedInputError: On an out-of-range or non-increasing slot
        """
        bits = bytearray(BITMAP_LENGTH)
        last = -1
        for index in indices:
            if not 0 <= index < MAX_SIGNERS:
                raise MalformedInputError(
                    f"Signer index {index} out of range [0, {MAX_SIGNERS})", ErrorCode.INVALID_BITMAP
                )
            if index <= last:
                raise MalformedInputError(
                    f"Signer indices must be strictly increasing, got {index} after {last}",
                    ErrorCode.INVALID_BITMAP,
                )
            bits[index // 8] |= 0x80 >> (index % 8)
            last = index
        return cls(bytes(bits))

    def is_set(self, index: int) -> bool:
        if not 0 <= index < MAX_SIGNERS:
            return False
        return bool(self._bits[index // 8] & (0x80 >> (index % 8)))

    def indices(self) -> List[int]:
        """Set slots in ascending order."""
        return [i for i in range(MAX_SIGNERS) if self.is_set(i)]

    def count(self) -> int:
        return sum(bin(b).count("1") for b in self._bits)

    def to_bytes(self) -> bytes:
        return self._bits

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"Bitmap({self.indices()})"


def create_bitmap(indices: Iterable[int]) -> bytes:
    """Return the raw 4 bitmap bytes for ``indices``."""
    return Bitmap.from_indices(indices).to_bytes()
