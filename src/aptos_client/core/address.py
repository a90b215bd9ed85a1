"""
Account addresses and authentication keys.

An authentication key is ``sha3_256(payload || scheme_byte)``; the account
address has the same 32 bytes.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from ..codec import BcsSerializable, BinaryReader, BinaryWriter, sha3_256
from ..runtime.errors import ErrorCode, MalformedInputError

ADDRESS_LENGTH = 32
AUTH_KEY_LENGTH = 32


class AuthKeyScheme(IntEnum):
    """Scheme byte appended to the payload before hashing."""

    ED25519 = 0
    # Single Ed25519 keys under the modern scheme keep the legacy address
    SINGLE_KEY = 0
    MULTI_ED25519 = 1
    MULTI_KEY = 3


def _parse_hex(value: str) -> bytes:
    text = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise MalformedInputError(f"Invalid hex string: {value!r}", cause=e)


class AccountAddress(BcsSerializable):
    """
    32-byte account address.

    Immutable; equality and hashing are by byte content.
    """

    def __init__(self, address: bytes):
        """
        Args:
            address: Exactly 32 bytes

        Raises:
            MalformedInputError: If the length is wrong
        """
        if len(address) != ADDRESS_LENGTH:
            raise MalformedInputError(
                f"Account address must be {ADDRESS_LENGTH} bytes, got {len(address)}",
                ErrorCode.INVALID_LENGTH,
            )
        self._address = bytes(address)

    @classmethod
    def zero(cls) -> AccountAddress:
        return cls(b"\x00" * ADDRESS_LENGTH)

    @classmethod
    def from_hex(cls, value: str) -> AccountAddress:
        """
        Parse the full 64-digit hex form, with or without ``0x``.

        Raises:
            MalformedInputError: If the value is not exactly 64 hex digits
        """
        text = value[2:] if value.startswith(("0x", "0X")) else value
        if len(text) != ADDRESS_LENGTH * 2:
            raise MalformedInputError(
                f"Account address must be {ADDRESS_LENGTH * 2} hex digits, got {len(text)}",
                ErrorCode.INVALID_LENGTH,
            )
        return cls(_parse_hex(text))

    @classmethod
    def from_str_relaxed(cls, value: str) -> AccountAddress:
        """
        Parse a hex address, left-padding short forms such as ``0x1``.
        """
        text = value[2:] if value.startswith(("0x", "0X")) else value
        if not text or len(text) > ADDRESS_LENGTH * 2:
            raise MalformedInputError(f"Invalid account address: {value!r}", ErrorCode.INVALID_LENGTH)
        return cls(_parse_hex(text.rjust(ADDRESS_LENGTH * 2, "0")))

    @classmethod
    def from_key(cls, public_key: Any) -> AccountAddress:
        """Derive the address of any public key variant."""
        return public_key.auth_key().account_address()

    def to_bytes(self) -> bytes:
        return self._address

    def to_hex(self) -> str:
        return "0x" + self._address.hex()

    def is_special(self) -> bool:
        """True for framework addresses 0x0 through 0xf."""
        return self._address[:-1] == b"\x00" * (ADDRESS_LENGTH - 1) and self._address[-1] < 0x10

    def is_zero(self) -> bool:
        return self._address == b"\x00" * ADDRESS_LENGTH

    def short_str(self) -> str:
        """Hex form with leading zeros stripped, e.g. ``0x1``."""
        return "0x" + (self._address.hex().lstrip("0") or "0")

    def serialize(self, writer: BinaryWriter) -> None:
        writer.fixed_bytes(self._address)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> AccountAddress:
        return cls(reader.fixed_bytes(ADDRESS_LENGTH))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountAddress):
            return NotImplemented
        return self._address == other._address

    def __hash__(self) -> int:
        return hash(self._address)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"AccountAddress.from_hex('{self.to_hex()}')"


AccountAddress.ZERO = AccountAddress.zero()  # type: ignore[attr-defined]


class AuthenticationKey:
    """
    32-byte authentication key.

    Always the SHA3-256 of a scheme payload followed by the scheme byte.
    """

    def __init__(self, key: bytes):
        if len(key) != AUTH_KEY_LENGTH:
            raise MalformedInputError(
                f"Authentication key must be {AUTH_KEY_LENGTH} bytes, got {len(key)}",
                ErrorCode.INVALID_LENGTH,
            )
        self._key = bytes(key)

    @classmethod
    def from_scheme(cls, scheme: int, payload: bytes) -> AuthenticationKey:
        """
        Hash ``payload || scheme`` into an authentication key.

        Args:
            scheme: Scheme byte, see AuthKeyScheme
            payload: Scheme-specific public key bytes
        """
        return cls(sha3_256(bytes(payload) + bytes([int(scheme)])))

    def account_address(self) -> AccountAddress:
        return AccountAddress(self._key)

    def to_bytes(self) -> bytes:
        return self._key

    def to_hex(self) -> str:
        return "0x" + self._key.hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthenticationKey):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"AuthenticationKey('{self.to_hex()}')"
