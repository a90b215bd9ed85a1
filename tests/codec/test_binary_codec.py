"""
BCS writer and reader tests.

Covers fixed-width little-endian integers, ULEB128 bounds, length-prefixed
bytes and strings, options, sequences, and failure on truncated input.
"""

import hashlib

import pytest

from aptos_client.codec import (
    RAW_TRANSACTION_SALT,
    RAW_TRANSACTION_WITH_DATA_SALT,
    BinaryReader,
    BinaryWriter,
    signing_message,
    signing_prefix,
)
from aptos_client.core.address import AccountAddress
from aptos_client.runtime.errors import (
    DecodeOverflowError,
    DecodeTruncationError,
    EncodingError,
    ErrorCode,
    MalformedInputError,
)


def _written(fn, *args) -> bytes:
    writer = BinaryWriter()
    getattr(writer, fn)(*args)
    return writer.to_bytes()


@pytest.mark.unit
class TestFixedWidthIntegers:
    """Little-endian fixed-width integers."""

    @pytest.mark.parametrize("fn,value,expected", [
        ("u8", 0xAB, "ab"),
        ("u16", 0x0102, "0201"),
        ("u32", 1, "01000000"),
        ("u64", 0x0102030405060708, "0807060504030201"),
        ("u128", 1, "01" + "00" * 15),
        ("u256", 1 << 8, "0001" + "00" * 30),
    ])
    def test_little_endian(self, fn, value, expected):
        """Test integers are written least significant byte first."""
        assert _written(fn, value).hex() == expected

    @pytest.mark.parametrize("fn,value,expected", [
        ("u8", 0xFF, 0xFF),
        ("u16", 0xFFFF, 0xFFFF),
        ("u32", 0xDEADBEEF, 0xDEADBEEF),
        ("u64", 2**64 - 1, 2**64 - 1),
        ("u128", 2**128 - 1, 2**128 - 1),
        ("u256", 2**255 + 7, 2**255 + 7),
    ])
    def test_read_back(self, fn, value, expected):
        """Test the reader decodes what the writer wrote."""
        reader = BinaryReader(_written(fn, value))
        assert getattr(reader, fn)() == expected
        assert reader.eof

    @pytest.mark.parametrize("fn,value", [
        ("u8", 256),
        ("u16", 1 << 16),
        ("u32", 1 << 32),
        ("u64", 1 << 64),
        ("u64", -1),
        ("u128", 1 << 128),
    ])
    def test_out_of_range(self, fn, value):
        """Test values that do not fit the width are rejected."""
        with pytest.raises(DecodeOverflowError):
            _written(fn, value)

    def test_wide_integer_from_bytes(self):
        """Test u128 accepts an already little-endian 16-byte block."""
        block = bytes(range(16))
        assert _written("u128", block) == block

    def test_wide_integer_wrong_block_length(self):
        """Test a u256 block of the wrong size is rejected."""
        with pytest.raises(MalformedInputError):
            _written("u256", b"\x00" * 31)


@pytest.mark.unit
class TestUleb128:
    """ULEB128 lengths and variant tags."""

    @pytest.mark.parametrize("value,expected", [
        (0, "00"),
        (1, "01"),
        (127, "7f"),
        (128, "8001"),
        (300, "ac02"),
        (16384, "808001"),
        (2**32 - 1, "ffffffff0f"),
    ])
    def test_encoding(self, value, expected):
        """Test known encodings and decode them back."""
        encoded = _written("uleb128", value)
        assert encoded.hex() == expected
        assert BinaryReader(encoded).uleb128() == value

    def test_encode_overflow(self):
        """Test values above u32 are rejected on encode."""
        with pytest.raises(DecodeOverflowError):
            _written("uleb128", 2**32)

    @pytest.mark.parametrize("data", [
        "ffffffff1f",
        "808080808001",
    ])
    def test_decode_overflow(self, data):
        """Test values above u32 are rejected on decode."""
        with pytest.raises(DecodeOverflowError) as exc_info:
            BinaryReader(bytes.fromhex(data)).uleb128()
        assert exc_info.value.code == ErrorCode.DECODE_OVERFLOW

    def test_decode_truncated(self):
        """Test a continuation bit with no following byte."""
        with pytest.raises(DecodeTruncationError):
            BinaryReader(b"\x80").uleb128()

    def test_sixth_group_rejected(self):
        """Test a value spread over six groups is rejected even when it is small."""
        with pytest.raises(DecodeOverflowError):
            BinaryReader(bytes.fromhex("808080808000")).uleb128()

    @pytest.mark.parametrize("data", ["8000", "ff00", "80808000"])
    def test_non_canonical_rejected(self, data):
        """Test a redundant trailing zero group is rejected."""
        with pytest.raises(EncodingError) as exc_info:
            BinaryReader(bytes.fromhex(data)).uleb128()
        assert exc_info.value.code == ErrorCode.NON_CANONICAL

    def test_non_canonical_length_prefix(self):
        """Test a length prefix written with padding cannot alias the canonical bytes."""
        with pytest.raises(EncodingError):
            BinaryReader(b"\x81\x00" + b"\xaa").len_prefixed_bytes()


@pytest.mark.unit
class TestVariableLength:
    """Byte vectors, strings, sequences and options."""

    def test_len_prefixed_bytes(self):
        """Test byte vectors carry a ULEB128 length."""
        assert _written("len_prefixed_bytes", b"abc") == b"\x03abc"
        assert _written("len_prefixed_bytes", b"") == b"\x00"

    def test_long_byte_vector_prefix(self):
        """Test a 200-byte vector uses a two-byte length."""
        data = _written("len_prefixed_bytes", b"\x01" * 200)
        assert data[:2] == b"\xc8\x01"
        assert BinaryReader(data).len_prefixed_bytes() == b"\x01" * 200

    def test_string_utf8(self):
        """Test strings are UTF-8 with a byte-length prefix."""
        data = _written("str", "héllo")
        assert data == b"\x06" + "héllo".encode("utf-8")
        assert BinaryReader(data).str() == "héllo"

    def test_invalid_utf8(self):
        """Test invalid UTF-8 is an encoding error."""
        with pytest.raises(EncodingError):
            BinaryReader(b"\x02\xff\xfe").str()

    def test_sequence(self):
        """Test sequences write a count then each item."""
        writer = BinaryWriter()
        writer.sequence([1, 2, 3], BinaryWriter.u16)
        data = writer.to_bytes()
        assert data == bytes.fromhex("03010002000300")
        assert BinaryReader(data).sequence(BinaryReader.u16) == [1, 2, 3]

    def test_option(self):
        """Test options write a presence flag."""
        writer = BinaryWriter()
        writer.option(None, BinaryWriter.u64)
        writer.option(5, BinaryWriter.u64)
        data = writer.to_bytes()
        assert data == b"\x00\x01" + (5).to_bytes(8, "little")

        reader = BinaryReader(data)
        assert reader.option(BinaryReader.u64) is None
        assert reader.option(BinaryReader.u64) == 5

    def test_bool(self):
        """Test bools are single 0/1 bytes and other values are rejected."""
        assert _written("bool", True) == b"\x01"
        assert _written("bool", False) == b"\x00"
        with pytest.raises(EncodingError):
            BinaryReader(b"\x02").bool()

    def test_writers_are_independent(self):
        """Test each writer owns its buffer."""
        first = BinaryWriter()
        second = BinaryWriter()
        first.u8(1)
        assert second.to_bytes() == b""


@pytest.mark.unit
class TestTruncation:
    """Reads past the end fail rather than pad."""

    @pytest.mark.parametrize("fn,data", [
        ("u16", "01"),
        ("u32", "010203"),
        ("u64", "01020304050607"),
        ("u128", "00" * 15),
        ("len_prefixed_bytes", "05616263"),
        ("str", "0a68"),
    ])
    def test_short_input(self, fn, data):
        """Test truncated input raises DecodeTruncationError."""
        with pytest.raises(DecodeTruncationError) as exc_info:
            getattr(BinaryReader(bytes.fromhex(data)), fn)()
        assert exc_info.value.code == ErrorCode.DECODE_TRUNCATED

    def test_remaining_tracking(self):
        """Test remaining and eof advance with reads."""
        reader = BinaryReader(b"\x01\x02\x03")
        reader.u8()
        assert reader.remaining == 2
        assert not reader.eof

    def test_trailing_bytes_rejected(self):
        """Test from_bcs requires the whole input to be consumed."""
        with pytest.raises(EncodingError) as exc_info:
            AccountAddress.from_bcs(b"\x00" * 33)
        assert exc_info.value.code == ErrorCode.TRAILING_BYTES


@pytest.mark.unit
class TestSigningPrefix:
    """Domain separation prefixes."""

    def test_raw_transaction_prefix(self):
        """Test the prefix is the SHA3-256 of the salt."""
        assert signing_prefix(RAW_TRANSACTION_SALT) == hashlib.sha3_256(b"APTOS::RawTransaction").digest()

    def test_with_data_prefix(self):
        """Test the fee payer prefix uses its own salt."""
        expected = hashlib.sha3_256(b"APTOS::RawTransactionWithData").digest()
        assert signing_prefix(RAW_TRANSACTION_WITH_DATA_SALT) == expected

    def test_signing_message(self):
        """Test the message is prefix followed by the body."""
        message = signing_message(RAW_TRANSACTION_SALT, b"body")
        assert message == hashlib.sha3_256(b"APTOS::RawTransaction").digest() + b"body"
