"""
Binary Codec Module

Canonical binary (BCS) encoding and decoding.

Key components:
- writer.py: serializer for integers, ULEB128, byte vectors, strings, sequences
- reader.py: matching deserializer that fails on truncated or overflowing input
- serializable.py: base class giving ``to_bcs`` / ``from_bcs``
- hashes.py: SHA3-256 and transaction signing prefixes
"""

from .hashes import (
    RAW_TRANSACTION_SALT,
    RAW_TRANSACTION_WITH_DATA_SALT,
    sha3_256,
    signing_message,
    signing_prefix,
)
from .reader import BinaryReader
from .serializable import BcsSerializable
from .writer import BinaryWriter

__all__ = [
    "BcsSerializable",
    "BinaryReader",
    "BinaryWriter",
    "RAW_TRANSACTION_SALT",
    "RAW_TRANSACTION_WITH_DATA_SALT",
    "sha3_256",
    "signing_message",
    "signing_prefix",
]
