"""
Hash Functions

SHA3-256 helpers and the domain-separation prefixes used when signing
transactions.
"""

import hashlib

RAW_TRANSACTION_SALT = b"APTOS::RawTransaction"
RAW_TRANSACTION_WITH_DATA_SALT = b"APTOS::RawTransactionWithData"


def sha3_256(input_bytes: bytes) -> bytes:
    """
    Compute SHA3-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA3-256 hash as bytes (32 bytes)
    """
    return hashlib.sha3_256(input_bytes).digest()


def signing_prefix(salt: bytes) -> bytes:
    """
    Hash a domain separator into the 32-byte prefix placed before signable bytes.

    Computed on each call.

    Args:
        salt: ASCII domain separator, e.g. ``RAW_TRANSACTION_SALT``

    Returns:
        SHA3-256 of the separator
    """
    return sha3_256(salt)


def signing_message(salt: bytes, body: bytes) -> bytes:
    """Return ``sha3_256(salt) || body``."""
    return signing_prefix(salt) + body
