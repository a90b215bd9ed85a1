"""
Mnemonic key derivation.

BIP-39 seed generation and SLIP-0010 hardened Ed25519 derivation along
``m/44'/637'/...`` paths.
"""

import logging
import re
import struct
import unicodedata
from typing import List, Tuple

from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from mnemonic import Mnemonic

from ..runtime.errors import ErrorCode, MalformedInputError

logger = logging.getLogger(__name__)

ED25519_SEED = b"ed25519 seed"
HARDENED_OFFSET = 0x80000000
APTOS_COIN_TYPE = 637
PBKDF2_ROUNDS = 2048
SEED_LENGTH = 64
ENTROPY_LENGTH = 16

APTOS_HARDENED_PATH = re.compile(r"^m/44'/637'/[0-9]+'/[0-9]+'/[0-9]+'?$")


def is_valid_hardened_path(path: str) -> bool:
    """Check ``path`` against the Aptos hardened derivation path pattern."""
    return APTOS_HARDENED_PATH.match(path) is not None


def entropy_to_mnemonic(entropy: str) -> str:
    """
    Build a 12-word English mnemonic from a string.

    The first 16 UTF-8 bytes of ``entropy`` are used as BIP-39 entropy, so
    strings such as UUIDs map to a stable phrase.

    Raises:
        MalformedInputError: If the string encodes to fewer than 16 bytes
    """
    raw = entropy.encode("utf-8")[:ENTROPY_LENGTH]
    if len(raw) != ENTROPY_LENGTH:
        raise MalformedInputError(
            f"Entropy must be at least {ENTROPY_LENGTH} bytes, got {len(raw)}",
            ErrorCode.INVALID_LENGTH,
        )
    return Mnemonic("english").to_mnemonic(raw)


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """
    Derive the 64-byte BIP-39 seed from a mnemonic.

    The mnemonic is NFKD-normalized, lower-cased and whitespace-collapsed
    before PBKDF2-HMAC-SHA512 with salt ``"mnemonic" + passphrase``.
    """
    words = unicodedata.normalize("NFKD", mnemonic).lower().split()
    normalized = " ".join(words)
    salt = unicodedata.normalize("NFKD", "mnemonic" + passphrase)
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=SEED_LENGTH,
        salt=salt.encode("utf-8"),
        iterations=PBKDF2_ROUNDS,
    )
    return kdf.derive(normalized.encode("utf-8"))


def _hmac_sha512(key: bytes, data: bytes) -> Tuple[bytes, bytes]:
    mac = hmac.HMAC(key, hashes.SHA512())
    mac.update(data)
    digest = mac.finalize()
    return digest[:32], digest[32:]


def _parse_path(path: str) -> List[int]:
    return [int(part.rstrip("'")) for part in path.split("/")[1:]]


def derive_private_key(path: str, mnemonic: str) -> bytes:
    """
    Derive a 32-byte Ed25519 private key.

    Every path component is derived hardened, including a last component
    written without the apostrophe.

    Args:
        path: Derivation path, e.g. ``m/44'/637'/0'/0'/0'``
        mnemonic: Mnemonic phrase

    Returns:
        32-byte private key seed

    Raises:
        MalformedInputError: If the path is not a valid Aptos hardened path
    """
    if not is_valid_hardened_path(path):
        raise MalformedInputError(
            f"Invalid derivation path: {path}", ErrorCode.INVALID_DERIVATION_PATH
        )

    logger.debug(f"Deriving Ed25519 key along {path}")
    key, chain_code = _hmac_sha512(ED25519_SEED, mnemonic_to_seed(mnemonic))
    for index in _parse_path(path):
        if index >= HARDENED_OFFSET:
            raise MalformedInputError(
                f"Path component {index} out of range", ErrorCode.INVALID_DERIVATION_PATH
            )
        data = b"\x00" + key + struct.pack(">I", index + HARDENED_OFFSET)
        key, chain_code = _hmac_sha512(chain_code, data)
    return key
