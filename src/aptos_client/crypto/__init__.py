"""
Cryptographic primitives.

Ed25519 keys and signatures, multi-signature key sets, keyless keys, the
variant-tagged wrappers used by MultiKey, the signer bitmap and mnemonic
key derivation.
"""

from .any_key import AnyPublicKey, AnySignature, MultiKeyPublicKey, MultiKeySignature
from .bitmap import BITMAP_LENGTH, MAX_SIGNERS, Bitmap, create_bitmap
from .derivation import derive_private_key, entropy_to_mnemonic, is_valid_hardened_path, mnemonic_to_seed
from .ed25519 import Ed25519Error, Ed25519PrivateKey, Ed25519PublicKey, Ed25519Signature
from .keyless import KeylessPublicKey
from .keys import AnyPublicKeyVariant, AnySignatureVariant, PublicKey, Signature
from .multi_ed25519 import MultiEd25519PublicKey, MultiEd25519Signature

__all__ = [
    "AnyPublicKey",
    "AnyPublicKeyVariant",
    "AnySignature",
    "AnySignatureVariant",
    "BITMAP_LENGTH",
    "Bitmap",
    "Ed25519Error",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Ed25519Signature",
    "KeylessPublicKey",
    "MAX_SIGNERS",
    "MultiEd25519PublicKey",
    "MultiEd25519Signature",
    "MultiKeyPublicKey",
    "MultiKeySignature",
    "PublicKey",
    "Signature",
    "create_bitmap",
    "derive_private_key",
    "entropy_to_mnemonic",
    "is_valid_hardened_path",
    "mnemonic_to_seed",
]
