"""
M-of-N Ed25519 multi-signature accounts.

The key set order fixes each signer's slot, and therefore the address. The
signer list is never reordered: signer slots must already be strictly
increasing.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Union

from ..core.address import AccountAddress
from ..crypto.bitmap import Bitmap
from ..crypto.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from ..crypto.multi_ed25519 import MultiEd25519PublicKey, MultiEd25519Signature
from ..runtime.errors import ErrorCode, MalformedInputError
from ..tx.authenticator import MultiEd25519Authenticator
from .base import Account, SigningScheme, validate_signer_set
from .ed25519 import Ed25519Account, as_private_key

logger = logging.getLogger(__name__)

Signer = Union[Ed25519Account, Ed25519PrivateKey]


class MultiEd25519Account(Account):
    """Account controlled by an Ed25519 key set with a signature threshold."""

    def __init__(self, public_key: MultiEd25519PublicKey, signers: Sequence[Tuple[int, Ed25519PrivateKey]]):
        """
        Initialize from a key set and the local signers.

        Args:
            public_key: Key set and threshold
            signers: ``(slot, private key)`` pairs in strictly increasing slot order

        Raises:
            MalformedInputError: If the signers do not match the key set
        """
        validate_signer_set(len(signers), len(public_key.keys), public_key.threshold)
        for index, private_key in signers:
            if not 0 <= index < len(public_key.keys) or public_key.keys[index] != private_key.public_key():
                raise MalformedInputError(
                    f"Signer at slot {index} does not match the key set", ErrorCode.SIGNER_NOT_FOUND
                )
        self._bitmap = Bitmap.from_indices(index for index, _ in signers)
        self._public_key = public_key
        self._signers: Tuple[Tuple[int, Ed25519PrivateKey], ...] = tuple(signers)
        self._address = self.auth_key(public_key).account_address()
        logger.debug(
            f"Created {self.scheme().value} account {self._address} "
            f"({public_key.threshold}-of-{len(public_key.keys)}, signers {self._bitmap.indices()})"
        )

    @classmethod
    def from_signers(
        cls,
        signers: Sequence[Signer],
        public_keys: Sequence[Ed25519PublicKey],
        threshold: int,
    ) -> MultiEd25519Account:
        """
        Build from signers and the full ordered key set.

        Args:
            signers: Accounts or keys that will sign, in key set order
            public_keys: Every key of the set; order determines the address
            threshold: Minimum number of signatures

        Raises:
            MalformedInputError: On bad sizes, an unknown signer, or signers out of order
        """
        validate_signer_set(len(signers), len(public_keys), threshold)
        key_set = MultiEd25519PublicKey(public_keys, threshold)
        resolved: List[Tuple[int, Ed25519PrivateKey]] = []
        for signer in signers:
            private_key = as_private_key(signer)
            resolved.append((key_set.index_of(private_key.public_key()), private_key))
        return cls(key_set, resolved)

    @classmethod
    def from_private_keys(cls, private_keys: Sequence[Ed25519PrivateKey], threshold: int) -> MultiEd25519Account:
        """Key set made from all ``private_keys``; the first ``threshold`` of them sign."""
        public_keys = [key.public_key() for key in private_keys]
        return cls.from_signers(list(private_keys)[:threshold], public_keys, threshold)

    @property
    def signer_indices(self) -> List[int]:
        return self._bitmap.indices()

    def public_key(self) -> MultiEd25519PublicKey:
        return self._public_key

    def address(self) -> AccountAddress:
        return self._address

    def scheme(self) -> SigningScheme:
        return SigningScheme.MULTI_ED25519

    def sign(self, message: bytes) -> MultiEd25519Signature:
        return MultiEd25519Signature.from_indexed(
            [(index, private_key.sign(message)) for index, private_key in self._signers]
        )

    def sign_with_authenticator(self, message: bytes) -> MultiEd25519Authenticator:
        return MultiEd25519Authenticator(self._public_key, self.sign(message))
