"""
M-of-N MultiKey accounts.

The key set may mix Ed25519 keys with keyless identities; only the Ed25519
keys can be held locally and sign. Signers are sorted by their slot in the
key set, so the order in which they are supplied does not matter.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Union

from ..core.address import AccountAddress
from ..crypto.any_key import MultiKeyPublicKey, MultiKeySignature
from ..crypto.bitmap import Bitmap
from ..crypto.ed25519 import Ed25519PrivateKey
from ..crypto.keys import PublicKey
from ..runtime.errors import ErrorCode, MalformedInputError
from ..tx.authenticator import MultiKeyAuthenticator
from .base import Account, SigningScheme, validate_signer_set
from .ed25519 import Ed25519Account, as_private_key

logger = logging.getLogger(__name__)

Signer = Union[Ed25519Account, Ed25519PrivateKey]


class MultiKeyAccount(Account):
    """Account controlled by a mixed key set with a signature threshold."""

    def __init__(self, public_key: MultiKeyPublicKey, signers: Sequence[Tuple[int, Ed25519PrivateKey]]):
        """
        Initialize from a key set and the local signers.

        Args:
            public_key: Key set and threshold
            signers: ``(slot, private key)`` pairs; sorted by slot here

        Raises:
            MalformedInputError: If the signers do not match the key set
        """
        validate_signer_set(len(signers), len(public_key.keys), public_key.threshold)
        ordered = sorted(signers, key=lambda pair: pair[0])
        for index, private_key in ordered:
            if not 0 <= index < len(public_key.keys) or public_key.keys[index].inner != private_key.public_key():
                raise MalformedInputError(
                    f"Signer at slot {index} does not match the key set", ErrorCode.SIGNER_NOT_FOUND
                )
        self._bitmap = Bitmap.from_indices(index for index, _ in ordered)
        self._public_key = public_key
        self._signers: Tuple[Tuple[int, Ed25519PrivateKey], ...] = tuple(ordered)
        self._address = self.auth_key(public_key).account_address()
        logger.debug(
            f"Created {self.scheme().value} account {self._address} "
            f"({public_key.threshold}-of-{len(public_key.keys)}, signers {self._bitmap.indices()})"
        )

    @classmethod
    def from_signers(
        cls,
        signers: Sequence[Signer],
        public_keys: Sequence[PublicKey],
        threshold: int,
    ) -> MultiKeyAccount:
        """
        Build from signers and the full ordered key set.

        Args:
            signers: Accounts or keys that will sign, in any order
            public_keys: Every key of the set (Ed25519 or keyless); order determines the address
            threshold: Minimum number of signatures

        Raises:
            MalformedInputError: On bad sizes or a signer whose key is not in the set
        """
        validate_signer_set(len(signers), len(public_keys), threshold)
        key_set = MultiKeyPublicKey(public_keys, threshold)
        resolved: List[Tuple[int, Ed25519PrivateKey]] = []
        for signer in signers:
            private_key = as_private_key(signer)
            index = key_set.index_of(private_key.public_key())
            logger.debug(f"Resolved signer {private_key.public_key()} to slot {index}")
            resolved.append((index, private_key))
        return cls(key_set, resolved)

    @classmethod
    def from_private_keys(cls, private_keys: Sequence[Ed25519PrivateKey], threshold: int) -> MultiKeyAccount:
        """Key set made from all ``private_keys``; the first ``threshold`` of them sign."""
        public_keys = [key.public_key() for key in private_keys]
        return cls.from_signers(list(private_keys)[:threshold], public_keys, threshold)

    @property
    def signer_indices(self) -> List[int]:
        return self._bitmap.indices()

    def public_key(self) -> MultiKeyPublicKey:
        return self._public_key

    def address(self) -> AccountAddress:
        return self._address

    def scheme(self) -> SigningScheme:
        return SigningScheme.MULTI_KEY

    def sign(self, message: bytes) -> MultiKeySignature:
        return MultiKeySignature.from_indexed(
            [(index, private_key.sign(message)) for index, private_key in self._signers]
        )

    def sign_with_authenticator(self, message: bytes) -> MultiKeyAuthenticator:
        return MultiKeyAuthenticator(self._public_key, self.sign(message))
