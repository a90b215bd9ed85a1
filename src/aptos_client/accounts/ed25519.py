"""
Single Ed25519 key accounts.

``Ed25519Account`` is the legacy scheme. ``SingleKeyAccount`` holds the same
kind of key under the newer single-key scheme; both derive the same address
and produce the same Ed25519 authenticator.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..core.address import AccountAddress
from ..crypto.ed25519 import Ed25519PrivateKey, Ed25519PublicKey, Ed25519Signature
from ..runtime.errors import MalformedInputError
from ..tx.authenticator import Ed25519Authenticator
from .base import Account, SigningScheme

logger = logging.getLogger(__name__)


class Ed25519Account(Account):
    """Account controlled by one Ed25519 private key."""

    def __init__(self, private_key: Ed25519PrivateKey, address: Optional[AccountAddress] = None):
        """
        Initialize an Ed25519 account.

        Args:
            private_key: Signing key
            address: Address to use instead of the one derived from the key
        """
        self._private_key = private_key
        self._public_key = private_key.public_key()
        self._address = address if address is not None else self.auth_key(self._public_key).account_address()
        logger.debug(f"Created {self.scheme().value} account {self._address}")

    @property
    def private_key(self) -> Ed25519PrivateKey:
        return self._private_key

    def public_key(self) -> Ed25519PublicKey:
        return self._public_key

    def address(self) -> AccountAddress:
        return self._address

    def scheme(self) -> SigningScheme:
        return SigningScheme.ED25519

    def sign(self, message: bytes) -> Ed25519Signature:
        return self._private_key.sign(message)

    def sign_with_authenticator(self, message: bytes) -> Ed25519Authenticator:
        return Ed25519Authenticator(self._public_key, self.sign(message))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ed25519Account):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._private_key == other._private_key
            and self._address == other._address
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._address))


class SingleKeyAccount(Ed25519Account):
    """Ed25519 key under the single-key scheme."""

    def scheme(self) -> SigningScheme:
        return SigningScheme.SINGLE_KEY


def as_private_key(signer: Union[Ed25519Account, Ed25519PrivateKey]) -> Ed25519PrivateKey:
    """Signing key of an Ed25519 account, or the key itself."""
    if isinstance(signer, Ed25519Account):
        return signer.private_key
    if isinstance(signer, Ed25519PrivateKey):
        return signer
    raise MalformedInputError(f"Cannot sign with {type(signer).__name__}; expected an Ed25519 account or key")
