"""
Base account interface.

An account bundles the key material held locally with the on-chain address
it controls. Every variant signs arbitrary messages and transactions and can
produce the authenticator that accompanies a signed transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..core.address import AccountAddress, AuthenticationKey, AuthKeyScheme
from ..crypto.ed25519 import Ed25519PrivateKey
from ..crypto.keys import PublicKey, Signature
from ..runtime.errors import ErrorCode, MalformedInputError
from ..tx.raw_transaction import FeePayerRawTransaction, RawTransaction

if TYPE_CHECKING:
    from ..tx.authenticator import AccountAuthenticator

SignableTransaction = Union[RawTransaction, FeePayerRawTransaction]


class SigningScheme(Enum):
    """How an account's address is derived from its keys."""

    ED25519 = "ed25519"
    SINGLE_KEY = "single_key"
    MULTI_ED25519 = "multi_ed25519"
    MULTI_KEY = "multi_key"

    @property
    def auth_key_scheme(self) -> AuthKeyScheme:
        return {
            SigningScheme.ED25519: AuthKeyScheme.ED25519,
            SigningScheme.SINGLE_KEY: AuthKeyScheme.SINGLE_KEY,
            SigningScheme.MULTI_ED25519: AuthKeyScheme.MULTI_ED25519,
            SigningScheme.MULTI_KEY: AuthKeyScheme.MULTI_KEY,
        }[self]


class Account(ABC):
    """
    Abstract base class for all account variants.

    Accounts are immutable; the address is derived once when the account is
    built.
    """

    @abstractmethod
    def public_key(self) -> PublicKey:
        """
        Get the account's public key.

        Returns:
            Public key, or key set for multi-signer accounts
        """
        pass

    @abstractmethod
    def address(self) -> AccountAddress:
        """Get the account address."""
        pass

    @abstractmethod
    def scheme(self) -> SigningScheme:
        pass

    @abstractmethod
    def sign(self, message: bytes) -> Signature:
        """
        Sign a message.

        Args:
            message: Bytes to sign

        Returns:
            Signature in this account's scheme
        """
        pass

    @abstractmethod
    def sign_with_authenticator(self, message: bytes) -> AccountAuthenticator:
        """
        Sign a message and pair the signature with the public key.

        Args:
            message: Bytes to sign

        Returns:
            Account authenticator for this account's scheme
        """
        pass

    def sign_transaction(self, transaction: SignableTransaction) -> Signature:
        """Sign the signing message of a raw or fee payer transaction."""
        return self.sign(transaction.signing_message())

    def sign_transaction_with_authenticator(self, transaction: SignableTransaction) -> AccountAuthenticator:
        """Sign a raw or fee payer transaction and return its authenticator."""
        return self.sign_with_authenticator(transaction.signing_message())

    def verify(self, message: bytes, signature: Signature) -> bool:
        """
        Verify a signature made by this account.

        Returns:
            True if the signature is valid for ``message``
        """
        return self.public_key().verify_signature(message, signature)

    @staticmethod
    def auth_key(public_key: PublicKey) -> AuthenticationKey:
        """Authentication key for a public key of any supported scheme."""
        return public_key.auth_key()

    @staticmethod
    def generate(legacy: bool = True) -> Account:
        """
        Create an account with a fresh random Ed25519 key.

        Args:
            legacy: Build an ``Ed25519Account`` if True, else a ``SingleKeyAccount``
        """
        return Account.from_private_key(Ed25519PrivateKey.generate(), legacy=legacy)

    @staticmethod
    def from_private_key(
        private_key: Union[Ed25519PrivateKey, str, bytes],
        address: Optional[AccountAddress] = None,
        legacy: bool = True,
    ) -> Account:
        """
        Create a single-key account.

        Args:
            private_key: Private key object, hex string or 32 raw bytes
            address: Address to use instead of the derived one, for rotated keys
            legacy: Build an ``Ed25519Account`` if True, else a ``SingleKeyAccount``
        """
        # Import here to avoid circular imports
        from .ed25519 import Ed25519Account, SingleKeyAccount

        if isinstance(private_key, str):
            private_key = Ed25519PrivateKey.from_hex(private_key)
        elif isinstance(private_key, (bytes, bytearray)):
            private_key = Ed25519PrivateKey.from_bytes(bytes(private_key))
        account_class = Ed25519Account if legacy else SingleKeyAccount
        return account_class(private_key, address)

    @staticmethod
    def from_derivation_path(path: str, mnemonic: str, legacy: bool = True) -> Account:
        """
        Create a single-key account from a mnemonic and hardened path.

        Args:
            path: Path such as ``m/44'/637'/0'/0'/0'``
            mnemonic: Space-separated mnemonic words
            legacy: Build an ``Ed25519Account`` if True, else a ``SingleKeyAccount``
        """
        return Account.from_private_key(Ed25519PrivateKey.from_derivation_path(path, mnemonic), legacy=legacy)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address()})"


def validate_signer_set(signer_count: int, key_count: int, threshold: int) -> None:
    """
    Check the sizes of a multi-signer account before any key is resolved.

    Raises:
        MalformedInputError: If there are no keys, no signers, or more signers than the threshold
    """
    if key_count == 0:
        raise MalformedInputError("Public key list must not be empty", ErrorCode.INVALID_THRESHOLD)
    if signer_count == 0:
        raise MalformedInputError("Signer list must not be empty", ErrorCode.INVALID_THRESHOLD)
    if signer_count > threshold:
        raise MalformedInputError(
            f"{signer_count} signers given but the threshold is {threshold}",
            ErrorCode.INVALID_THRESHOLD,
            details={"signers": signer_count, "threshold": threshold},
        )
