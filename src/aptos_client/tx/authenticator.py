"""
Authenticators attached to signed transactions.

An ``AccountAuthenticator`` proves one account's consent: a variant tag
followed by the public key and signature in that scheme's wire form. A
``TransactionAuthenticator`` is the top-level wrapper stored in a signed
transaction. Ed25519 and MultiEd25519 appear there directly; every other
account authenticator is wrapped in ``SingleSender``. ``FeePayer`` adds the
accounts that co-sign and the account that pays gas.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, ClassVar, Tuple

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from ..core.address import AccountAddress
from ..crypto.any_key import MultiKeyPublicKey, MultiKeySignature
from ..crypto.ed25519 import Ed25519PublicKey, Ed25519Signature
from ..crypto.keys import PublicKey, Signature
from ..crypto.multi_ed25519 import MultiEd25519PublicKey, MultiEd25519Signature
from ..runtime.errors import MalformedInputError, UnsupportedVariantError
from .raw_transaction import FeePayerRawTransaction

if TYPE_CHECKING:
    from .raw_transaction import RawTransaction


class AccountAuthenticatorVariant(IntEnum):
    ED25519 = 0
    MULTI_ED25519 = 1
    SINGLE_KEY = 2
    MULTI_KEY = 3
    NO_ACCOUNT_AUTHENTICATOR = 4


class TransactionAuthenticatorVariant(IntEnum):
    ED25519 = 0
    MULTI_ED25519 = 1
    MULTI_AGENT = 2
    FEE_PAYER = 3
    SINGLE_SENDER = 4


class AccountAuthenticator(BcsSerializable):
    """Public key plus signature for one account."""

    VARIANT: ClassVar[AccountAuthenticatorVariant]

    public_key: PublicKey
    signature: Signature

    def verify(self, message: bytes) -> bool:
        return self.public_key.verify_signature(message, self.signature)

    @abstractmethod
    def to_transaction_authenticator(self) -> TransactionAuthenticator:
        """Wrap for use as the sole authenticator of a signed transaction."""

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(self.VARIANT)
        self.public_key.serialize(writer)
        self.signature.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> AccountAuthenticator:
        variant = reader.uleb128()
        if variant == AccountAuthenticatorVariant.ED25519:
            return Ed25519Authenticator(Ed25519PublicKey.deserialize(reader), Ed25519Signature.deserialize(reader))
        if variant == AccountAuthenticatorVariant.MULTI_ED25519:
            return MultiEd25519Authenticator(
                MultiEd25519PublicKey.deserialize(reader), MultiEd25519Signature.deserialize(reader)
            )
        if variant == AccountAuthenticatorVariant.MULTI_KEY:
            return MultiKeyAuthenticator(MultiKeyPublicKey.deserialize(reader), MultiKeySignature.deserialize(reader))
        raise UnsupportedVariantError(f"Unsupported account authenticator variant {variant}", details={"variant": variant})


@dataclass(frozen=True)
class Ed25519Authenticator(AccountAuthenticator):
    """Tag 0, length-prefixed 32-byte key, length-prefixed 64-byte signature."""

    VARIANT: ClassVar[AccountAuthenticatorVariant] = AccountAuthenticatorVariant.ED25519

    public_key: Ed25519PublicKey
    signature: Ed25519Signature

    def to_transaction_authenticator(self) -> TransactionAuthenticator:
        return TransactionAuthenticatorEd25519(self.public_key, self.signature)


@dataclass(frozen=True)
class MultiEd25519Authenticator(AccountAuthenticator):
    """Tag 1, ``keys || threshold`` blob, ``signatures || bitmap`` blob."""

    VARIANT: ClassVar[AccountAuthenticatorVariant] = AccountAuthenticatorVariant.MULTI_ED25519

    public_key: MultiEd25519PublicKey
    signature: MultiEd25519Signature

    def to_transaction_authenticator(self) -> TransactionAuthenticator:
        return TransactionAuthenticatorMultiEd25519(self.public_key, self.signature)


@dataclass(frozen=True)
class MultiKeyAuthenticator(AccountAuthenticator):
    """Tag 3, ``vector<AnyPublicKey>`` and threshold, ``vector<AnySignature>`` and bitmap."""

    VARIANT: ClassVar[AccountAuthenticatorVariant] = AccountAuthenticatorVariant.MULTI_KEY

    public_key: MultiKeyPublicKey
    signature: MultiKeySignature

    def to_transaction_authenticator(self) -> TransactionAuthenticator:
        return SingleSenderAuthenticator(self)


class TransactionAuthenticator(BcsSerializable):
    """Top-level authenticator of a signed transaction."""

    VARIANT: ClassVar[TransactionAuthenticatorVariant]

    def signing_message(self, raw_txn: RawTransaction) -> bytes:
        """The message the sender signed for ``raw_txn``."""
        return raw_txn.signing_message()

    @abstractmethod
    def verify(self, raw_txn: RawTransaction) -> bool:
        """Check every signature against ``raw_txn``."""

    @abstractmethod
    def serialize_body(self, writer: BinaryWriter) -> None:
        """Write the authenticator without its variant tag."""

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(self.VARIANT)
        self.serialize_body(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TransactionAuthenticator:
        variant = reader.uleb128()
        if variant == TransactionAuthenticatorVariant.ED25519:
            return TransactionAuthenticatorEd25519(
                Ed25519PublicKey.deserialize(reader), Ed25519Signature.deserialize(reader)
            )
        if variant == TransactionAuthenticatorVariant.MULTI_ED25519:
            return TransactionAuthenticatorMultiEd25519(
                MultiEd25519PublicKey.deserialize(reader), MultiEd25519Signature.deserialize(reader)
            )
        if variant == TransactionAuthenticatorVariant.FEE_PAYER:
            return FeePayerAuthenticator.deserialize_body(reader)
        if variant == TransactionAuthenticatorVariant.SINGLE_SENDER:
            return SingleSenderAuthenticator(AccountAuthenticator.deserialize(reader))
        raise UnsupportedVariantError(
            f"Unsupported transaction authenticator variant {variant}", details={"variant": variant}
        )


@dataclass(frozen=True)
class TransactionAuthenticatorEd25519(TransactionAuthenticator):
    VARIANT: ClassVar[TransactionAuthenticatorVariant] = TransactionAuthenticatorVariant.ED25519

    public_key: Ed25519PublicKey
    signature: Ed25519Signature

    def verify(self, raw_txn: RawTransaction) -> bool:
        return self.public_key.verify_signature(self.signing_message(raw_txn), self.signature)

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.public_key.serialize(writer)
        self.signature.serialize(writer)


@dataclass(frozen=True)
class TransactionAuthenticatorMultiEd25519(TransactionAuthenticator):
    VARIANT: ClassVar[TransactionAuthenticatorVariant] = TransactionAuthenticatorVariant.MULTI_ED25519

    public_key: MultiEd25519PublicKey
    signature: MultiEd25519Signature

    def verify(self, raw_txn: RawTransaction) -> bool:
        return self.public_key.verify_signature(self.signing_message(raw_txn), self.signature)

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.public_key.serialize(writer)
        self.signature.serialize(writer)


@dataclass(frozen=True)
class SingleSenderAuthenticator(TransactionAuthenticator):
    """Tag 4 followed by the embedded account authenticator, tag included."""

    VARIANT: ClassVar[TransactionAuthenticatorVariant] = TransactionAuthenticatorVariant.SINGLE_SENDER

    sender: AccountAuthenticator

    def verify(self, raw_txn: RawTransaction) -> bool:
        return self.sender.verify(self.signing_message(raw_txn))

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.sender.serialize(writer)


@dataclass(frozen=True)
class FeePayerAuthenticator(TransactionAuthenticator):
    """
    Sender, optional secondary signers, and the fee payer.

    Everyone signs the RawTransactionWithData message naming the fee payer.
    The sender and secondary signers may instead have signed with the fee
    payer left as the zero address.
    """

    VARIANT: ClassVar[TransactionAuthenticatorVariant] = TransactionAuthenticatorVariant.FEE_PAYER

    sender: AccountAuthenticator
    fee_payer: AccountAddress
    fee_payer_authenticator: AccountAuthenticator
    secondary_signers: Tuple[AccountAddress, ...] = field(default_factory=tuple)
    secondary_authenticators: Tuple[AccountAuthenticator, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.secondary_signers) != len(self.secondary_authenticators):
            raise MalformedInputError("Secondary signer addresses and authenticators differ in length")

    def fee_payer_transaction(self, raw_txn: RawTransaction, fee_payer: AccountAddress) -> FeePayerRawTransaction:
        return FeePayerRawTransaction(raw_txn, self.secondary_signers, fee_payer)

    def signing_message(self, raw_txn: RawTransaction) -> bytes:
        return self.fee_payer_transaction(raw_txn, self.fee_payer).signing_message()

    def verify(self, raw_txn: RawTransaction) -> bool:
        message = self.signing_message(raw_txn)
        if not self.fee_payer_authenticator.verify(message):
            return False
        unnamed = self.fee_payer_transaction(raw_txn, AccountAddress.zero()).signing_message()
        for authenticator in (self.sender,) + tuple(self.secondary_authenticators):
            if not (authenticator.verify(message) or authenticator.verify(unnamed)):
                return False
        return True

    def serialize_body(self, writer: BinaryWriter) -> None:
        self.sender.serialize(writer)
        writer.sequence(self.secondary_signers, BinaryWriter.struct)
        writer.sequence(self.secondary_authenticators, BinaryWriter.struct)
        self.fee_payer.serialize(writer)
        self.fee_payer_authenticator.serialize(writer)

    @classmethod
    def deserialize_body(cls, reader: BinaryReader) -> FeePayerAuthenticator:
        sender = AccountAuthenticator.deserialize(reader)
        secondary_signers = tuple(reader.sequence(AccountAddress.deserialize))
        secondary_authenticators = tuple(reader.sequence(AccountAuthenticator.deserialize))
        fee_payer = AccountAddress.deserialize(reader)
        fee_payer_authenticator = AccountAuthenticator.deserialize(reader)
        return cls(sender, fee_payer, fee_payer_authenticator, secondary_signers, secondary_authenticators)
