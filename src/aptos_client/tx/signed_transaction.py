"""
Signed transactions.

A signed transaction is the raw transaction followed by its transaction
authenticator. Its BCS bytes are what gets submitted to a fullnode.
"""

from __future__ import annotations

from typing import Union

from ..codec import BcsSerializable, BinaryReader, BinaryWriter
from .authenticator import AccountAuthenticator, TransactionAuthenticator
from .raw_transaction import RawTransaction

SIGNED_TRANSACTION_CONTENT_TYPE = "application/x.aptos.signed_transaction+bcs"


class SignedTransaction(BcsSerializable):
    """Raw transaction plus authenticator; immutable once built."""

    def __init__(
        self,
        raw_txn: RawTransaction,
        authenticator: Union[AccountAuthenticator, TransactionAuthenticator],
    ):
        """
        Args:
            raw_txn: The transaction that was signed
            authenticator: An account authenticator, wrapped according to its
                variant, or a ready transaction authenticator
        """
        if isinstance(authenticator, AccountAuthenticator):
            authenticator = authenticator.to_transaction_authenticator()
        self._raw_txn = raw_txn
        self._authenticator = authenticator

    @property
    def raw_txn(self) -> RawTransaction:
        return self._raw_txn

    @property
    def authenticator(self) -> TransactionAuthenticator:
        return self._authenticator

    def verify(self) -> bool:
        """Check the authenticator against the message it should have signed."""
        return self._authenticator.verify(self._raw_txn)

    def to_bytes(self) -> bytes:
        return self.to_bcs()

    def serialize(self, writer: BinaryWriter) -> None:
        self._raw_txn.serialize(writer)
        self._authenticator.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> SignedTransaction:
        raw_txn = RawTransaction.deserialize(reader)
        authenticator = TransactionAuthenticator.deserialize(reader)
        return cls(raw_txn, authenticator)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignedTransaction):
            return NotImplemented
        return self._raw_txn == other._raw_txn and self._authenticator == other._authenticator

    def __hash__(self) -> int:
        return hash(self.to_bcs())

    def __repr__(self) -> str:
        return f"SignedTransaction(sender={self._raw_txn.sender}, authenticator={type(self._authenticator).__name__})"
