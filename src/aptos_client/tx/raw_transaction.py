"""
Raw transactions and their signing messages.

``RawTransaction`` serializes as sender, sequence number, payload, max gas,
gas unit price, expiration and a single chain id byte, in that order. The
message a key signs is the SHA3-256 of a domain separator followed by the
transaction bytes.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence, Tuple

from ..codec import (
    RAW_TRANSACTION_SALT,
    RAW_TRANSACTION_WITH_DATA_SALT,
    BcsSerializable,
    BinaryReader,
    BinaryWriter,
    signing_message,
)
from ..codec.writer import MAX_U8, MAX_U64
from ..core.address import AccountAddress
from ..runtime.errors import MalformedInputError, UnsupportedVariantError
from ..types.payload import TransactionPayload

DEFAULT_MAX_GAS_AMOUNT = 1_000_000
DEFAULT_GAS_UNIT_PRICE = 100
DEFAULT_EXPIRATION_TTL = 600


@dataclass(frozen=True)
class RawTransaction(BcsSerializable):
    """Unsigned transaction."""

    sender: AccountAddress
    sequence_number: int
    payload: TransactionPayload
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamps_secs: int
    chain_id: int

    def __post_init__(self):
        for name in ("sequence_number", "max_gas_amount", "gas_unit_price", "expiration_timestamps_secs"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= MAX_U64:
                raise MalformedInputError(f"{name} must be a u64, got {value!r}")
        if not isinstance(self.chain_id, int) or not 0 <= self.chain_id <= MAX_U8:
            raise MalformedInputError(f"chain_id must be a u8, got {self.chain_id!r}")

    @classmethod
    def create(
        cls,
        sender: AccountAddress,
        sequence_number: int,
        payload: TransactionPayload,
        chain_id: int,
        max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT,
        gas_unit_price: int = DEFAULT_GAS_UNIT_PRICE,
        expiration_ttl: int = DEFAULT_EXPIRATION_TTL,
    ) -> RawTransaction:
        """Build a transaction expiring ``expiration_ttl`` seconds from now."""
        return cls(
            sender,
            sequence_number,
            payload,
            max_gas_amount,
            gas_unit_price,
            int(time.time()) + expiration_ttl,
            chain_id,
        )

    def signing_message(self) -> bytes:
        """``sha3_256("APTOS::RawTransaction") || bcs(self)``"""
        return signing_message(RAW_TRANSACTION_SALT, self.to_bcs())

    def serialize(self, writer: BinaryWriter) -> None:
        self.sender.serialize(writer)
        writer.u64(self.sequence_number)
        self.payload.serialize(writer)
        writer.u64(self.max_gas_amount)
        writer.u64(self.gas_unit_price)
        writer.u64(self.expiration_timestamps_secs)
        writer.u8(self.chain_id)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> RawTransaction:
        return cls(
            AccountAddress.deserialize(reader),
            reader.u64(),
            TransactionPayload.deserialize(reader),
            reader.u64(),
            reader.u64(),
            reader.u64(),
            reader.u8(),
        )


class RawTransactionWithDataVariant(IntEnum):
    MULTI_AGENT = 0
    FEE_PAYER = 1


@dataclass(frozen=True)
class FeePayerRawTransaction(BcsSerializable):
    """
    A raw transaction whose gas is paid by a third party.

    The sender may sign before the fee payer is known, in which case
    ``fee_payer`` is the zero address.
    """

    raw_txn: RawTransaction
    secondary_signers: Tuple[AccountAddress, ...] = field(default_factory=tuple)
    fee_payer: AccountAddress = field(default_factory=AccountAddress.zero)

    @classmethod
    def create(
        cls,
        raw_txn: RawTransaction,
        secondary_signers: Sequence[AccountAddress] = (),
        fee_payer: Optional[AccountAddress] = None,
    ) -> FeePayerRawTransaction:
        return cls(raw_txn, tuple(secondary_signers), fee_payer or AccountAddress.zero())

    def signing_message(self) -> bytes:
        """``sha3_256("APTOS::RawTransactionWithData") || bcs(self)``"""
        return signing_message(RAW_TRANSACTION_WITH_DATA_SALT, self.to_bcs())

    def serialize(self, writer: BinaryWriter) -> None:
        writer.uleb128(RawTransactionWithDataVariant.FEE_PAYER)
        self.raw_txn.serialize(writer)
        writer.sequence(self.secondary_signers, BinaryWriter.struct)
        self.fee_payer.serialize(writer)

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> FeePayerRawTransaction:
        variant = reader.uleb128()
        if variant != RawTransactionWithDataVariant.FEE_PAYER:
            raise UnsupportedVariantError(
                f"Unsupported raw transaction with data variant {variant}", details={"variant": variant}
            )
        raw_txn = RawTransaction.deserialize(reader)
        secondary_signers = tuple(reader.sequence(AccountAddress.deserialize))
        fee_payer = AccountAddress.deserialize(reader)
        return cls(raw_txn, secondary_signers, fee_payer)
