"""
Raw transaction and fee payer transaction tests.
"""

import hashlib

import pytest

from aptos_client.core.address import AccountAddress
from aptos_client.runtime.errors import DecodeTruncationError, MalformedInputError, UnsupportedVariantError
from aptos_client.tx.raw_transaction import DEFAULT_EXPIRATION_TTL, FeePayerRawTransaction, RawTransaction
from tests.conftest import EXPIRATION


@pytest.mark.unit
class TestRawTransaction:
    """Field order, validation and signing message."""

    def test_field_layout(self, account, make_raw_transaction, transfer_payload):
        raw = make_raw_transaction(account.address(), sequence_number=7)
        data = raw.to_bcs()
        payload_bytes = transfer_payload.to_bcs()
        assert data[:32] == account.address().to_bytes()
        assert data[32:40] == (7).to_bytes(8, "little")
        assert data[40:40 + len(payload_bytes)] == payload_bytes
        tail = data[40 + len(payload_bytes):]
        assert tail == (
            (1_000_000).to_bytes(8, "little")
            + (100).to_bytes(8, "little")
            + EXPIRATION.to_bytes(8, "little")
            + b"\x04"
        )

    def test_signing_message(self, account, make_raw_transaction):
        raw = make_raw_transaction(account.address())
        prefix = hashlib.sha3_256(b"APTOS::RawTransaction").digest()
        assert raw.signing_message() == prefix + raw.to_bcs()

    def test_decode(self, account, make_raw_transaction):
        raw = make_raw_transaction(account.address(), sequence_number=3)
        assert RawTransaction.from_bcs(raw.to_bcs()) == raw

    def test_truncated(self, account, make_raw_transaction):
        data = make_raw_transaction(account.address()).to_bcs()
        with pytest.raises(DecodeTruncationError):
            RawTransaction.from_bcs(data[:-1])

    @pytest.mark.parametrize("chain_id", [-1, 256])
    def test_invalid_chain_id(self, account, make_raw_transaction, chain_id):
        with pytest.raises(MalformedInputError):
            make_raw_transaction(account.address(), chain_id=chain_id)

    @pytest.mark.parametrize("sequence_number", [-1, 2**64])
    def test_invalid_sequence_number(self, account, make_raw_transaction, sequence_number):
        with pytest.raises(MalformedInputError):
            make_raw_transaction(account.address(), sequence_number=sequence_number)

    def test_create_sets_expiration(self, account, transfer_payload, monkeypatch):
        """Test expiration is the current time plus the ttl."""
        monkeypatch.setattr("time.time", lambda: 1_000.5)
        raw = RawTransaction.create(account.address(), 0, transfer_payload, 2)
        assert raw.expiration_timestamps_secs == 1_000 + DEFAULT_EXPIRATION_TTL
        assert raw.chain_id == 2

        raw = RawTransaction.create(account.address(), 0, transfer_payload, 2, expiration_ttl=30)
        assert raw.expiration_timestamps_secs == 1_030


@pytest.mark.unit
class TestFeePayerRawTransaction:
    """RawTransactionWithData, fee payer variant."""

    def test_encoding_with_unnamed_fee_payer(self, account, make_raw_transaction):
        raw = make_raw_transaction(account.address())
        txn = FeePayerRawTransaction.create(raw)
        assert txn.fee_payer == AccountAddress.zero()
        assert txn.to_bcs() == b"\x01" + raw.to_bcs() + b"\x00" + b"\x00" * 32

    def test_encoding_with_secondary_signers(self, account, make_raw_transaction, recipient):
        raw = make_raw_transaction(account.address())
        fee_payer = AccountAddress.from_str_relaxed("0xfee")
        txn = FeePayerRawTransaction.create(raw, [recipient], fee_payer)
        assert txn.to_bcs() == (
            b"\x01" + raw.to_bcs() + b"\x01" + recipient.to_bytes() + fee_payer.to_bytes()
        )
        assert FeePayerRawTransaction.from_bcs(txn.to_bcs()) == txn

    def test_signing_message(self, account, make_raw_transaction):
        txn = FeePayerRawTransaction.create(make_raw_transaction(account.address()))
        prefix = hashlib.sha3_256(b"APTOS::RawTransactionWithData").digest()
        assert txn.signing_message() == prefix + txn.to_bcs()

    def test_signing_message_depends_on_fee_payer(self, account, make_raw_transaction):
        raw = make_raw_transaction(account.address())
        unnamed = FeePayerRawTransaction.create(raw)
        named = FeePayerRawTransaction.create(raw, fee_payer=AccountAddress.from_str_relaxed("0xfee"))
        assert unnamed.signing_message() != named.signing_message()

    def test_multi_agent_variant_rejected(self, account, make_raw_transaction):
        data = FeePayerRawTransaction.create(make_raw_transaction(account.address())).to_bcs()
        with pytest.raises(UnsupportedVariantError):
            FeePayerRawTransaction.from_bcs(b"\x00" + data[1:])
