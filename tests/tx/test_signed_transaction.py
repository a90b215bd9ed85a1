"""
Signed transaction tests: wire layout, verification and decoding for every
supported authenticator.
"""

import pytest

from aptos_client.accounts import Ed25519Account, MultiEd25519Account, MultiKeyAccount, SingleKeyAccount
from aptos_client.runtime.errors import UnsupportedVariantError
from aptos_client.tx import (
    FeePayerAuthenticator,
    FeePayerRawTransaction,
    SIGNED_TRANSACTION_CONTENT_TYPE,
    SignedTransaction,
    SingleSenderAuthenticator,
    TransactionAuthenticator,
    TransactionAuthenticatorEd25519,
    TransactionAuthenticatorMultiEd25519,
)


def sign(account, raw):
    return SignedTransaction(raw, account.sign_transaction_with_authenticator(raw))


@pytest.mark.unit
class TestEd25519SignedTransaction:
    """Single Ed25519 signer."""

    def test_wire_layout(self, account, make_raw_transaction):
        """Test raw bytes, tag 0, then the length-prefixed key and signature."""
        raw = make_raw_transaction(account.address())
        signed = sign(account, raw)
        signature = account.sign(raw.signing_message())
        assert signed.to_bytes() == (
            raw.to_bcs()
            + b"\x00"
            + b"\x20" + account.public_key().to_bytes()
            + b"\x40" + signature.to_bytes()
        )
        assert isinstance(signed.authenticator, TransactionAuthenticatorEd25519)

    def test_verify(self, account, make_raw_transaction):
        assert sign(account, make_raw_transaction(account.address())).verify()

    def test_tampered_transaction_fails(self, account, make_raw_transaction):
        signed = sign(account, make_raw_transaction(account.address()))
        tampered = SignedTransaction(make_raw_transaction(account.address(), sequence_number=1), signed.authenticator)
        assert not tampered.verify()

    def test_decode(self, account, make_raw_transaction):
        signed = sign(account, make_raw_transaction(account.address()))
        decoded = SignedTransaction.from_bcs(signed.to_bytes())
        assert decoded == signed
        assert decoded.verify()

    def test_single_key_account_uses_ed25519_authenticator(self, private_key, make_raw_transaction):
        legacy = Ed25519Account(private_key)
        single = SingleKeyAccount(private_key)
        raw = make_raw_transaction(legacy.address())
        assert sign(single, raw).to_bytes() == sign(legacy, raw).to_bytes()

    def test_content_type(self):
        assert SIGNED_TRANSACTION_CONTENT_TYPE == "application/x.aptos.signed_transaction+bcs"


@pytest.mark.unit
class TestMultiSignerTransactions:
    """MultiEd25519 and MultiKey senders."""

    def test_multi_ed25519(self, private_keys, make_raw_transaction):
        account = MultiEd25519Account.from_private_keys(private_keys, 2)
        raw = make_raw_transaction(account.address())
        signed = sign(account, raw)
        authenticator = signed.authenticator
        assert isinstance(authenticator, TransactionAuthenticatorMultiEd25519)
        assert signed.to_bytes() == (
            raw.to_bcs() + b"\x01" + authenticator.public_key.to_bcs() + authenticator.signature.to_bcs()
        )
        assert signed.verify()
        assert SignedTransaction.from_bcs(signed.to_bytes()) == signed

    def test_multi_key_is_wrapped_in_single_sender(self, private_keys, make_raw_transaction):
        account = MultiKeyAccount.from_private_keys(private_keys, 2)
        raw = make_raw_transaction(account.address())
        signed = sign(account, raw)
        assert isinstance(signed.authenticator, SingleSenderAuthenticator)
        assert signed.to_bytes()[len(raw.to_bcs()):][:2] == b"\x04\x03"
        assert signed.verify()
        decoded = SignedTransaction.from_bcs(signed.to_bytes())
        assert decoded == signed
        assert decoded.verify()

    def test_multi_key_below_threshold_fails(self, private_keys, make_raw_transaction):
        """Test one signature does not satisfy a 2-of-3 key set."""
        full = MultiKeyAccount.from_private_keys(private_keys, 2)
        partial = MultiKeyAccount(full.public_key(), [(0, private_keys[0])])
        assert not sign(partial, make_raw_transaction(full.address())).verify()


@pytest.mark.unit
class TestFeePayerTransactions:
    """Sender and fee payer both sign the RawTransactionWithData message."""

    @pytest.fixture
    def fee_payer(self, private_keys):
        return Ed25519Account(private_keys[2])

    def build(self, sender, fee_payer, raw, sender_names_fee_payer=True, payer_names_fee_payer=True):
        named = FeePayerRawTransaction.create(raw, fee_payer=fee_payer.address())
        unnamed = FeePayerRawTransaction.create(raw)
        sender_auth = sender.sign_transaction_with_authenticator(named if sender_names_fee_payer else unnamed)
        payer_auth = fee_payer.sign_transaction_with_authenticator(named if payer_names_fee_payer else unnamed)
        return SignedTransaction(raw, FeePayerAuthenticator(sender_auth, fee_payer.address(), payer_auth))

    def test_verify(self, account, fee_payer, make_raw_transaction):
        signed = self.build(account, fee_payer, make_raw_transaction(account.address()))
        assert signed.verify()
        assert signed.to_bytes()[len(signed.raw_txn.to_bcs())] == 0x03

    def test_sender_signed_before_fee_payer_known(self, account, fee_payer, make_raw_transaction):
        signed = self.build(account, fee_payer, make_raw_transaction(account.address()), sender_names_fee_payer=False)
        assert signed.verify()

    def test_fee_payer_must_sign_named_message(self, account, fee_payer, make_raw_transaction):
        signed = self.build(account, fee_payer, make_raw_transaction(account.address()), payer_names_fee_payer=False)
        assert not signed.verify()

    def test_plain_signature_rejected(self, account, fee_payer, make_raw_transaction):
        """Test a signature over the plain raw transaction does not count."""
        raw = make_raw_transaction(account.address())
        named = FeePayerRawTransaction.create(raw, fee_payer=fee_payer.address())
        authenticator = FeePayerAuthenticator(
            account.sign_transaction_with_authenticator(raw),
            fee_payer.address(),
            fee_payer.sign_transaction_with_authenticator(named),
        )
        assert not SignedTransaction(raw, authenticator).verify()

    def test_decode(self, account, fee_payer, make_raw_transaction):
        signed = self.build(account, fee_payer, make_raw_transaction(account.address()))
        decoded = SignedTransaction.from_bcs(signed.to_bytes())
        assert decoded == signed
        assert decoded.verify()


@pytest.mark.unit
class TestUnsupportedAuthenticators:
    def test_multi_agent_rejected(self):
        with pytest.raises(UnsupportedVariantError):
            TransactionAuthenticator.from_bcs(b"\x02" + b"\x00" * 40)

    @pytest.mark.parametrize("variant", [2, 4, 5])
    def test_account_authenticator_variants_rejected(self, variant):
        """Test single key, no-account and unknown account authenticators."""
        with pytest.raises(UnsupportedVariantError):
            TransactionAuthenticator.from_bcs(bytes([0x04, variant]) + b"\x00" * 40)

    def test_unknown_transaction_authenticator(self):
        with pytest.raises(UnsupportedVariantError):
            TransactionAuthenticator.from_bcs(b"\x07")
