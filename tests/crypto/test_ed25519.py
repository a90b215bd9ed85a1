"""
Ed25519 key, signature and verification tests.

Uses the RFC 8032 section 7.1 test vectors.
"""

import hashlib

import pytest

from aptos_client.crypto.ed25519 import (
    Ed25519Error,
    Ed25519PrivateKey,
    Ed25519PublicKey,
    Ed25519Signature,
)
from aptos_client.runtime.errors import MalformedInputError
from tests.conftest import (
    RFC8032_TEST1_PUBLIC,
    RFC8032_TEST1_SECRET,
    RFC8032_TEST1_SIGNATURE,
    RFC8032_TEST2_PUBLIC,
    RFC8032_TEST2_SECRET,
    RFC8032_TEST2_SIGNATURE,
)


@pytest.mark.unit
class TestRfc8032Vectors:
    """Known-answer tests."""

    @pytest.mark.parametrize("secret,public,message,signature", [
        (RFC8032_TEST1_SECRET, RFC8032_TEST1_PUBLIC, b"", RFC8032_TEST1_SIGNATURE),
        (RFC8032_TEST2_SECRET, RFC8032_TEST2_PUBLIC, b"\x72", RFC8032_TEST2_SIGNATURE),
    ])
    def test_vector(self, secret, public, message, signature):
        """Test public key derivation and deterministic signatures."""
        private_key = Ed25519PrivateKey.from_hex(secret)
        assert private_key.public_key().to_bytes().hex() == public

        sig = private_key.sign(message)
        assert sig.to_bytes().hex() == signature
        assert private_key.public_key().verify_signature(message, sig)


@pytest.mark.unit
class TestEd25519Keys:
    """Key construction and encoding."""

    def test_random_generation(self):
        """Test random keys differ and have the right length."""
        first = Ed25519PrivateKey.generate()
        second = Ed25519PrivateKey.generate()
        assert first != second
        assert len(first.to_bytes()) == 32

    def test_hex_forms(self, private_key):
        """Test hex parsing with and without 0x."""
        assert Ed25519PrivateKey.from_hex("0x" + RFC8032_TEST1_SECRET) == private_key
        assert private_key.to_hex() == "0x" + RFC8032_TEST1_SECRET
        assert Ed25519PublicKey.from_hex(RFC8032_TEST1_PUBLIC) == private_key.public_key()

    @pytest.mark.parametrize("length", [0, 31, 33])
    def test_private_key_length(self, length):
        with pytest.raises(Ed25519Error):
            Ed25519PrivateKey(b"\x01" * length)

    def test_public_key_length(self):
        """Test wrong-size public keys raise a malformed input error."""
        with pytest.raises(MalformedInputError):
            Ed25519PublicKey(b"\x01" * 31)

    def test_signature_length(self):
        with pytest.raises(Ed25519Error):
            Ed25519Signature(b"\x00" * 63)

    def test_invalid_hex(self):
        with pytest.raises(Ed25519Error):
            Ed25519PrivateKey.from_hex("not hex")

    def test_public_key_bcs(self, private_key):
        """Test the BCS form is the length-prefixed 32 bytes."""
        public_key = private_key.public_key()
        assert public_key.to_bcs() == b"\x20" + public_key.to_bytes()
        assert Ed25519PublicKey.from_bcs(public_key.to_bcs()) == public_key

    def test_signature_bcs(self, private_key):
        """Test the BCS form is the length-prefixed 64 bytes."""
        sig = private_key.sign(b"msg")
        assert sig.to_bcs() == b"\x40" + sig.to_bytes()
        assert Ed25519Signature.from_bcs(sig.to_bcs()) == sig

    def test_auth_key(self, private_key):
        """Test the auth key is SHA3-256 of key followed by scheme 0."""
        public_key = private_key.public_key()
        expected = hashlib.sha3_256(public_key.to_bytes() + b"\x00").digest()
        assert public_key.auth_key().to_bytes() == expected
        assert public_key.account_address().to_bytes() == expected

    def test_private_key_repr_hides_secret(self, private_key):
        assert RFC8032_TEST1_SECRET not in repr(private_key)
        assert RFC8032_TEST1_SECRET not in str(private_key)


@pytest.mark.unit
class TestEd25519Verification:
    """Signature verification outcomes."""

    def test_hello_aptos(self, private_key):
        """Test a signature verifies only for the signed message."""
        message = b"Hello, Aptos!"
        sig = private_key.sign(message)
        public_key = private_key.public_key()
        assert public_key.verify_signature(message, sig)
        assert not public_key.verify_signature(b"Hello, Aptos?", sig)

    def test_raw_signature_bytes(self, private_key):
        """Test verification accepts the raw 64 bytes."""
        sig = private_key.sign(b"data")
        assert private_key.public_key().verify_signature(b"data", sig.to_bytes())

    def test_wrong_key(self, private_key, private_keys):
        sig = private_key.sign(b"data")
        assert not private_keys[0].public_key().verify_signature(b"data", sig)

    def test_malformed_signature_is_false(self, private_key):
        """Test a wrong-size or wrong-type signature verifies false instead of raising."""
        public_key = private_key.public_key()
        assert not public_key.verify_signature(b"data", b"\x00" * 10)
        assert not public_key.verify_signature(b"data", "signature")
