"""
Mnemonic seed and hardened path derivation tests.
"""

import pytest
from mnemonic import Mnemonic

from aptos_client.crypto.derivation import (
    derive_private_key,
    entropy_to_mnemonic,
    is_valid_hardened_path,
    mnemonic_to_seed,
)
from aptos_client.crypto.ed25519 import Ed25519PrivateKey
from aptos_client.runtime.errors import ErrorCode, MalformedInputError
from tests.conftest import TEST_MNEMONIC, TEST_PATH

EXPECTED_PRIVATE_KEY = "b769d8ddc5973c5c92b785e155243b94af32267284161fcd85b63a0a47384c8c"
EXPECTED_PUBLIC_KEY = "82b5212477e1ce276ea404f4d1143b88b0716a36faea88de942e2d816bbd5bb2"


@pytest.mark.unit
class TestHardenedPath:
    """Path validation."""

    @pytest.mark.parametrize("path", [
        "m/44'/637'/0'/0'/0'",
        "m/44'/637'/0'/0'/0",
        "m/44'/637'/12'/3'/456'",
    ])
    def test_valid(self, path):
        assert is_valid_hardened_path(path)

    @pytest.mark.parametrize("path", [
        "m/44'/60'/0'/0'/0'",
        "m/44'/637'/0/0'/0'",
        "m/44'/637'/0'/0'",
        "44'/637'/0'/0'/0'",
        "m/44'/637'/a'/0'/0'",
        "",
    ])
    def test_invalid(self, path):
        assert not is_valid_hardened_path(path)


@pytest.mark.unit
class TestDerivation:
    """Known-answer derivation."""

    def test_known_vector(self):
        """Test the derived key pair for a fixed mnemonic and path."""
        key = Ed25519PrivateKey.from_derivation_path(TEST_PATH, TEST_MNEMONIC)
        assert key.to_bytes().hex() == EXPECTED_PRIVATE_KEY
        assert key.public_key().to_bytes().hex() == EXPECTED_PUBLIC_KEY

    def test_unhardened_last_component(self):
        """Test a last component without apostrophe is still derived hardened."""
        assert derive_private_key("m/44'/637'/0'/0'/0", TEST_MNEMONIC).hex() == EXPECTED_PRIVATE_KEY

    def test_other_index_differs(self):
        other = derive_private_key("m/44'/637'/1'/0'/0'", TEST_MNEMONIC)
        assert other.hex() != EXPECTED_PRIVATE_KEY

    def test_invalid_path(self):
        """Test a non-Aptos path is rejected."""
        with pytest.raises(MalformedInputError) as exc_info:
            derive_private_key("m/44'/60'/0'/0'/0'", TEST_MNEMONIC)
        assert exc_info.value.code == ErrorCode.INVALID_DERIVATION_PATH

    def test_index_out_of_range(self):
        with pytest.raises(MalformedInputError):
            derive_private_key("m/44'/637'/2147483648'/0'/0'", TEST_MNEMONIC)

    def test_seed_normalization(self):
        """Test case and spacing do not change the seed."""
        seed = mnemonic_to_seed(TEST_MNEMONIC)
        assert len(seed) == 64
        assert mnemonic_to_seed("  " + TEST_MNEMONIC.upper().replace(" ", "   ") + " ") == seed

    def test_passphrase_changes_seed(self):
        assert mnemonic_to_seed(TEST_MNEMONIC, "secret") != mnemonic_to_seed(TEST_MNEMONIC)

    def test_seed_matches_bip39_reference(self):
        """Test the seed agrees with an independent BIP-39 implementation."""
        assert mnemonic_to_seed(TEST_MNEMONIC) == Mnemonic.to_seed(TEST_MNEMONIC)
        assert mnemonic_to_seed(TEST_MNEMONIC, "TREZOR") == Mnemonic.to_seed(TEST_MNEMONIC, "TREZOR")


@pytest.mark.unit
class TestEntropyToMnemonic:
    """Mnemonic phrases built from string entropy."""

    @pytest.mark.parametrize("entropy,expected", [
        (
            "9b4c9e83-a06e-4704-bc5f-b6a55d0dbb89",
            "defense balance boat index fatal book remain champion cushion city escape huge",
        ),
        (
            "c63839ab-c50d-4c30-a47a-01d9df5b6426",
            "glimpse ranch sock grid noodle rain remain grit corn cannon escape shop",
        ),
    ])
    def test_known_phrases(self, entropy, expected):
        """Test UUID strings map to fixed twelve-word phrases."""
        assert entropy_to_mnemonic(entropy) == expected

    def test_only_first_sixteen_bytes_used(self):
        base = "9b4c9e83-a06e-47"
        assert entropy_to_mnemonic(base + "xxxx") == entropy_to_mnemonic(base + "yyyy")

    def test_phrase_is_valid_bip39(self):
        phrase = entropy_to_mnemonic("c63839ab-c50d-4c30-a47a-01d9df5b6426")
        assert len(phrase.split()) == 12
        assert Mnemonic("english").check(phrase)

    def test_short_entropy_rejected(self):
        """Test strings shorter than 16 bytes are rejected."""
        with pytest.raises(MalformedInputError) as exc_info:
            entropy_to_mnemonic("too short")
        assert exc_info.value.code == ErrorCode.INVALID_LENGTH

    def test_phrase_derives_key(self):
        """Test a generated phrase feeds the derivation path."""
        phrase = entropy_to_mnemonic("46f6393c-51ce-40d7-9006-d01c59f4dd83"[:32])
        assert len(derive_private_key(TEST_PATH, phrase)) == 32
