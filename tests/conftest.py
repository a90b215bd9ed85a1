"""
Shared fixtures: deterministic keys, accounts and transactions.
"""
import pytest

from aptos_client.accounts import Ed25519Account
from aptos_client.core.address import AccountAddress
from aptos_client.crypto.ed25519 import Ed25519PrivateKey
from aptos_client.crypto.keyless import KeylessPublicKey
from aptos_client.tx.raw_transaction import RawTransaction
from aptos_client.types.arguments import AddressArgument, U64Argument
from aptos_client.types.payload import EntryFunctionPayload

# RFC 8032 section 7.1, TEST 1 and TEST 2
RFC8032_TEST1_SECRET = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_TEST1_PUBLIC = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC8032_TEST1_SIGNATURE = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555f"
    "b8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)
RFC8032_TEST2_SECRET = "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb"
RFC8032_TEST2_PUBLIC = "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c"
RFC8032_TEST2_SIGNATURE = (
    "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da08"
    "5ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00"
)

KEYLESS_PUBLIC_KEY_HEX = (
    "1b68747470733a2f2f6163636f756e74732e676f6f676c652e636f6d20"
    "49b12b386092b5efeca7f8c0ecf5dd0607913dbd7f921ce45d3d103689c7a921"
)

TEST_MNEMONIC = "defense balance boat index fatal book remain champion cushion city escape huge"
TEST_PATH = "m/44'/637'/0'/0'/0'"

EXPIRATION = 1_700_000_000


@pytest.fixture
def private_key():
    """RFC 8032 TEST 1 key."""
    return Ed25519PrivateKey.from_hex(RFC8032_TEST1_SECRET)


@pytest.fixture
def private_keys():
    """Three deterministic Ed25519 keys."""
    return [Ed25519PrivateKey.from_bytes(bytes([i + 1]) * 32) for i in range(3)]


@pytest.fixture
def public_keys(private_keys):
    return [key.public_key() for key in private_keys]


@pytest.fixture
def keyless_key():
    return KeylessPublicKey.from_hex(KEYLESS_PUBLIC_KEY_HEX)


@pytest.fixture
def account(private_key):
    return Ed25519Account(private_key)


@pytest.fixture
def recipient():
    return AccountAddress.from_str_relaxed("0xb0b")


@pytest.fixture
def transfer_payload(recipient):
    return EntryFunctionPayload.natural(
        "0x1::aptos_account",
        "transfer",
        [],
        [AddressArgument(recipient), U64Argument(1_000)],
    )


@pytest.fixture
def make_raw_transaction(transfer_payload):
    """Build a RawTransaction with a fixed expiration for a given sender."""
    def _make(sender: AccountAddress, sequence_number: int = 0, chain_id: int = 4) -> RawTransaction:
        return RawTransaction(
            sender=sender,
            sequence_number=sequence_number,
            payload=transfer_payload,
            max_gas_amount=1_000_000,
            gas_unit_price=100,
            expiration_timestamps_secs=EXPIRATION,
            chain_id=chain_id,
        )
    return _make
