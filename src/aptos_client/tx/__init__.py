"""
Transaction envelope: raw transactions, authenticators and signed transactions.
"""

from .authenticator import (
    AccountAuthenticator,
    AccountAuthenticatorVariant,
    Ed25519Authenticator,
    FeePayerAuthenticator,
    MultiEd25519Authenticator,
    MultiKeyAuthenticator,
    SingleSenderAuthenticator,
    TransactionAuthenticator,
    TransactionAuthenticatorEd25519,
    TransactionAuthenticatorMultiEd25519,
    TransactionAuthenticatorVariant,
)
from .raw_transaction import (
    DEFAULT_EXPIRATION_TTL,
    DEFAULT_GAS_UNIT_PRICE,
    DEFAULT_MAX_GAS_AMOUNT,
    FeePayerRawTransaction,
    RawTransaction,
)
from .signed_transaction import SIGNED_TRANSACTION_CONTENT_TYPE, SignedTransaction

__all__ = [
    "AccountAuthenticator",
    "AccountAuthenticatorVariant",
    "DEFAULT_EXPIRATION_TTL",
    "DEFAULT_GAS_UNIT_PRICE",
    "DEFAULT_MAX_GAS_AMOUNT",
    "Ed25519Authenticator",
    "FeePayerAuthenticator",
    "FeePayerRawTransaction",
    "MultiEd25519Authenticator",
    "MultiKeyAuthenticator",
    "RawTransaction",
    "SIGNED_TRANSACTION_CONTENT_TYPE",
    "SignedTransaction",
    "SingleSenderAuthenticator",
    "TransactionAuthenticator",
    "TransactionAuthenticatorEd25519",
    "TransactionAuthenticatorMultiEd25519",
    "TransactionAuthenticatorVariant",
]
