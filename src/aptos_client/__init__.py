"""
Aptos Python Client

Builds, signs and submits Aptos transactions: BCS encoding, Ed25519,
MultiEd25519 and MultiKey accounts, authenticators, and a thin REST client
for fullnode submission.
"""

# Binary codec and errors
from .codec import *
from .runtime.errors import *

# Keys, addresses and accounts
from .core import *
from .crypto import *
from .accounts import *

# Transaction model
from .types import *
from .tx import *

# Transport
from .config import ClientConfig, Network
from .client import RestClient

__version__ = "0.1.0"
__all__ = [
    # Codec
    "BinaryReader",
    "BinaryWriter",
    "BcsSerializable",
    "sha3_256",
    # Errors
    "AptosError",
    "ErrorCode",
    "MalformedInputError",
    "DecodeTruncationError",
    "DecodeOverflowError",
    "UnsupportedVariantError",
    "CapabilityGapError",
    "NetworkError",
    "TransactionTimeoutError",
    "TransactionFailedError",
    "ApiError",
    # Keys and addresses
    "AccountAddress",
    "AuthenticationKey",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Ed25519Signature",
    "MultiEd25519PublicKey",
    "MultiEd25519Signature",
    "MultiKeyPublicKey",
    "MultiKeySignature",
    "AnyPublicKey",
    "AnySignature",
    "KeylessPublicKey",
    "Bitmap",
    # Accounts
    "Account",
    "Ed25519Account",
    "SingleKeyAccount",
    "MultiEd25519Account",
    "MultiKeyAccount",
    "SigningScheme",
    # Transactions
    "EntryFunctionPayload",
    "ScriptPayload",
    "TransactionInnerPayloadV1",
    "TypeTag",
    "StructTag",
    "RawTransaction",
    "FeePayerRawTransaction",
    "SignedTransaction",
    "AccountAuthenticator",
    "TransactionAuthenticator",
    # Transport
    "ClientConfig",
    "Network",
    "RestClient",
    "__version__",
]
