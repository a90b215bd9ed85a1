"""
Accounts: signing identities and the addresses they control.
"""

from .base import Account, SignableTransaction, SigningScheme
from .ed25519 import Ed25519Account, SingleKeyAccount
from .multi_ed25519 import MultiEd25519Account
from .multi_key import MultiKeyAccount

__all__ = [
    "Account",
    "Ed25519Account",
    "MultiEd25519Account",
    "MultiKeyAccount",
    "SignableTransaction",
    "SigningScheme",
    "SingleKeyAccount",
]
