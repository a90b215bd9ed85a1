"""Address and authentication key primitives"""

from .address import (
    ADDRESS_LENGTH,
    AUTH_KEY_LENGTH,
    AccountAddress,
    AuthenticationKey,
    AuthKeyScheme,
)

__all__ = [
    "ADDRESS_LENGTH",
    "AUTH_KEY_LENGTH",
    "AccountAddress",
    "AuthenticationKey",
    "AuthKeyScheme",
]
