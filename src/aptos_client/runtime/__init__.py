"""Runtime helpers for the Aptos client"""

from .errors import (
    ErrorCode,
    AptosError,
    ValidationError,
    MalformedInputError,
    EncodingError,
    DecodeTruncationError,
    DecodeOverflowError,
    UnsupportedVariantError,
    CapabilityGapError,
    NetworkError,
    TransactionTimeoutError,
    TransactionFailedError,
    ApiError,
)

__all__ = [
    "ErrorCode",
    "AptosError",
    "ValidationError",
    "MalformedInputError",
    "EncodingError",
    "DecodeTruncationError",
    "DecodeOverflowError",
    "UnsupportedVariantError",
    "CapabilityGapError",
    "NetworkError",
    "TransactionTimeoutError",
    "TransactionFailedError",
    "ApiError",
]
