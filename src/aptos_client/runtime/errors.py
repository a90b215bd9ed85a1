"""
Aptos Client Error Model

Structured error types for the codec, key, account and transaction layers,
plus the transport errors raised by the REST client. Every error carries a
numeric code, an optional details mapping and an optional cause.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes grouped by layer."""

    # General errors (1-99)
    UNKNOWN = 1

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    DECODE_TRUNCATED = 101
    DECODE_OVERFLOW = 102
    UNSUPPORTED_VARIANT = 103
    TRAILING_BYTES = 104
    NON_CANONICAL = 105

    # Network errors (200-299)
    NETWORK_ERROR = 200
    TIMEOUT = 202
    API_ERROR = 203

    # Transaction errors (400-499)
    TRANSACTION_FAILED = 401

    # Validation errors (500-599)
    MALFORMED_INPUT = 500
    INVALID_LENGTH = 501
    INVALID_THRESHOLD = 502
    INVALID_BITMAP = 503
    SIGNER_NOT_FOUND = 504
    INVALID_DERIVATION_PATH = 505

    # Capability errors (600-699)
    CAPABILITY_GAP = 600


class AptosError(Exception):
    """
    Base class for all client errors.

    None of these errors are recovered or retried inside the library; they
    are reported to the caller at the point of failure.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AptosError':
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class ValidationError(AptosError):
    """Construction-time validation errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.MALFORMED_INPUT,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MalformedInputError(ValidationError):
    """
    Input rejected at construction.

    Wrong fixed length, threshold outside [1, N], empty key or signer list,
    signer index out of range, or a signer whose key is absent from the set.
    """


class EncodingError(AptosError):
    """Binary encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class DecodeTruncationError(EncodingError):
    """Fewer bytes remain than a field declares."""

    def __init__(self, message: str = "Unexpected end of input",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_TRUNCATED, details, cause)


class DecodeOverflowError(EncodingError):
    """Integer does not fit its target width."""

    def __init__(self, message: str = "Integer overflow",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_OVERFLOW, details, cause)


class UnsupportedVariantError(EncodingError):
    """Tag outside the closed variant set."""

    def __init__(self, message: str = "Unsupported variant",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_VARIANT, details, cause)


class CapabilityGapError(AptosError):
    """Operation is declared for the type but has no meaning for this variant."""

    def __init__(self, message: str = "Operation not supported for this variant",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CAPABILITY_GAP, details, cause)


class NetworkError(AptosError):
    """Network-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class TransactionTimeoutError(NetworkError):
    """A submitted transaction was still pending when the wait ran out."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class TransactionFailedError(AptosError):
    """A committed transaction was not executed successfully."""

    def __init__(self, message: str, vm_status: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.TRANSACTION_FAILED, details, cause)
        self.vm_status = vm_status


class ApiError(AptosError):
    """Non-success response from a fullnode."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None,
                 cause: Optional[Exception] = None):
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, ErrorCode.API_ERROR, details, cause)
        self.status_code = status_code
        self.body = body


def error_from_response(status_code: int, body: Any) -> ApiError:
    """
    Build an ApiError from a fullnode error body.

    Fullnode errors look like ``{"message": ..., "error_code": ..., "vm_error_code": ...}``.

    Args:
        status_code: HTTP status code
        body: Decoded JSON body, or raw text when the body was not JSON

    Returns:
        ApiError describing the failure
    """
    if isinstance(body, dict):
        message = body.get("message") or f"HTTP {status_code}"
        error = ApiError(message, status_code, body)
        if "error_code" in body:
            error.details["error_code"] = body["error_code"]
        if body.get("vm_error_code") is not None:
            error.details["vm_error_code"] = body["vm_error_code"]
        return error
    return ApiError(f"HTTP {status_code}: {body}", status_code, body)


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
    "error_from_response",
]
