"""
Error model tests.
"""

import pytest

from aptos_client.runtime.errors import (
    ApiError,
    AptosError,
    DecodeTruncationError,
    EncodingError,
    ErrorCode,
    MalformedInputError,
    NetworkError,
    TransactionFailedError,
    TransactionTimeoutError,
    ValidationError,
    error_from_response,
)


@pytest.mark.unit
class TestAptosError:
    def test_str(self):
        cause = ValueError("boom")
        error = AptosError("Something failed", ErrorCode.UNKNOWN, {"key": 1}, cause)
        assert str(error) == "[UNKNOWN] Something failed | Details: {'key': 1} | Caused by: boom"

    def test_dict_round_trip(self):
        error = MalformedInputError("Bad key", ErrorCode.INVALID_LENGTH, {"length": 31})
        data = error.to_dict()
        assert data == {"code": 501, "message": "Bad key", "details": {"length": 31}}
        restored = AptosError.from_dict(data)
        assert restored.code == ErrorCode.INVALID_LENGTH
        assert restored.details == {"length": 31}

    def test_unknown_code(self):
        assert AptosError.from_dict({"code": 99999, "message": "x"}).code == ErrorCode.UNKNOWN

    def test_hierarchy(self):
        assert issubclass(MalformedInputError, ValidationError)
        assert issubclass(DecodeTruncationError, EncodingError)
        assert DecodeTruncationError().code == ErrorCode.DECODE_TRUNCATED
        assert NetworkError("down").code == ErrorCode.NETWORK_ERROR

    def test_transaction_timeout(self):
        """Test a wait that ran out is a network error with the timeout code."""
        error = TransactionTimeoutError("still pending", {"hash": "0xabc"})
        assert isinstance(error, NetworkError)
        assert error.code == ErrorCode.TIMEOUT
        assert error.to_dict()["code"] == 202

    def test_transaction_failed(self):
        """Test a failed execution keeps the VM status."""
        error = TransactionFailedError("failed", vm_status="Move abort")
        assert error.code == ErrorCode.TRANSACTION_FAILED
        assert error.vm_status == "Move abort"
        assert not isinstance(error, NetworkError)


@pytest.mark.unit
class TestErrorFromResponse:
    def test_json_body(self):
        body = {"message": "Invalid transaction", "error_code": "vm_error", "vm_error_code": 1}
        error = error_from_response(400, body)
        assert isinstance(error, ApiError)
        assert error.message == "Invalid transaction"
        assert error.details == {"status_code": 400, "error_code": "vm_error", "vm_error_code": 1}

    def test_json_body_without_message(self):
        assert error_from_response(500, {}).message == "HTTP 500"

    def test_text_body(self):
        error = error_from_response(503, "Service Unavailable")
        assert error.message == "HTTP 503: Service Unavailable"
        assert error.status_code == 503
