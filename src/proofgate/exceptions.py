"""Typed exceptions for the ProofGate SDK."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import ValidateResponse


class ErrorCode(str, Enum):
    """Machine-readable code carried by every ProofGateError."""

    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


class ProofGateError(Exception):
    """Base exception for the ProofGate SDK.

    Attributes:
        message: Human-readable description
        code: One of ErrorCode
        status_code: HTTP status, for API errors
        validation_result: The rejected ValidateResponse, for VALIDATION_FAILED
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        status_code: int | None = None,
        validation_result: ValidateResponse | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)
        self.status_code = status_code
        self.validation_result = validation_result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class ConfigurationError(ProofGateError):
    """API key missing or malformed. Raised at client construction."""


class ValidationFailedError(ProofGateError):
    """The service judged the transaction unsafe. Do not execute it."""

    def __init__(self, result: ValidateResponse):
        super().__init__(
            result.reason,
            ErrorCode.VALIDATION_FAILED,
            validation_result=result,
        )


class APIError(ProofGateError):
    """The service answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message, ErrorCode.API_ERROR, status_code=status_code)


class NetworkError(ProofGateError):
    """Transport-level failure before a response was received."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.NETWORK_ERROR)


class RequestTimeoutError(ProofGateError):
    """No response within the configured timeout."""

    def __init__(self, message: str = "Request timeout"):
        super().__init__(message, ErrorCode.TIMEOUT)


class MalformedResponseError(ProofGateError):
    """The service returned a body that does not match the expected shape."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, ErrorCode.MALFORMED_RESPONSE, status_code=status_code)
