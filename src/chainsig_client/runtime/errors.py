"""
Chain Signatures Error Model

This module provides the error handling framework for the Chain Signatures
Python SDK. Errors are split by *when* they happen relative to a signing
submission, since a submitted sign call is billed on the remote network and
is not guaranteed to be idempotent.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Chain Signatures SDK error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Key errors (100-199)
    MALFORMED_KEY = 100
    NO_SECRET_KEY = 101
    INVALID_SCALAR = 102

    # Request validation errors (200-299)
    VALIDATION_FAILED = 200

    # Post-submission errors (300-399)
    MALFORMED_RESPONSE = 300
    CONTRACT_REJECTED = 301

    # Transport errors (400-499)
    TRANSPORT_FAILURE = 400
    TIMEOUT = 401


class ChainSignaturesError(Exception):
    """
    Base class for all Chain Signatures errors.

    Provides structured error information and a flag telling whether the
    failure happened after network cost was already incurred.
    """

    #: True when the remote call was certainly executed, False when it
    #: certainly was not, None when it cannot be known from here.
    cost_incurred: Optional[bool] = False

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Chain Signatures error.

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
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class MalformedKeyError(ChainSignaturesError):
    """Bad wire format, length or curve point while parsing a key."""

    def __init__(self, message: str = "Malformed key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MALFORMED_KEY, details, cause)


class NoSecretKeyError(ChainSignaturesError):
    """Secret material requested from a public-only key."""

    def __init__(self, message: str = "No secret key available - key was created from public key only",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NO_SECRET_KEY, details, cause)


class DerivationError(ChainSignaturesError):
    """Derivation produced an invalid scalar or the point at infinity."""

    def __init__(self, message: str = "Derived value is not a valid scalar",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_SCALAR, details, cause)


class ValidationError(ChainSignaturesError):
    """Sign request rejected locally, before anything was submitted."""

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED, details, cause)
        self.field = field


class MalformedResponseError(ChainSignaturesError):
    """Unexpected or invalid payload returned by a submitted call."""

    cost_incurred = True

    def __init__(self, message: str = "Malformed response",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MALFORMED_RESPONSE, details, cause)


class ContractRejectedError(ChainSignaturesError):
    """The MPC contract executed the call and failed it."""

    cost_incurred = True

    def __init__(self, message: str = "Contract rejected the call",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CONTRACT_REJECTED, details, cause)


class TransportError(ChainSignaturesError):
    """Network, HTTP or RPC failure, passed through verbatim."""

    cost_incurred = None

    def __init__(self, message: str, code: ErrorCode = ErrorCode.TRANSPORT_FAILURE,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class TransportTimeoutError(TransportError):
    """The transport gave up waiting for the remote side."""

    def __init__(self, message: str = "Request timed out",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.TIMEOUT, details, cause)


def error_from_rpc(error_data: Any) -> ChainSignaturesError:
    """
    Create an appropriate error from a NEAR JSON-RPC error object.

    NEAR reports structured errors as
    ``{"name": ..., "cause": {"name": ..., "info": ...}, "code": ..., "message": ..., "data": ...}``.

    Args:
        error_data: The ``error`` member of a JSON-RPC response

    Returns:
        Appropriate error instance (the original payload is kept in ``details``)
    """
    if isinstance(error_data, str):
        return TransportError(error_data, details={"error": error_data})

    if not isinstance(error_data, dict):
        return TransportError(str(error_data), details={"error": error_data})

    cause = error_data.get("cause") or {}
    cause_name = cause.get("name") if isinstance(cause, dict) else None
    message = error_data.get("message", "Unknown error")
    data = error_data.get("data")
    if data and isinstance(data, str):
        message = f"{message}: {data}"
    elif cause_name:
        message = f"{message}: {cause_name}"

    if cause_name == "TIMEOUT_ERROR":
        return TransportTimeoutError(message, details=error_data)
    if cause_name in ("CONTRACT_EXECUTION_ERROR", "NO_CONTRACT_CODE"):
        return ContractRejectedError(message, details=error_data)
    return TransportError(message, details=error_data)


class ErrorHandler:
    """
    Utility class for categorizing errors before deciding on resubmission.
    """

    @staticmethod
    def is_pre_submission(error: Exception) -> bool:
        """
        Check if an error was raised before anything reached the network.

        Args:
            error: Exception to check

        Returns:
            True if the failure is local and cost-free
        """
        return isinstance(error, ChainSignaturesError) and error.cost_incurred is False

    @staticmethod
    def may_have_incurred_cost(error: Exception) -> bool:
        """
        Check if a signing call may already have been executed and billed.

        Resubmitting after such an error can produce a second, independent
        signature.

        Args:
            error: Exception to check

        Returns:
            True unless the error is known to be pre-submission
        """
        if isinstance(error, ChainSignaturesError):
            return error.cost_incurred is not False
        return True


__all__ = [
    "ErrorCode",
    "ChainSignaturesError",
    "MalformedKeyError",
    "NoSecretKeyError",
    "DerivationError",
    "ValidationError",
    "MalformedResponseError",
    "ContractRejectedError",
    "TransportError",
    "TransportTimeoutError",
    "error_from_rpc",
    "ErrorHandler",
]
