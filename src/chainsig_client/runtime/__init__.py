"""Runtime helpers for the Chain Signatures Python SDK"""

from .errors import (
    ErrorCode,
    ChainSignaturesError,
    MalformedKeyError,
    NoSecretKeyError,
    DerivationError,
    ValidationError,
    MalformedResponseError,
    ContractRejectedError,
    TransportError,
    TransportTimeoutError,
    ErrorHandler,
)
from .encoding import encode_json, decode_base64_json

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
    "ErrorHandler",
    "encode_json",
    "decode_base64_json",
]
