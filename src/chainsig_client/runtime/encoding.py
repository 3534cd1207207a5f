"""
Encoding helpers shared by the MPC protocol and the NEAR transport.

NEAR function-call arguments travel as base64 of compact JSON, and call
results come back either as base64 (``SuccessValue``) or as a list of byte
values (view calls).
"""

from __future__ import annotations
import base64
import binascii
import json
import re
from typing import Any, Iterable, Union

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def strip_0x(value: str) -> str:
    """Drop a leading ``0x``/``0X`` prefix if present."""
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def is_hex(value: str) -> bool:
    """
    Check that a string is non-empty, even-length hexadecimal.

    Args:
        value: String to check

    Returns:
        True if the string decodes as hex
    """
    return bool(value) and len(value) % 2 == 0 and _HEX_RE.fullmatch(value) is not None


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string, accepting an optional ``0x`` prefix."""
    return bytes.fromhex(strip_0x(value))


def encode_json(value: Any) -> bytes:
    """Encode a value as compact UTF-8 JSON bytes."""
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def encode_args_base64(args: Any) -> str:
    """Encode function-call arguments the way NEAR RPC expects them."""
    return base64.b64encode(encode_json(args)).decode("ascii")


def decode_base64_json(value: str) -> Any:
    """
    Decode a base64 string holding UTF-8 JSON.

    Raises:
        ValueError: If any of the three decoding steps fails
    """
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"Invalid base64: {e}") from e
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Invalid UTF-8: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e


def decode_byte_list_json(value: Union[Iterable[int], bytes]) -> Any:
    """Decode a view-call result (a list of byte values) as JSON."""
    return json.loads(bytes(value).decode("utf-8"))


__all__ = [
    "strip_0x",
    "is_hex",
    "hex_to_bytes",
    "encode_json",
    "encode_args_base64",
    "decode_base64_json",
    "decode_byte_list_json",
]
