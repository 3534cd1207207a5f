"""
Hash utilities for Chain Signatures.

SHA3-256 drives the derivation tweak, Keccak-256 and HASH160 are used for
address rendering, SHA-256 hashes NEAR carrier transactions.
"""

import hashlib

from Crypto.Hash import RIPEMD160, keccak


def sha256(data: bytes) -> bytes:
    """
    Calculate SHA-256 hash.

    Args:
        data: Data to hash

    Returns:
        32-byte digest
    """
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError("data must be bytes")
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """
    Calculate the FIPS-202 SHA3-256 hash.

    Note: This is different from Keccak-256 (different padding).

    Args:
        data: Data to hash

    Returns:
        32-byte digest
    """
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError("data must be bytes")
    return hashlib.sha3_256(data).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum's hash function).

    Args:
        data: Input data to hash

    Returns:
        32-byte Keccak-256 hash
    """
    return keccak.new(digest_bits=256).update(data).digest()


def hash160(data: bytes) -> bytes:
    """
    Calculate Bitcoin HASH160: RIPEMD160(SHA256(data)).

    Args:
        data: Data to hash

    Returns:
        20-byte digest
    """
    return RIPEMD160.new(sha256(data)).digest()


__all__ = [
    "sha256",
    "sha3_256",
    "keccak256",
    "hash160",
]
