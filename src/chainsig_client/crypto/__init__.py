"""
Cryptographic primitives for Chain Signatures.

Provides the secp256k1 point and signature types used by key derivation and
ECDSA responses, Ed25519 keys, and hash utilities.
"""

from .secp256k1 import (
    CURVE_ORDER,
    CurvePoint,
    Secp256k1Signature,
    sign_digest,
    normalize_secret,
)
from .ed25519 import Ed25519PublicKey, Ed25519PrivateKey
from .hash_utils import sha256, sha3_256, keccak256, hash160

__all__ = [
    "CURVE_ORDER",
    "CurvePoint",
    "Secp256k1Signature",
    "sign_digest",
    "normalize_secret",
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "sha256",
    "sha3_256",
    "keccak256",
    "hash160",
]
