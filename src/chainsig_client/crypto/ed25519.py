"""
Ed25519 keys for Chain Signatures.

Two roles: Ed25519 public keys returned by the MPC contract for EdDSA
domains (used to verify EdDSA signatures), and the NEAR account key that
signs the carrier transaction submitting a sign request.

NEAR wire formats:
- public key: ``"ed25519:" + base58(32-byte key)``
- secret key: ``"ed25519:" + base58(32-byte seed || 32-byte public key)``
"""

from __future__ import annotations
import hashlib
from typing import Union

import base58
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..runtime.errors import MalformedKeyError

NEAR_ED25519_PREFIX = "ed25519:"
ED25519_KEY_TYPE = 0


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Ed25519 public key

        Raises:
            MalformedKeyError: If key is invalid
        """
        if len(public_key_bytes) != 32:
            raise MalformedKeyError(f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}")

        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise MalformedKeyError(f"Invalid Ed25519 public key: {e}", cause=e)

    @classmethod
    def from_near(cls, near_public_key: str) -> Ed25519PublicKey:
        """Parse ``"ed25519:" + base58(32 bytes)``."""
        if not isinstance(near_public_key, str) or not near_public_key.startswith(NEAR_ED25519_PREFIX):
            raise MalformedKeyError(f"Must start with '{NEAR_ED25519_PREFIX}'")
        try:
            decoded = base58.b58decode(near_public_key[len(NEAR_ED25519_PREFIX):])
        except ValueError as e:
            raise MalformedKeyError(f"Invalid base58 payload: {e}", cause=e)
        return cls(decoded)

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PublicKey:
        """Create public key from hex string."""
        try:
            key_bytes = bytes.fromhex(hex_string)
        except ValueError as e:
            raise MalformedKeyError(f"Invalid hex string: {e}", cause=e)
        return cls(key_bytes)

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def to_hex(self) -> str:
        """Get the public key as hex string."""
        return self._key_bytes.hex()

    @property
    def near(self) -> str:
        """NEAR wire format."""
        return NEAR_ED25519_PREFIX + base58.b58encode(self._key_bytes).decode("ascii")

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != 64:
            return False
        try:
            self._crypto_key.verify(bytes(signature), message)
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        """Check equality with another public key."""
        if not isinstance(other, Ed25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return f"Ed25519PublicKey({self.near})"

    def __repr__(self) -> str:
        return f"Ed25519PublicKey.from_near('{self.near}')"


class Ed25519PrivateKey:
    """
    Ed25519 private key.

    Provides signing operations.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize from 32-byte private key seed.

        Args:
            private_key_bytes: 32-byte Ed25519 private key seed

        Raises:
            MalformedKeyError: If key is invalid
        """
        if len(private_key_bytes) != 32:
            raise MalformedKeyError(f"Ed25519 private key must be 32 bytes, got {len(private_key_bytes)}")

        self._key_bytes = bytes(private_key_bytes)
        self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._key_bytes)
        self._public_key = Ed25519PublicKey(
            self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw
            )
        )

    @classmethod
    def generate(cls) -> Ed25519PrivateKey:
        """Generate a new random Ed25519 private key."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        private_bytes = crypto_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        return cls(private_bytes)

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> Ed25519PrivateKey:
        """
        Derive private key from seed using SHA-256.

        For deterministic test keys.
        """
        if isinstance(seed, str):
            seed = seed.encode('utf-8')
        return cls(hashlib.sha256(seed).digest())

    @classmethod
    def from_near(cls, near_secret_key: str) -> Ed25519PrivateKey:
        """
        Parse a NEAR credentials secret ``"ed25519:" + base58(seed || pub)``.

        Raises:
            MalformedKeyError: On wrong prefix, length or mismatching public half
        """
        if not isinstance(near_secret_key, str) or not near_secret_key.startswith(NEAR_ED25519_PREFIX):
            raise MalformedKeyError(f"Must start with '{NEAR_ED25519_PREFIX}'")
        try:
            decoded = base58.b58decode(near_secret_key[len(NEAR_ED25519_PREFIX):])
        except ValueError as e:
            raise MalformedKeyError(f"Invalid base58 payload: {e}", cause=e)

        if len(decoded) == 32:
            return cls(decoded)
        if len(decoded) != 64:
            raise MalformedKeyError(f"Ed25519 secret key must be 32 or 64 bytes, got {len(decoded)}")

        key = cls(decoded[:32])
        if key.public_key().to_bytes() != decoded[32:]:
            raise MalformedKeyError("Ed25519 secret key does not match its embedded public key")
        return key

    def to_bytes(self) -> bytes:
        """Get the 32-byte private key seed."""
        return self._key_bytes

    def public_key(self) -> Ed25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        return self._crypto_key.sign(message)

    def __repr__(self) -> str:
        return f"Ed25519PrivateKey(public={self._public_key.near})"


__all__ = [
    "NEAR_ED25519_PREFIX",
    "ED25519_KEY_TYPE",
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
]
