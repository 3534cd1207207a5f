"""
Base signer interface.

Defines what the transport needs from an account key to authorize the
carrier transaction of a sign request.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..runtime.errors import ChainSignaturesError


class SignerError(ChainSignaturesError):
    """Base exception for signer operations."""
    pass


class Signer(ABC):
    """
    Base signer interface.

    Implementations hold a private key and produce raw signatures.
    """

    @abstractmethod
    def sign(self, data: bytes) -> bytes:
        """
        Sign data.

        Args:
            data: Bytes to sign (for NEAR, the 32-byte transaction hash)

        Returns:
            Signature bytes

        Raises:
            SignerError: If signing fails
        """
        pass

    @abstractmethod
    def verify(self, signature: bytes, data: bytes) -> bool:
        """
        Verify a signature against data.

        Args:
            signature: Signature bytes to verify
            data: Bytes that were signed

        Returns:
            True if signature is valid
        """
        pass

    @abstractmethod
    def get_public_key(self) -> bytes:
        """
        Get the public key bytes.

        Returns:
            Raw public key
        """
        pass


__all__ = ["SignerError", "Signer"]
