"""
NEAR account signer.

Signs the carrier transaction that submits a sign request with the NEAR
account's Ed25519 full-access or function-call key.
"""

from __future__ import annotations
import logging

from ..codec.transaction import Transaction, encode_signed_transaction
from ..crypto.ed25519 import Ed25519PrivateKey
from .signer import Signer, SignerError

logger = logging.getLogger(__name__)


class NearAccountSigner(Signer):
    """Ed25519 signer bound to a NEAR account id."""

    def __init__(self, account_id: str, private_key: Ed25519PrivateKey):
        """
        Initialize NEAR account signer.

        Args:
            account_id: NEAR account that signs and pays for transactions
            private_key: Ed25519 key registered as an access key of the account
        """
        if not account_id:
            raise SignerError("account_id must not be empty")
        self.account_id = account_id
        self.private_key = private_key
        self.public_key = private_key.public_key()

    @classmethod
    def from_near_secret(cls, account_id: str, secret_key: str) -> NearAccountSigner:
        """
        Create from a NEAR credentials secret (``"ed25519:base58..."``).

        Raises:
            MalformedKeyError: If the secret cannot be parsed
        """
        return cls(account_id, Ed25519PrivateKey.from_near(secret_key))

    @property
    def public_key_near(self) -> str:
        """Access key in NEAR wire format, as used by ``view_access_key``."""
        return self.public_key.near

    def get_public_key(self) -> bytes:
        return self.public_key.to_bytes()

    def sign(self, data: bytes) -> bytes:
        return self.private_key.sign(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        return self.public_key.verify(signature, data)

    def sign_transaction(self, transaction: Transaction) -> bytes:
        """
        Sign a transaction and return the Borsh-encoded ``SignedTransaction``.

        Args:
            transaction: Transaction whose signer is this account

        Returns:
            Signed transaction bytes

        Raises:
            SignerError: If the transaction names another signer or key
        """
        if transaction.signer_id != self.account_id:
            raise SignerError(
                f"Transaction signer {transaction.signer_id!r} does not match {self.account_id!r}"
            )
        if transaction.public_key != self.get_public_key():
            raise SignerError("Transaction public key does not match signer key")

        tx_hash = transaction.hash()
        logger.debug(f"Signing transaction {transaction.hash_base58()} for {self.account_id}")
        return encode_signed_transaction(transaction, self.sign(tx_hash))

    def __repr__(self) -> str:
        return f"NearAccountSigner({self.account_id!r}, {self.public_key_near})"


__all__ = ["NearAccountSigner"]
