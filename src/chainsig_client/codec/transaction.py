"""
NEAR carrier transaction codec.

Encodes the single-action ``FunctionCall`` transaction that submits a sign
request to the MPC contract, computes its hash and attaches the Ed25519
signature. Field order follows NEAR's Borsh schema:

    Transaction { signer_id, public_key, nonce, receiver_id, block_hash, actions }
    SignedTransaction { transaction, signature }
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

import base58

from ..crypto.ed25519 import ED25519_KEY_TYPE
from ..crypto.hash_utils import sha256
from .writer import BorshWriter

FUNCTION_CALL_ACTION = 2
BLOCK_HASH_BYTES = 32


@dataclass(frozen=True)
class FunctionCallAction:
    """``Action::FunctionCall``"""

    method_name: str
    args: bytes
    gas: int
    deposit: int

    def encode(self, writer: BorshWriter) -> None:
        writer.u8(FUNCTION_CALL_ACTION)
        writer.string(self.method_name)
        writer.vec_bytes(self.args)
        writer.u64(self.gas)
        writer.u128(self.deposit)


@dataclass(frozen=True)
class Transaction:
    """
    Unsigned NEAR transaction.

    ``public_key`` is the raw 32-byte Ed25519 key of the signer account's
    access key; ``block_hash`` is a recent block hash, decoded from base58.
    """

    signer_id: str
    public_key: bytes
    nonce: int
    receiver_id: str
    block_hash: bytes
    actions: List[FunctionCallAction] = field(default_factory=list)

    @classmethod
    def function_call(cls, signer_id: str, public_key: bytes, nonce: int, receiver_id: str,
                      block_hash: str, method_name: str, args: bytes,
                      gas: int, deposit: int) -> Transaction:
        """
        Build a single-action function-call transaction.

        Args:
            signer_id: Account paying for and signing the transaction
            public_key: 32-byte Ed25519 public key of the access key
            nonce: Access-key nonce (previous nonce + 1)
            receiver_id: Contract account
            block_hash: Base58 recent block hash
            method_name: Contract method
            args: Serialized arguments (JSON bytes)
            gas: Prepaid gas
            deposit: Attached deposit in yoctoNEAR

        Returns:
            Transaction ready for signing
        """
        return cls(
            signer_id=signer_id,
            public_key=bytes(public_key),
            nonce=nonce,
            receiver_id=receiver_id,
            block_hash=base58.b58decode(block_hash),
            actions=[FunctionCallAction(method_name, bytes(args), gas, deposit)],
        )

    def encode(self) -> bytes:
        """Borsh-encode the transaction."""
        if len(self.public_key) != 32:
            raise ValueError(f"Ed25519 public key must be 32 bytes, got {len(self.public_key)}")

        writer = BorshWriter()
        writer.string(self.signer_id)
        writer.u8(ED25519_KEY_TYPE)
        writer.fixed_bytes(self.public_key, 32)
        writer.u64(self.nonce)
        writer.string(self.receiver_id)
        writer.fixed_bytes(self.block_hash, BLOCK_HASH_BYTES)
        writer.u32(len(self.actions))
        for action in self.actions:
            action.encode(writer)
        return writer.to_bytes()

    def hash(self) -> bytes:
        """SHA-256 of the encoded transaction; this is what gets signed."""
        return sha256(self.encode())

    def hash_base58(self) -> str:
        """Transaction hash as NEAR displays it."""
        return base58.b58encode(self.hash()).decode("ascii")


def encode_signed_transaction(transaction: Transaction, signature: bytes) -> bytes:
    """
    Borsh-encode a ``SignedTransaction``.

    Args:
        transaction: The signed transaction
        signature: 64-byte Ed25519 signature over ``transaction.hash()``

    Returns:
        Bytes ready for ``send_tx``
    """
    if len(signature) != 64:
        raise ValueError(f"Ed25519 signature must be 64 bytes, got {len(signature)}")
    writer = BorshWriter()
    writer.u8(ED25519_KEY_TYPE)
    writer.fixed_bytes(signature, 64)
    return transaction.encode() + writer.to_bytes()


__all__ = [
    "FUNCTION_CALL_ACTION",
    "FunctionCallAction",
    "Transaction",
    "encode_signed_transaction",
]
