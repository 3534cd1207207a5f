"""Borsh codec for NEAR carrier transactions"""

from .writer import BorshWriter
from .transaction import FunctionCallAction, Transaction, encode_signed_transaction

__all__ = [
    "BorshWriter",
    "FunctionCallAction",
    "Transaction",
    "encode_signed_transaction",
]
