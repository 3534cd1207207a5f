"""
Key derivation for Chain Signatures.

Derives child secp256k1 keys from the MPC root key and renders them as
target-chain addresses.
"""

from .derivation import (
    TWEAK_DERIVATION_PREFIX,
    ACCOUNT_DATA_SEPARATOR,
    DerivedKey,
    derive_epsilon,
    epsilon_from_digest,
)
from .addresses import ethereum_address, bitcoin_p2pkh_address

__all__ = [
    "TWEAK_DERIVATION_PREFIX",
    "ACCOUNT_DATA_SEPARATOR",
    "DerivedKey",
    "derive_epsilon",
    "epsilon_from_digest",
    "ethereum_address",
    "bitcoin_p2pkh_address",
]
