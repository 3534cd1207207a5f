"""
NEAR MPC signer contract.

Sign request building and validation, response parsing, and the contract's
key query methods.
"""

from .types import (
    SignatureScheme,
    SignRequest,
    SignRequestArgs,
    Secp256k1SignatureResponse,
    Ed25519SignatureResponse,
    SignatureResponse,
)
from .config import (
    ContractConfig,
    DEFAULT_CONTRACT_IDS,
    DEFAULT_RPC_URLS,
    DEFAULT_SIGN_GAS,
    TGAS,
)
from .contract import MpcContract, MPCSignature, SignState

__all__ = [
    "SignatureScheme",
    "SignRequest",
    "SignRequestArgs",
    "Secp256k1SignatureResponse",
    "Ed25519SignatureResponse",
    "SignatureResponse",
    "ContractConfig",
    "DEFAULT_CONTRACT_IDS",
    "DEFAULT_RPC_URLS",
    "DEFAULT_SIGN_GAS",
    "TGAS",
    "MpcContract",
    "MPCSignature",
    "SignState",
]
