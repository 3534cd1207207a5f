"""
NEAR Chain Signatures Python SDK

Derives per-account child keys from the MPC network's root key and asks the
MPC signer contract for ECDSA (secp256k1) or EdDSA (Ed25519) signatures
under those keys.
"""

# Errors
from .runtime.errors import *

# Keys and signatures
from .crypto import CurvePoint, Secp256k1Signature, Ed25519PublicKey, Ed25519PrivateKey
from .keys import *

# Contract protocol
from .mpc import *

# Network
from .signers import NearAccountSigner
from .transport import Transport, NearRpcTransport

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode",
    "ChainSignaturesError",
    "MalformedKeyError",
    "NoSecretKeyError",
    "DerivationError",
    "ValidationError",
    "MalformedResponseError",
    "ContractRejectedError",
    "TransportError",
    "TransportTimeoutError",
    "ErrorHandler",

    # Keys and signatures
    "CurvePoint",
    "Secp256k1Signature",
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "DerivedKey",
    "derive_epsilon",
    "epsilon_from_digest",
    "ethereum_address",
    "bitcoin_p2pkh_address",

    # Contract protocol
    "SignatureScheme",
    "SignRequest",
    "ContractConfig",
    "DEFAULT_CONTRACT_IDS",
    "MpcContract",
    "SignState",

    # Network
    "NearAccountSigner",
    "Transport",
    "NearRpcTransport",

    "__version__",
]
