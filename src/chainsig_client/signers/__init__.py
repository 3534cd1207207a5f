"""
Signers for Chain Signatures.

Account-key signers that authorize the NEAR transactions carrying sign
requests to the MPC contract.
"""

from .signer import Signer, SignerError
from .near_account import NearAccountSigner

__all__ = [
    "Signer",
    "SignerError",
    "NearAccountSigner",
]
