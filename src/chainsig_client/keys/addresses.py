"""
Address rendering for derived secp256k1 keys.

Only what is needed to identify a derived key on a target chain: the
Ethereum account address and the Bitcoin legacy P2PKH address. Bech32
(segwit) Bitcoin addresses are not provided; feed ``DerivedKey.compressed``
to a Bech32 encoder if one is needed. Building target-chain transactions
is out of scope.
"""

import base58

from ..crypto.hash_utils import hash160, keccak256
from ..crypto.secp256k1 import CurvePoint

BITCOIN_P2PKH_VERSION = b"\x00"


def eth_hash(point: CurvePoint) -> bytes:
    """
    Compute Ethereum-style public key hash: Keccak-256 truncated to 20 bytes.

    Args:
        point: Public point

    Returns:
        20-byte Ethereum address
    """
    # Ethereum hashes X || Y without the 0x04 tag
    return keccak256(point.raw)[-20:]


def ethereum_address(point: CurvePoint) -> str:
    """
    Get the lowercase hex Ethereum address for a public point.

    Args:
        point: Public point

    Returns:
        ``0x``-prefixed 40-character address
    """
    return "0x" + eth_hash(point).hex()


def bitcoin_p2pkh_address(point: CurvePoint, version: bytes = BITCOIN_P2PKH_VERSION) -> str:
    """
    Get the legacy Bitcoin P2PKH address of the compressed public key.

    Args:
        point: Public point
        version: Network version byte (0x00 for mainnet)

    Returns:
        Base58Check address
    """
    return base58.b58encode_check(version + hash160(point.compressed)).decode("ascii")


__all__ = [
    "BITCOIN_P2PKH_VERSION",
    "eth_hash",
    "ethereum_address",
    "bitcoin_p2pkh_address",
]
