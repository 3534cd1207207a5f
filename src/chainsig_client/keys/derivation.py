"""
Additive key derivation for NEAR Chain Signatures.

A child key for ``(account_id, path)`` is obtained by adding a tweak to the
parent key:

    epsilon      = SHA3-256(PREFIX || account_id || "," || path) mod n
    child_public = epsilon * G + parent_public
    child_secret = (epsilon + parent_secret) mod n

The same formula runs inside the MPC network, so the prefix bytes and the
reduction must match it exactly or derived keys silently diverge.
"""

from __future__ import annotations
import logging
import secrets
from typing import Optional, Union

from ..crypto.hash_utils import sha3_256
from ..crypto.secp256k1 import (
    CURVE_ORDER,
    CurvePoint,
    Secp256k1Signature,
    normalize_secret,
    sign_digest,
)
from ..runtime.errors import DerivationError, NoSecretKeyError

logger = logging.getLogger(__name__)

# Protocol/version tag of the MPC network's derivation; never change these bytes.
TWEAK_DERIVATION_PREFIX = "near-mpc-recovery v0.1.0 epsilon derivation:"
ACCOUNT_DATA_SEPARATOR = ","


def derivation_preimage(account_id: str, path: str) -> bytes:
    """Exact byte string hashed to obtain the tweak."""
    return f"{TWEAK_DERIVATION_PREFIX}{account_id}{ACCOUNT_DATA_SEPARATOR}{path}".encode("utf-8")


def epsilon_from_digest(digest: bytes) -> int:
    """
    Reduce a 32-byte digest to a scalar modulo the curve order.

    Args:
        digest: Big-endian 32-byte hash output

    Returns:
        Tweak scalar in ``[1, n)``

    Raises:
        DerivationError: If the digest reduces to zero
    """
    if len(digest) != 32:
        raise DerivationError(f"Tweak digest must be 32 bytes, got {len(digest)}")
    epsilon = int.from_bytes(digest, "big") % CURVE_ORDER
    if epsilon == 0:
        raise DerivationError("Derived tweak is not a valid scalar (reduces to zero)")
    return epsilon


def derive_epsilon(account_id: str, path: str) -> int:
    """
    Compute the derivation tweak for an ``(account_id, path)`` pair.

    Pure function: the same inputs always give the same scalar.
    """
    return epsilon_from_digest(sha3_256(derivation_preimage(account_id, path)))


class DerivedKey:
    """
    secp256k1 key for NEAR Chain Signatures, with an optional secret.

    A key built from a public key is *public-only*: it can derive children and
    render addresses, but ``can_sign()`` is False and secret accessors raise
    ``NoSecretKeyError``. A key built from a secret also carries the scalar,
    which follows every derivation so that ``secret * G == public_point``.
    """

    __slots__ = ("_point", "_secret")

    def __init__(self, point: CurvePoint, secret: Optional[int] = None):
        """
        Initialize a key.

        Args:
            point: Public point
            secret: Optional secret scalar; must satisfy ``secret * G == point``
        """
        if secret is not None and CurvePoint.from_secret(secret) != point:
            raise DerivationError("Secret key does not match public point")
        self._point = point
        self._secret = secret

    # -- public-only constructors ------------------------------------------

    @classmethod
    def from_near(cls, near_public_key: str) -> DerivedKey:
        """Create from NEAR format ``"secp256k1:base58..."``."""
        return cls(CurvePoint.from_near(near_public_key))

    @classmethod
    def from_point(cls, point: CurvePoint) -> DerivedKey:
        return cls(point)

    @classmethod
    def from_bytes(cls, data: bytes) -> DerivedKey:
        """Create from 64/65/33-byte public key encodings."""
        return cls(CurvePoint.from_bytes(data))

    # -- with-secret constructors ------------------------------------------

    @classmethod
    def from_secret(cls, secret: Union[int, bytes, str]) -> DerivedKey:
        """
        Create from a secret scalar, 32 bytes, or 64-char hex (``0x`` optional).

        Raises:
            MalformedKeyError: If the secret has the wrong width or range
        """
        scalar = normalize_secret(secret)
        return cls(CurvePoint.from_secret(scalar), scalar)

    @classmethod
    def from_secret_bytes(cls, data: bytes) -> DerivedKey:
        return cls.from_secret(bytes(data))

    @classmethod
    def from_secret_hex(cls, hex_string: str) -> DerivedKey:
        return cls.from_secret(str(hex_string))

    @classmethod
    def random(cls) -> DerivedKey:
        """Generate a random key with secret."""
        return cls.from_secret(secrets.randbelow(CURVE_ORDER - 1) + 1)

    # -- derivation ---------------------------------------------------------

    def derive(self, account_id: str, path: str) -> DerivedKey:
        """
        Derive the child key for ``(account_id, path)``.

        Args:
            account_id: NEAR account that requests signatures (the predecessor)
            path: Free-form derivation path

        Returns:
            New key; carries a secret iff this key does

        Raises:
            DerivationError: If the tweak or child secret is zero, or the child
                point is the point at infinity
        """
        epsilon = derive_epsilon(account_id, path)
        child_point = CurvePoint.from_secret(epsilon) + self._point

        child_secret = None
        if self._secret is not None:
            child_secret = (epsilon + self._secret) % CURVE_ORDER
            if child_secret == 0:
                raise DerivationError("Derived secret key is zero")

        logger.debug(f"Derived key for {account_id!r} path {path!r}: {child_point.hex[:18]}...")
        return DerivedKey(child_point, child_secret)

    # -- public properties --------------------------------------------------

    @property
    def public_point(self) -> CurvePoint:
        return self._point

    @property
    def near(self) -> str:
        """NEAR protocol format: ``"secp256k1:base58..."``."""
        return self._point.near

    @property
    def uncompressed(self) -> bytes:
        """Uncompressed public key bytes (65 bytes)."""
        return self._point.uncompressed

    @property
    def compressed(self) -> bytes:
        """Compressed public key bytes (33 bytes)."""
        return self._point.compressed

    @property
    def hex(self) -> str:
        """Hex of the uncompressed public key."""
        return self._point.hex

    @property
    def ethereum(self) -> str:
        """Ethereum address of the public key."""
        from .addresses import ethereum_address
        return ethereum_address(self._point)

    @property
    def bitcoin_p2pkh(self) -> str:
        """Bitcoin legacy P2PKH address of the public key."""
        from .addresses import bitcoin_p2pkh_address
        return bitcoin_p2pkh_address(self._point)

    # -- secret access ------------------------------------------------------

    def can_sign(self) -> bool:
        """Check if this key carries a secret."""
        return self._secret is not None

    @property
    def secret_key(self) -> int:
        """
        The secret scalar.

        Raises:
            NoSecretKeyError: If the key is public-only
        """
        if self._secret is None:
            raise NoSecretKeyError()
        return self._secret

    @property
    def secret_bytes(self) -> bytes:
        return self.secret_key.to_bytes(32, "big")

    @property
    def secret_hex(self) -> str:
        return self.secret_bytes.hex()

    def sign(self, message_hash: bytes) -> Secp256k1Signature:
        """
        Sign a 32-byte hash locally, the way the MPC network would.

        Raises:
            NoSecretKeyError: If the key is public-only
        """
        return sign_digest(self.secret_key, message_hash)

    # -- utility ------------------------------------------------------------

    def equals(self, other: DerivedKey) -> bool:
        """Compare public keys only."""
        return self._point == other._point

    def __eq__(self, other) -> bool:
        if not isinstance(other, DerivedKey):
            return NotImplemented
        return self._point == other._point and self._secret == other._secret

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        mode = "with-secret" if self.can_sign() else "public-only"
        return f"DerivedKey({self.hex[:16]}..., {mode})"

    __str__ = __repr__


__all__ = [
    "TWEAK_DERIVATION_PREFIX",
    "ACCOUNT_DATA_SEPARATOR",
    "derivation_preimage",
    "epsilon_from_digest",
    "derive_epsilon",
    "DerivedKey",
]
