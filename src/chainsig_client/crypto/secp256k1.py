"""
SECP256K1 operations for Chain Signatures.

Provides the public-key point type used for additive derivation, and the
recoverable ECDSA signature type produced by the MPC network's Secp256k1
scheme. Curve arithmetic is done with the ``ecdsa`` library.

Wire formats handled here:
- NEAR: ``"secp256k1:" + base58(X || Y)`` (64 bytes, no format tag)
- uncompressed SEC1: ``0x04 || X || Y`` (65 bytes)
- compressed SEC1: ``0x02/0x03 || X`` (33 bytes)
"""

from __future__ import annotations
import hashlib
from dataclasses import dataclass
from typing import Union

import base58
from ecdsa import SECP256k1, SigningKey, VerifyingKey, BadSignatureError, MalformedPointError
from ecdsa.ellipticcurve import INFINITY, PointJacobi
from ecdsa.numbertheory import SquareRootError, inverse_mod, square_root_mod_prime
from ecdsa.util import sigdecode_string, sigencode_strings_canonize

from ..runtime.errors import DerivationError, MalformedKeyError

CURVE = SECP256k1.curve
GENERATOR = SECP256k1.generator
CURVE_ORDER = SECP256k1.order
FIELD_PRIME = CURVE.p()

NEAR_SECP256K1_PREFIX = "secp256k1:"
RAW_PUBLIC_KEY_BYTES = 64
UNCOMPRESSED_PUBLIC_KEY_BYTES = 65
COMPRESSED_PUBLIC_KEY_BYTES = 33
SCALAR_BYTES = 32


@dataclass(frozen=True)
class CurvePoint:
    """
    Immutable secp256k1 public-key point (never the point at infinity).

    Equality and hashing use the affine coordinates.
    """

    x: int
    y: int

    def __post_init__(self):
        if not (0 <= self.x < FIELD_PRIME and 0 <= self.y < FIELD_PRIME):
            raise MalformedKeyError("Point coordinates out of field range")
        if not CURVE.contains_point(self.x, self.y):
            raise MalformedKeyError("Point is not on the secp256k1 curve")

    # -- construction -------------------------------------------------------

    @classmethod
    def _from_ecdsa(cls, point) -> CurvePoint:
        if point == INFINITY:
            raise DerivationError("Result is the point at infinity")
        return cls(point.x(), point.y())

    @classmethod
    def generator(cls) -> CurvePoint:
        """The curve base point G."""
        return cls(GENERATOR.x(), GENERATOR.y())

    @classmethod
    def from_secret(cls, secret: int) -> CurvePoint:
        """
        Compute ``secret * G``.

        Args:
            secret: Scalar in ``[1, n)``

        Raises:
            MalformedKeyError: If the scalar is out of range
        """
        if not isinstance(secret, int) or not 0 < secret < CURVE_ORDER:
            raise MalformedKeyError("Secret key scalar must be in [1, n)")
        return cls._from_ecdsa(GENERATOR * secret)

    @classmethod
    def from_bytes(cls, data: bytes) -> CurvePoint:
        """
        Parse a point from raw (64), uncompressed (65) or compressed (33) bytes.

        Raises:
            MalformedKeyError: On wrong length, format tag or off-curve point
        """
        data = bytes(data)
        if len(data) == RAW_PUBLIC_KEY_BYTES:
            data = b"\x04" + data
        elif len(data) == UNCOMPRESSED_PUBLIC_KEY_BYTES:
            if data[0] != 0x04:
                raise MalformedKeyError(f"Invalid uncompressed point tag: 0x{data[0]:02x}")
        elif len(data) == COMPRESSED_PUBLIC_KEY_BYTES:
            if data[0] not in (0x02, 0x03):
                raise MalformedKeyError(f"Invalid compressed point tag: 0x{data[0]:02x}")
        else:
            raise MalformedKeyError(
                f"Public key must be 33, 64 or 65 bytes, got {len(data)}",
                details={"length": len(data)},
            )

        try:
            vk = VerifyingKey.from_string(data, curve=SECP256k1)
        except MalformedPointError as e:
            raise MalformedKeyError("Invalid secp256k1 point encoding", cause=e)
        return cls._from_ecdsa(vk.pubkey.point)

    @classmethod
    def from_hex(cls, hex_string: str) -> CurvePoint:
        """Create a point from a hex-encoded byte form."""
        try:
            data = bytes.fromhex(hex_string[2:] if hex_string.startswith("0x") else hex_string)
        except ValueError as e:
            raise MalformedKeyError(f"Invalid hex string: {e}", cause=e)
        return cls.from_bytes(data)

    @classmethod
    def from_near(cls, near_public_key: str) -> CurvePoint:
        """
        Parse the NEAR wire format ``"secp256k1:" + base58(X || Y)``.

        Raises:
            MalformedKeyError: On wrong prefix, bad base58 or wrong decoded length
        """
        if not isinstance(near_public_key, str) or not near_public_key.startswith(NEAR_SECP256K1_PREFIX):
            raise MalformedKeyError(f"Must start with '{NEAR_SECP256K1_PREFIX}'")

        try:
            decoded = base58.b58decode(near_public_key[len(NEAR_SECP256K1_PREFIX):])
        except ValueError as e:
            raise MalformedKeyError(f"Invalid base58 payload: {e}", cause=e)

        if len(decoded) != RAW_PUBLIC_KEY_BYTES:
            raise MalformedKeyError(
                f"Public key must be exactly {RAW_PUBLIC_KEY_BYTES} bytes, got {len(decoded)}",
                details={"length": len(decoded)},
            )
        return cls.from_bytes(b"\x04" + decoded)

    # -- group operations ---------------------------------------------------

    def _jacobian(self) -> PointJacobi:
        return PointJacobi(CURVE, self.x, self.y, 1, CURVE_ORDER)

    def __add__(self, other: CurvePoint) -> CurvePoint:
        if not isinstance(other, CurvePoint):
            return NotImplemented
        return CurvePoint._from_ecdsa(self._jacobian() + other._jacobian())

    def multiply(self, scalar: int) -> CurvePoint:
        """
        Scalar multiplication ``scalar * self``.

        Raises:
            DerivationError: If the scalar reduces to zero
        """
        k = scalar % CURVE_ORDER
        if k == 0:
            raise DerivationError("Scalar reduces to zero")
        return CurvePoint._from_ecdsa(self._jacobian() * k)

    # -- serialisation ------------------------------------------------------

    @property
    def raw(self) -> bytes:
        """X || Y, 64 bytes."""
        return self.x.to_bytes(32, "big") + self.y.to_bytes(32, "big")

    @property
    def uncompressed(self) -> bytes:
        """SEC1 uncompressed encoding, 65 bytes."""
        return b"\x04" + self.raw

    @property
    def compressed(self) -> bytes:
        """SEC1 compressed encoding, 33 bytes."""
        return bytes([0x02 | (self.y & 1)]) + self.x.to_bytes(32, "big")

    @property
    def hex(self) -> str:
        """Hex of the uncompressed encoding."""
        return self.uncompressed.hex()

    @property
    def near(self) -> str:
        """NEAR wire format."""
        return NEAR_SECP256K1_PREFIX + base58.b58encode(self.raw).decode("ascii")

    def to_verifying_key(self) -> VerifyingKey:
        """Return an ``ecdsa`` verifying key for this point."""
        return VerifyingKey.from_public_point(self._jacobian(), curve=SECP256k1)

    def __repr__(self) -> str:
        return f"CurvePoint({self.hex[:16]}...)"


@dataclass(frozen=True)
class Secp256k1Signature:
    """
    Recoverable ECDSA signature over secp256k1.

    ``recovery_id`` follows the usual convention: bit 0 is the parity of
    R.y, bit 1 is set when R.x overflowed the curve order.
    """

    r: int
    s: int
    recovery_id: int

    def __post_init__(self):
        if not 0 < self.r < CURVE_ORDER:
            raise ValueError("Signature r must be in [1, n)")
        if not 0 < self.s < CURVE_ORDER:
            raise ValueError("Signature s must be in [1, n)")
        if self.recovery_id not in (0, 1, 2, 3):
            raise ValueError(f"Recovery id must be 0..3, got {self.recovery_id}")

    @classmethod
    def from_bytes(cls, data: bytes) -> Secp256k1Signature:
        """Create from 65 bytes ``r || s || v``."""
        if len(data) != 65:
            raise ValueError(f"Recoverable signature must be 65 bytes, got {len(data)}")
        return cls(
            int.from_bytes(data[:32], "big"),
            int.from_bytes(data[32:64], "big"),
            data[64],
        )

    def to_bytes(self) -> bytes:
        """Compact ``r || s`` form, 64 bytes."""
        return self.r.to_bytes(SCALAR_BYTES, "big") + self.s.to_bytes(SCALAR_BYTES, "big")

    def to_rsv(self) -> bytes:
        """``r || s || recovery_id``, 65 bytes."""
        return self.to_bytes() + bytes([self.recovery_id])

    def to_hex(self) -> str:
        """Get compact signature as hex string."""
        return self.to_bytes().hex()

    @property
    def has_high_s(self) -> bool:
        return self.s > CURVE_ORDER // 2

    def verify(self, message_hash: bytes, public_key: CurvePoint) -> bool:
        """
        Verify the signature over a 32-byte message hash.

        Args:
            message_hash: The hash that was signed
            public_key: Expected signer point

        Returns:
            True if signature is valid
        """
        if len(message_hash) != SCALAR_BYTES:
            raise ValueError(f"Message hash must be {SCALAR_BYTES} bytes, got {len(message_hash)}")
        try:
            return public_key.to_verifying_key().verify_digest(
                self.to_bytes(), message_hash, sigdecode=sigdecode_string
            )
        except BadSignatureError:
            return False

    def recover_public_key(self, message_hash: bytes) -> CurvePoint:
        """
        Recover the signer's public point from the signature.

        Raises:
            ValueError: If the recovery id does not describe a valid R
        """
        if len(message_hash) != SCALAR_BYTES:
            raise ValueError(f"Message hash must be {SCALAR_BYTES} bytes, got {len(message_hash)}")

        x = self.r + (self.recovery_id >> 1) * CURVE_ORDER
        if x >= FIELD_PRIME:
            raise ValueError("Recovery id describes an R outside the field")
        alpha = (pow(x, 3, FIELD_PRIME) + CURVE.a() * x + CURVE.b()) % FIELD_PRIME
        try:
            beta = square_root_mod_prime(alpha, FIELD_PRIME)
        except SquareRootError as e:
            raise ValueError("r does not correspond to a curve point") from e
        y = beta if beta % 2 == (self.recovery_id & 1) else FIELD_PRIME - beta

        big_r = PointJacobi(CURVE, x, y, 1, CURVE_ORDER)
        e = int.from_bytes(message_hash, "big") % CURVE_ORDER
        q = (big_r * self.s + GENERATOR * ((-e) % CURVE_ORDER)) * inverse_mod(self.r, CURVE_ORDER)
        return CurvePoint._from_ecdsa(q)

    def __str__(self) -> str:
        return f"Secp256k1Signature({self.to_hex()[:16]}..., v={self.recovery_id})"


def sign_digest(secret: int, message_hash: bytes) -> Secp256k1Signature:
    """
    Deterministically sign a 32-byte hash (RFC 6979, low-s).

    Args:
        secret: Secret scalar in ``[1, n)``
        message_hash: 32-byte digest

    Returns:
        Recoverable signature whose recovery id matches ``secret * G``
    """
    if len(message_hash) != SCALAR_BYTES:
        raise ValueError(f"Message hash must be {SCALAR_BYTES} bytes, got {len(message_hash)}")

    sk = SigningKey.from_secret_exponent(secret, curve=SECP256k1, hashfunc=hashlib.sha256)
    r_bytes, s_bytes = sk.sign_digest_deterministic(
        message_hash, hashfunc=hashlib.sha256, sigencode=sigencode_strings_canonize
    )
    r = int.from_bytes(r_bytes, "big")
    s = int.from_bytes(s_bytes, "big")

    public_key = CurvePoint.from_secret(secret)
    for recovery_id in range(4):
        candidate = Secp256k1Signature(r, s, recovery_id)
        try:
            if candidate.recover_public_key(message_hash) == public_key:
                return candidate
        except ValueError:
            continue
    raise DerivationError("Could not determine recovery id for signature")


def normalize_secret(secret: Union[int, bytes, str]) -> int:
    """
    Convert a secret given as int, 32 bytes or 64-char hex (optional ``0x``).

    Raises:
        MalformedKeyError: On wrong width or a scalar outside ``[1, n)``
    """
    if isinstance(secret, bool):
        raise MalformedKeyError("Secret key must be int, bytes or hex string")
    if isinstance(secret, str):
        clean = secret[2:] if secret.startswith(("0x", "0X")) else secret
        if len(clean) != SCALAR_BYTES * 2:
            raise MalformedKeyError(f"Secret key hex must be 64 characters, got {len(clean)}")
        try:
            secret = bytes.fromhex(clean)
        except ValueError as e:
            raise MalformedKeyError(f"Invalid hex string: {e}", cause=e)
    if isinstance(secret, (bytes, bytearray)):
        if len(secret) != SCALAR_BYTES:
            raise MalformedKeyError(f"Secret key must be exactly 32 bytes, got {len(secret)}")
        secret = int.from_bytes(secret, "big")
    if not isinstance(secret, int):
        raise MalformedKeyError("Secret key must be int, bytes or hex string")
    if not 0 < secret < CURVE_ORDER:
        raise MalformedKeyError("Secret key scalar must be in [1, n)")
    return secret


__all__ = [
    "CURVE_ORDER",
    "FIELD_PRIME",
    "NEAR_SECP256K1_PREFIX",
    "CurvePoint",
    "Secp256k1Signature",
    "sign_digest",
    "normalize_secret",
]
