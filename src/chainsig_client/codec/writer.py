"""
Borsh Writer

Little-endian binary encoding used by NEAR for transactions. Fixed-width
integers, u32 length prefixes for strings and vectors, no padding.
"""

import struct
from typing import List

U64_MAX = 0xFFFFFFFFFFFFFFFF
U128_MAX = (1 << 128) - 1


class BorshWriter:
    """
    Binary writer for the Borsh primitives NEAR transactions use.

    Values are range-checked instead of masked, since a silently wrapped
    nonce or deposit would produce a different, validly signed transaction.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> "BorshWriter":
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        if not 0 <= v <= 0xFF:
            raise ValueError(f"u8 out of range: {v}")
        self._bb.append(v)
        return self

    def u32(self, v: int) -> "BorshWriter":
        """
        Write unsigned 32-bit integer in little-endian format.

        Args:
            v: Integer value to write
        """
        if not 0 <= v <= 0xFFFFFFFF:
            raise ValueError(f"u32 out of range: {v}")
        self._bb.extend(struct.pack('<I', v))
        return self

    def u64(self, v: int) -> "BorshWriter":
        """
        Write unsigned 64-bit integer in little-endian format.

        Args:
            v: Integer value to write
        """
        if not 0 <= v <= U64_MAX:
            raise ValueError(f"u64 out of range: {v}")
        self._bb.extend(struct.pack('<Q', v))
        return self

    def u128(self, v: int) -> "BorshWriter":
        """
        Write unsigned 128-bit integer in little-endian format.

        Args:
            v: Integer value to write
        """
        if not 0 <= v <= U128_MAX:
            raise ValueError(f"u128 out of range: {v}")
        self._bb.extend(v.to_bytes(16, 'little'))
        return self

    def fixed_bytes(self, v: bytes, size: int) -> "BorshWriter":
        """
        Write a fixed-size byte array without length prefix.

        Args:
            v: Bytes to write
            size: Required length
        """
        if len(v) != size:
            raise ValueError(f"Expected {size} bytes, got {len(v)}")
        self._bb.extend(v)
        return self

    def vec_bytes(self, v: bytes) -> "BorshWriter":
        """Write ``Vec<u8>``: u32 length followed by the bytes."""
        self.u32(len(v))
        self._bb.extend(v)
        return self

    def string(self, s: str) -> "BorshWriter":
        """Write a UTF-8 string with u32 byte-length prefix."""
        return self.vec_bytes(s.encode('utf-8'))

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)


__all__ = ["BorshWriter", "U64_MAX", "U128_MAX"]
