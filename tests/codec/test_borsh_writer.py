"""
Tests for the Borsh writer primitives.
"""

import pytest

from chainsig_client.codec.writer import BorshWriter, U64_MAX, U128_MAX


class TestBorshWriter:
    """Test cases for BorshWriter"""

    def test_integers_little_endian(self):
        data = BorshWriter().u8(1).u32(0x01020304).u64(5).to_bytes()
        assert data == b"\x01" + b"\x04\x03\x02\x01" + b"\x05" + b"\x00" * 7

    def test_u128(self):
        assert BorshWriter().u128(1).to_bytes() == b"\x01" + b"\x00" * 15
        assert BorshWriter().u128(U128_MAX).to_bytes() == b"\xff" * 16

    def test_string_is_length_prefixed_utf8(self):
        assert BorshWriter().string("hé").to_bytes() == b"\x03\x00\x00\x00h\xc3\xa9"

    def test_vec_bytes(self):
        assert BorshWriter().vec_bytes(b"").to_bytes() == b"\x00\x00\x00\x00"
        assert BorshWriter().vec_bytes(b"ab").to_bytes() == b"\x02\x00\x00\x00ab"

    def test_fixed_bytes_length_checked(self):
        assert BorshWriter().fixed_bytes(b"abc", 3).to_bytes() == b"abc"
        with pytest.raises(ValueError):
            BorshWriter().fixed_bytes(b"abc", 4)

    @pytest.mark.parametrize("method,value", [
        ("u8", 256),
        ("u8", -1),
        ("u32", 1 << 32),
        ("u64", U64_MAX + 1),
        ("u128", U128_MAX + 1),
    ])
    def test_out_of_range(self, method, value):
        """Test values are never silently wrapped."""
        with pytest.raises(ValueError):
            getattr(BorshWriter(), method)(value)
