"""
Tests for additive key derivation.
"""

import hashlib

import pytest

from chainsig_client.crypto.secp256k1 import CURVE_ORDER, CurvePoint
from chainsig_client.keys.derivation import (
    TWEAK_DERIVATION_PREFIX,
    DerivedKey,
    derivation_preimage,
    derive_epsilon,
    epsilon_from_digest,
)
from chainsig_client.runtime.errors import DerivationError, MalformedKeyError, NoSecretKeyError

from helpers import DERIVED_ADDRESSES, PREDECESSOR_ID, ROOT_ADDRESSES, ROOT_PUBLIC_KEY, TEST_SECRET_HEX


class TestEpsilon:
    """Tests for the derivation tweak."""

    def test_preimage_layout(self):
        assert derivation_preimage("alice.near", "ethereum-1") == (
            b"near-mpc-recovery v0.1.0 epsilon derivation:alice.near,ethereum-1"
        )
        assert TWEAK_DERIVATION_PREFIX == "near-mpc-recovery v0.1.0 epsilon derivation:"

    def test_epsilon_is_sha3_mod_n(self):
        digest = hashlib.sha3_256(derivation_preimage("alice.near", "ethereum-1")).digest()
        assert derive_epsilon("alice.near", "ethereum-1") == int.from_bytes(digest, "big") % CURVE_ORDER

    def test_reduction_not_truncation(self):
        """Test a digest above n is reduced modulo n."""
        digest = (CURVE_ORDER + 5).to_bytes(32, "big")
        assert epsilon_from_digest(digest) == 5

    @pytest.mark.parametrize("value", [0, CURVE_ORDER])
    def test_zero_epsilon_rejected(self, value):
        with pytest.raises(DerivationError):
            epsilon_from_digest(value.to_bytes(32, "big"))

    def test_deterministic(self):
        assert derive_epsilon("bob.near", "p") == derive_epsilon("bob.near", "p")

    def test_path_changes_epsilon(self):
        assert derive_epsilon("bob.near", "p1") != derive_epsilon("bob.near", "p2")


class TestFixtureAddresses:
    """Known-answer tests against the production mainnet root key."""

    def test_root_addresses(self, root_public_key):
        assert root_public_key.ethereum == ROOT_ADDRESSES["ethereum"]
        assert root_public_key.bitcoin_p2pkh == ROOT_ADDRESSES["bitcoin_p2pkh"]

    @pytest.mark.parametrize("path", sorted(DERIVED_ADDRESSES))
    def test_derived_addresses(self, root_public_key, path):
        child = root_public_key.derive(PREDECESSOR_ID, path)
        assert child.ethereum == DERIVED_ADDRESSES[path]["ethereum"]
        assert child.bitcoin_p2pkh == DERIVED_ADDRESSES[path]["bitcoin_p2pkh"]

    def test_end_to_end_ethereum(self):
        child = DerivedKey.from_near(ROOT_PUBLIC_KEY).derive("alice.near", "ethereum-1")
        assert child.ethereum == "0xa2869d3977dea9afc9b9c069491ac08f06f9e458"


class TestDerivedKeyPublicOnly:
    """Tests for keys built from a public key."""

    def test_cannot_sign(self, root_public_key):
        assert not root_public_key.can_sign()
        with pytest.raises(NoSecretKeyError):
            root_public_key.secret_key
        with pytest.raises(NoSecretKeyError):
            root_public_key.secret_hex
        with pytest.raises(NoSecretKeyError):
            root_public_key.sign(b"\x00" * 32)

    def test_child_is_public_only(self, root_public_key):
        assert not root_public_key.derive("alice.near", "x").can_sign()

    def test_repr(self, root_public_key):
        assert "public-only" in repr(root_public_key)

    def test_round_trip(self, root_public_key):
        child = root_public_key.derive("alice.near", "round-trip")
        assert DerivedKey.from_near(child.near).equals(child)
        assert DerivedKey.from_bytes(child.compressed).equals(child)
        assert DerivedKey.from_bytes(child.uncompressed).equals(child)

    def test_malformed_wire(self):
        with pytest.raises(MalformedKeyError):
            DerivedKey.from_near("secp256k1:abc")


class TestDerivedKeyWithSecret:
    """Tests for keys that carry a secret."""

    def test_input_forms_agree(self):
        from_hex = DerivedKey.from_secret_hex(TEST_SECRET_HEX)
        from_bare_hex = DerivedKey.from_secret_hex(TEST_SECRET_HEX[2:])
        from_bytes = DerivedKey.from_secret_bytes(bytes.fromhex(TEST_SECRET_HEX[2:]))
        from_int = DerivedKey.from_secret(int(TEST_SECRET_HEX, 16))
        assert from_hex == from_bare_hex == from_bytes == from_int

    def test_secret_accessors(self, root_secret_key):
        assert root_secret_key.can_sign()
        assert root_secret_key.secret_hex == TEST_SECRET_HEX[2:]
        assert len(root_secret_key.secret_bytes) == 32
        assert root_secret_key.secret_key == int(TEST_SECRET_HEX, 16)

    def test_repr_hides_secret(self, root_secret_key):
        text = repr(root_secret_key)
        assert "with-secret" in text
        assert TEST_SECRET_HEX[2:] not in text

    @pytest.mark.parametrize("secret", [0, CURVE_ORDER, CURVE_ORDER + 1])
    def test_out_of_range_rejected(self, secret):
        with pytest.raises(MalformedKeyError):
            DerivedKey.from_secret(secret)

    def test_wrong_width_rejected(self):
        with pytest.raises(MalformedKeyError):
            DerivedKey.from_secret_bytes(b"\x01" * 33)

    def test_mismatched_secret_rejected(self):
        with pytest.raises(DerivationError):
            DerivedKey(CurvePoint.from_secret(2), 3)

    @pytest.mark.parametrize("account,path", [
        ("alice.near", "ethereum-1"),
        ("bob.near", "bitcoin-test"),
        ("test.near", "some/long/path"),
        ("test.near", ""),
        ("ünïcode.near", "路径"),
    ])
    def test_secret_and_public_derivation_agree(self, root_secret_key, account, path):
        """Test derived_secret * G equals the publicly derived point."""
        public_root = DerivedKey.from_point(root_secret_key.public_point)

        child_with_secret = root_secret_key.derive(account, path)
        child_public = public_root.derive(account, path)

        assert child_with_secret.can_sign()
        assert child_with_secret.public_point == child_public.public_point
        assert CurvePoint.from_secret(child_with_secret.secret_key) == child_public.public_point
        assert child_with_secret.ethereum == child_public.ethereum

    def test_child_secret_formula(self, root_secret_key):
        child = root_secret_key.derive("alice.near", "formula")
        expected = (derive_epsilon("alice.near", "formula") + root_secret_key.secret_key) % CURVE_ORDER
        assert child.secret_key == expected

    def test_zero_child_secret_rejected(self):
        """Test a root secret of -epsilon cannot be derived from."""
        epsilon = derive_epsilon("alice.near", "zero")
        root = DerivedKey.from_secret(CURVE_ORDER - epsilon)
        with pytest.raises(DerivationError):
            root.derive("alice.near", "zero")

    def test_sign_with_derived_key(self, root_secret_key):
        child = root_secret_key.derive("alice.near", "ethereum-1")
        digest = hashlib.sha256(b"payload").digest()
        signature = child.sign(digest)
        assert signature.verify(digest, child.public_point)
        assert signature.recover_public_key(digest) == child.public_point

    def test_random_keys_differ(self):
        assert not DerivedKey.random().equals(DerivedKey.random())


class TestDerivationProperties:
    """Determinism and non-collision."""

    def test_determinism(self, root_secret_key):
        a = root_secret_key.derive("alice.near", "path")
        b = root_secret_key.derive("alice.near", "path")
        assert a == b

    def test_distinct_paths(self, root_public_key):
        points = {root_public_key.derive("alice.near", f"path-{i}").public_point for i in range(10)}
        assert len(points) == 10

    def test_distinct_accounts(self, root_public_key):
        assert not root_public_key.derive("alice.near", "p").equals(root_public_key.derive("bob.near", "p"))

    def test_chained_derivation(self, root_secret_key):
        """Test multi-level derivation keeps secret and point consistent."""
        child = root_secret_key.derive("alice.near", "a").derive("alice.near", "b")
        assert CurvePoint.from_secret(child.secret_key) == child.public_point
