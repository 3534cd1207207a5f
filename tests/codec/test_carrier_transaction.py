"""
Tests for the NEAR function-call transaction encoding and signing.
"""

import hashlib

import pytest

from chainsig_client.codec.transaction import (
    FUNCTION_CALL_ACTION,
    Transaction,
    encode_signed_transaction,
)
from chainsig_client.signers.signer import SignerError

from helpers import ACCOUNT_ID, BLOCK_HASH


def _tx(public_key: bytes, signer_id: str = ACCOUNT_ID) -> Transaction:
    return Transaction.function_call(
        signer_id=signer_id,
        public_key=public_key,
        nonce=7,
        receiver_id="v1.signer",
        block_hash=BLOCK_HASH,
        method_name="sign",
        args=b'{"a":1}',
        gas=50 * 10 ** 12,
        deposit=1,
    )


class TestTransactionEncoding:
    """Tests for the Borsh layout of the carrier transaction."""

    def test_exact_layout(self):
        public_key = bytes(range(32))
        encoded = _tx(public_key).encode()

        expected = (
            len(ACCOUNT_ID).to_bytes(4, "little") + ACCOUNT_ID.encode()
            + b"\x00" + public_key
            + (7).to_bytes(8, "little")
            + (9).to_bytes(4, "little") + b"v1.signer"
            + b"\x00" * 32
            + (1).to_bytes(4, "little")
            + bytes([FUNCTION_CALL_ACTION])
            + (4).to_bytes(4, "little") + b"sign"
            + (7).to_bytes(4, "little") + b'{"a":1}'
            + (50 * 10 ** 12).to_bytes(8, "little")
            + (1).to_bytes(16, "little")
        )
        assert encoded == expected

    def test_hash_is_sha256(self):
        tx = _tx(bytes(32))
        assert tx.hash() == hashlib.sha256(tx.encode()).digest()

    def test_bad_block_hash_length(self):
        tx = Transaction.function_call(ACCOUNT_ID, bytes(32), 1, "v1.signer", "1111",
                                       "sign", b"{}", 1, 1)
        with pytest.raises(ValueError):
            tx.encode()

    def test_signed_transaction_appends_signature(self):
        tx = _tx(bytes(32))
        signed = encode_signed_transaction(tx, b"\x11" * 64)
        assert signed == tx.encode() + b"\x00" + b"\x11" * 64

    def test_signature_length_checked(self):
        with pytest.raises(ValueError):
            encode_signed_transaction(_tx(bytes(32)), b"\x11" * 63)


class TestNearAccountSigner:
    """Tests for signing carrier transactions."""

    def test_sign_transaction(self, account_signer):
        tx = _tx(account_signer.get_public_key())
        signed = account_signer.sign_transaction(tx)

        body, signature = signed[:-65], signed[-64:]
        assert body == tx.encode()
        assert signed[-65] == 0
        assert account_signer.verify(signature, tx.hash())

    def test_public_key_near(self, account_signer):
        assert account_signer.public_key_near.startswith("ed25519:")

    def test_wrong_signer_rejected(self, account_signer):
        with pytest.raises(SignerError):
            account_signer.sign_transaction(_tx(account_signer.get_public_key(), signer_id="bob.near"))

    def test_wrong_key_rejected(self, account_signer):
        with pytest.raises(SignerError):
            account_signer.sign_transaction(_tx(bytes(32)))
