"""
Known-answer fixtures for key derivation.

Root key and addresses captured from the production ``v1.signer`` mainnet
key; derived addresses are for predecessor ``alice.near``.
"""

ROOT_PUBLIC_KEY = (
    "secp256k1:3tFRbMqmoa6AAALMrEFAYCEoHcqKxeW38YptwowBVBtXK1vo36HDbUWuR6EZmoK4JcH6HDkNMGGqP1ouV7VZUWya"
)
PREDECESSOR_ID = "alice.near"

ROOT_ADDRESSES = {
    "ethereum": "0xa01ad27e7cb6f66bf8d7b188e9fb06afb8b01006",
    "bitcoin_p2pkh": "18wj8jKjVCc2KF7JNnuEer8WAWhV2iKAAz",
}

DERIVED_ADDRESSES = {
    "ethereum-1": {
        "ethereum": "0xa2869d3977dea9afc9b9c069491ac08f06f9e458",
        "bitcoin_p2pkh": "15Fe5iwfrA9Dm4WDihFsXB51nbujytQ1Uk",
    },
    "bitcoin-1": {
        "ethereum": "0x51374208230f04c980bc1be4b5a4001b567fb78e",
        "bitcoin_p2pkh": "19foU8vMtWCxPzGg3UGWr1QGnGi2ZGrmKU",
    },
    "test-key-1": {
        "ethereum": "0x37c1c07d3c0f7c9150d91d914b601b58dc364bfd",
        "bitcoin_p2pkh": "1MsJi3D5BPXsQs9PU9QCCdaPr9s7bPX5Dw",
    },
    "path/to/key": {
        "ethereum": "0x6edec42d999272326621909cdb832243baa34e5f",
        "bitcoin_p2pkh": "1FnXPyRXzDY97KbDSWK2uF8b7ovxqnKcz8",
    },
}

TEST_SECRET_HEX = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"

# Account key used to sign carrier transactions in transport tests
ACCOUNT_ID = "alice.testnet"
ACCOUNT_SEED = b"\x01" * 32
BLOCK_HASH = "11111111111111111111111111111111"
