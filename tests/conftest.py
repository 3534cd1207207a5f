"""
Shared fixtures for the Chain Signatures test suite.
"""

import pytest

from chainsig_client.crypto.ed25519 import Ed25519PrivateKey
from chainsig_client.keys.derivation import DerivedKey
from chainsig_client.mpc.config import ContractConfig
from chainsig_client.mpc.contract import MpcContract
from chainsig_client.signers.near_account import NearAccountSigner

from helpers import ACCOUNT_ID, ACCOUNT_SEED, PREDECESSOR_ID, ROOT_PUBLIC_KEY, TEST_SECRET_HEX, MockTransport


@pytest.fixture
def root_public_key():
    """Production mainnet root key, public only."""
    return DerivedKey.from_near(ROOT_PUBLIC_KEY)


@pytest.fixture
def root_secret_key():
    """Deterministic root key with secret."""
    return DerivedKey.from_secret_hex(TEST_SECRET_HEX)


@pytest.fixture
def mock_transport(root_secret_key):
    """In-process MPC contract holding ``root_secret_key``."""
    return MockTransport(root_secret_key, predecessor=PREDECESSOR_ID)


@pytest.fixture
def contract(mock_transport):
    """MpcContract wired to the mock transport with mainnet defaults."""
    return MpcContract(mock_transport, ContractConfig(network_id="mainnet"))


@pytest.fixture
def account_signer():
    """Deterministic NEAR account signer."""
    return NearAccountSigner(ACCOUNT_ID, Ed25519PrivateKey(ACCOUNT_SEED))
