from .mocks import (
    MockTransport,
    MockResponse,
    success_outcome,
    failure_outcome,
    ecdsa_response,
    eddsa_response,
    rpc_result,
    rpc_error,
    view_result,
)
from .fixtures import (
    ROOT_PUBLIC_KEY,
    PREDECESSOR_ID,
    ROOT_ADDRESSES,
    DERIVED_ADDRESSES,
    TEST_SECRET_HEX,
    ACCOUNT_ID,
    ACCOUNT_SEED,
    BLOCK_HASH,
)

__all__ = [
    "MockTransport",
    "MockResponse",
    "success_outcome",
    "failure_outcome",
    "ecdsa_response",
    "eddsa_response",
    "rpc_result",
    "rpc_error",
    "view_result",
    "ROOT_PUBLIC_KEY",
    "PREDECESSOR_ID",
    "ROOT_ADDRESSES",
    "DERIVED_ADDRESSES",
    "TEST_SECRET_HEX",
    "ACCOUNT_ID",
    "ACCOUNT_SEED",
    "BLOCK_HASH",
]
