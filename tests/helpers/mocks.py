"""
Mock implementations for testing.

``MockTransport`` emulates the MPC signer contract in-process: it holds the
root secret, derives child keys for the configured predecessor and signs
like the MPC network would, returning outcomes in the contract's wire
format.
"""

from __future__ import annotations
import base64
import json
from typing import Any, Dict, List, Optional

from chainsig_client.crypto.ed25519 import Ed25519PrivateKey
from chainsig_client.keys.derivation import DerivedKey
from chainsig_client.runtime.errors import ContractRejectedError
from chainsig_client.transport.base import Transport


def success_outcome(payload: Any) -> Dict[str, Any]:
    """Wrap a JSON payload the way a successful ``send_tx`` reports it."""
    encoded = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
    return {"status": {"SuccessValue": encoded}, "transaction": {}, "receipts_outcome": []}


def failure_outcome(error: Any) -> Dict[str, Any]:
    """Outcome of a call the contract panicked on."""
    return {"status": {"Failure": error}, "transaction": {}, "receipts_outcome": []}


def ecdsa_response(signature) -> Dict[str, Any]:
    """Contract payload for a ``Secp256k1Signature``."""
    tag = "03" if signature.recovery_id & 1 else "02"
    return {
        "scheme": "Secp256k1",
        "big_r": {"affine_point": tag + signature.r.to_bytes(32, "big").hex().upper()},
        "s": {"scalar": signature.s.to_bytes(32, "big").hex().upper()},
        "recovery_id": signature.recovery_id,
    }


def eddsa_response(signature: bytes) -> Dict[str, Any]:
    """Contract payload for an Ed25519 signature."""
    return {"scheme": "Ed25519", "signature": list(signature)}


class MockTransport(Transport):
    """In-process MPC signer contract."""

    ECDSA_DOMAIN = 0
    EDDSA_DOMAIN = 1

    def __init__(self, root_key: Optional[DerivedKey] = None, predecessor: str = "alice.near"):
        self.root_key = root_key or DerivedKey.random()
        self.predecessor = predecessor
        self.key_version = 1
        self.view_calls: List[Dict[str, Any]] = []
        self.function_calls: List[Dict[str, Any]] = []
        self.next_outcome: Optional[Dict[str, Any]] = None

    def ed25519_key(self, predecessor: str, path: str) -> Ed25519PrivateKey:
        """Stand-in for the network's Ed25519 derivation."""
        return Ed25519PrivateKey.from_seed(f"{predecessor},{path}")

    def view(self, contract_id: str, method: str, args: Dict[str, Any]) -> Any:
        self.view_calls.append({"contract_id": contract_id, "method": method, "args": args})

        if method == "public_key":
            if args.get("domain_id", self.ECDSA_DOMAIN) == self.EDDSA_DOMAIN:
                return self.ed25519_key("", "").public_key().near
            return self.root_key.near
        if method == "derived_public_key":
            if args.get("domain_id") == self.EDDSA_DOMAIN:
                return self.ed25519_key(args["predecessor"], args["path"]).public_key().near
            return self.root_key.derive(args["predecessor"], args["path"]).near
        if method == "latest_key_version":
            return self.key_version

        err = ContractRejectedError(f"MethodNotFound: {method}")
        err.cost_incurred = False
        raise err

    def call_function(self, contract_id: str, method: str, args: Dict[str, Any],
                      gas: int, deposit: int) -> Dict[str, Any]:
        self.function_calls.append({
            "contract_id": contract_id,
            "method": method,
            "args": args,
            "gas": gas,
            "deposit": deposit,
        })
        if self.next_outcome is not None:
            return self.next_outcome

        request = args["request"]
        payload = request["payload_v2"]
        domain_id = request["domain_id"]

        if "Ecdsa" in payload:
            if domain_id != self.ECDSA_DOMAIN:
                return failure_outcome({"ActionError": {"kind": {"FunctionCallError": {
                    "ExecutionError": "Smart contract panicked: domain/scheme mismatch"}}}})
            child = self.root_key.derive(self.predecessor, request["path"])
            return success_outcome(ecdsa_response(child.sign(bytes.fromhex(payload["Ecdsa"]))))

        if domain_id != self.EDDSA_DOMAIN:
            return failure_outcome({"ActionError": {"kind": {"FunctionCallError": {
                "ExecutionError": "Smart contract panicked: domain/scheme mismatch"}}}})
        key = self.ed25519_key(self.predecessor, request["path"])
        return success_outcome(eddsa_response(key.sign(bytes.fromhex(payload["Eddsa"]))))


class MockResponse:
    """Mock ``requests`` response for testing"""

    def __init__(self, status_code=200, json_data=None, reason="OK", raise_for_json=False):
        self.status_code = status_code
        self.reason = reason
        self._json_data = json_data or {}
        self._raise_for_json = raise_for_json

    def json(self):
        if self._raise_for_json:
            raise json.JSONDecodeError("Invalid JSON", "", 0)
        return self._json_data


def rpc_result(result: Any, request_id: int = 1) -> MockResponse:
    """Successful JSON-RPC response."""
    return MockResponse(json_data={"jsonrpc": "2.0", "result": result, "id": request_id})


def rpc_error(error: Dict[str, Any], request_id: int = 1) -> MockResponse:
    """JSON-RPC error response."""
    return MockResponse(json_data={"jsonrpc": "2.0", "error": error, "id": request_id})


def view_result(value: Any) -> MockResponse:
    """``query``/``call_function`` response returning ``value`` as JSON bytes."""
    return rpc_result({
        "result": list(json.dumps(value).encode("utf-8")),
        "logs": [],
        "block_height": 100,
        "block_hash": "11111111111111111111111111111111",
    })
