"""
NEAR JSON-RPC transport.

Implements ``Transport`` on top of the public NEAR RPC API using
``requests``: view calls go through ``query``/``call_function``, change
calls are Borsh-encoded, signed with the account's Ed25519 key and sent
through ``send_tx``.

Reference: https://docs.near.org/api/rpc/introduction
"""

from __future__ import annotations
import base64
import json
import logging
import random
from typing import Optional, Dict, Any

import requests

from ..codec.transaction import Transaction
from ..runtime.encoding import decode_byte_list_json, encode_args_base64, encode_json
from ..runtime.errors import (
    ContractRejectedError,
    TransportError,
    TransportTimeoutError,
    error_from_rpc,
)
from ..signers.near_account import NearAccountSigner
from .base import Transport

logger = logging.getLogger(__name__)

DEFAULT_WAIT_UNTIL = "EXECUTED_OPTIMISTIC"


class NearRpcTransport(Transport):
    """
    Transport over NEAR JSON-RPC 2.0.

    Example:
        ```python
        signer = NearAccountSigner.from_near_secret("alice.near", "ed25519:...")
        with NearRpcTransport("https://rpc.mainnet.near.org", signer=signer) as transport:
            contract = MpcContract(transport, ContractConfig(network_id="mainnet"))
            signature = contract.sign(path="ethereum-1", message=msg_hash.hex())
        ```
    """

    def __init__(
        self,
        rpc_url: str,
        signer: Optional[NearAccountSigner] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        wait_until: str = DEFAULT_WAIT_UNTIL,
    ):
        """
        Initialize the transport.

        Args:
            rpc_url: NEAR RPC endpoint URL
            signer: Account signer; required for ``call_function`` only
            timeout: Request timeout in seconds (default: 30)
            session: Optional requests.Session for connection pooling
            wait_until: ``send_tx`` finality to wait for
        """
        self._rpc_url = rpc_url
        self._signer = signer
        self._timeout = timeout
        self._wait_until = wait_until
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def rpc_url(self) -> str:
        """Get the RPC endpoint."""
        return self._rpc_url

    @property
    def signer(self) -> Optional[NearAccountSigner]:
        return self._signer

    def close(self) -> None:
        """Close the HTTP session if owned by this transport."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> NearRpcTransport:
        return self

    # =========================================================================
    # Low-level RPC
    # =========================================================================

    def _call(self, method: str, params: Dict[str, Any]) -> Any:
        """
        Make a JSON-RPC 2.0 call.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            Result from the RPC call

        Raises:
            TransportTimeoutError: If the request or the node timed out
            TransportError: If the call fails
            ContractRejectedError: If the node reports a contract failure
        """
        request_data: Dict[str, Any] = {
            "jsonrpc": "2.0",
            "method": method,
            "id": random.randint(1, 1_000_000),
            "params": params,
        }
        logger.debug(f"RPC {method} -> {self._rpc_url}")

        try:
            response = self._session.post(
                self._rpc_url,
                json=request_data,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )

            if response.status_code != 200:
                raise TransportError(
                    f"HTTP {response.status_code}: {response.reason}",
                    details={"status_code": response.status_code},
                )

            response_data = response.json()

        except requests.exceptions.Timeout as e:
            raise TransportTimeoutError(f"RPC {method} timed out after {self._timeout}s", cause=e)
        except json.JSONDecodeError as e:
            raise TransportError(f"Invalid JSON response: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}", cause=e)

        if not isinstance(response_data, dict):
            raise TransportError("Invalid JSON-RPC response", details={"response": response_data})

        if "error" in response_data:
            raise error_from_rpc(response_data["error"])

        if "result" not in response_data:
            raise TransportError("JSON-RPC response has no result", details={"response": response_data})

        return response_data["result"]

    def call(self, method: str, params: Dict[str, Any]) -> Any:
        """
        Make a raw JSON-RPC call.

        Args:
            method: RPC method name (e.g., "query", "block")
            params: Method parameters

        Returns:
            Result from the RPC call
        """
        return self._call(method, params)

    # =========================================================================
    # Transport
    # =========================================================================

    def view(self, contract_id: str, method: str, args: Dict[str, Any]) -> Any:
        """
        Call a contract view method at final finality.

        Raises:
            ContractRejectedError: If the contract panicked (no cost incurred)
            TransportError: On network failure or an undecodable result
        """
        try:
            result = self._call("query", {
                "request_type": "call_function",
                "finality": "final",
                "account_id": contract_id,
                "method_name": method,
                "args_base64": encode_args_base64(args),
            })
        except ContractRejectedError as e:
            # View calls are free
            e.cost_incurred = False
            raise

        if isinstance(result, dict) and result.get("error"):
            err = ContractRejectedError(
                f"View call {contract_id}.{method} failed: {result['error']}",
                details=result,
            )
            err.cost_incurred = False
            raise err

        try:
            return decode_byte_list_json(result["result"])
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                f"Undecodable view result from {contract_id}.{method}",
                details={"result": result},
                cause=e,
            )

    def get_access_key(self, account_id: str, public_key: str) -> Dict[str, Any]:
        """
        Query an access key.

        Args:
            account_id: Account owning the key
            public_key: Key in NEAR wire format

        Returns:
            Access key view including ``nonce`` and ``block_hash``
        """
        return self._call("query", {
            "request_type": "view_access_key",
            "finality": "final",
            "account_id": account_id,
            "public_key": public_key,
        })

    def send_transaction(self, signed_tx: bytes) -> Dict[str, Any]:
        """
        Submit a signed transaction and wait for ``wait_until``.

        Args:
            signed_tx: Borsh-encoded ``SignedTransaction``

        Returns:
            Final execution outcome
        """
        return self._call("send_tx", {
            "signed_tx_base64": base64.b64encode(signed_tx).decode("ascii"),
            "wait_until": self._wait_until,
        })

    def call_function(self, contract_id: str, method: str, args: Dict[str, Any],
                      gas: int, deposit: int) -> Dict[str, Any]:
        """
        Sign and submit a single ``FunctionCall`` transaction.

        Raises:
            TransportError: If no signer is configured, or on network failure
        """
        if self._signer is None:
            raise TransportError("NearRpcTransport needs a signer for function calls")
        signer = self._signer

        access_key = self.get_access_key(signer.account_id, signer.public_key_near)
        try:
            nonce = int(access_key["nonce"]) + 1
            transaction = Transaction.function_call(
                signer_id=signer.account_id,
                public_key=signer.get_public_key(),
                nonce=nonce,
                receiver_id=contract_id,
                block_hash=access_key["block_hash"],
                method_name=method,
                args=encode_json(args),
                gas=gas,
                deposit=deposit,
            )
            signed_tx = signer.sign_transaction(transaction)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError("Invalid access key response", details={"result": access_key}, cause=e)

        logger.debug(f"Sending {contract_id}.{method} as {signer.account_id} (nonce {nonce})")
        outcome = self.send_transaction(signed_tx)
        if not isinstance(outcome, dict):
            raise TransportError("Invalid send_tx result", details={"result": outcome})
        return outcome


__all__ = ["DEFAULT_WAIT_UNTIL", "NearRpcTransport"]
