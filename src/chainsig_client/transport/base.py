"""
Transport interface for the MPC contract.

The signing protocol needs exactly two primitives from the network: a free
read-only view call, and a signed, paid function call awaited until it has
executed. Anything that provides them (an RPC client, a wallet bridge, an
in-process emulator) can drive ``MpcContract``.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict


class Transport(ABC):
    """Minimal NEAR contract transport."""

    @abstractmethod
    def view(self, contract_id: str, method: str, args: Dict[str, Any]) -> Any:
        """
        Call a view method.

        Args:
            contract_id: Contract account
            method: View method name
            args: JSON arguments

        Returns:
            Decoded JSON return value

        Raises:
            TransportError: On network or RPC failure
            ContractRejectedError: If the contract panicked
        """
        pass

    @abstractmethod
    def call_function(self, contract_id: str, method: str, args: Dict[str, Any],
                      gas: int, deposit: int) -> Dict[str, Any]:
        """
        Submit a state-changing function call and wait for its execution.

        Args:
            contract_id: Contract account
            method: Change method name
            args: JSON arguments
            gas: Prepaid gas
            deposit: Attached deposit in yoctoNEAR

        Returns:
            Final execution outcome (``{"status": {...}, ...}``)

        Raises:
            TransportError: On network or RPC failure; the call may or may
                not have executed
        """
        pass

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["Transport"]
