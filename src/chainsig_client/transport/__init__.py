"""Transports that carry MPC contract calls to the NEAR network"""

from .base import Transport
from .near_rpc import NearRpcTransport

__all__ = ["Transport", "NearRpcTransport"]
