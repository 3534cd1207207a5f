"""
MPC contract configuration.

Holds the per-network defaults of the deployed signer contract and the
tunables of a sign call (gas, deposit, scheme to domain routing).
"""

from __future__ import annotations
import os
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ..runtime.errors import ValidationError
from .types import SignatureScheme

NetworkId = Literal["mainnet", "testnet"]

DEFAULT_CONTRACT_IDS: Mapping[str, str] = MappingProxyType({
    "mainnet": "v1.signer",
    "testnet": "v1.signer-prod.testnet",
})

DEFAULT_RPC_URLS: Mapping[str, str] = MappingProxyType({
    "mainnet": "https://rpc.mainnet.near.org",
    "testnet": "https://rpc.testnet.near.org",
})

TGAS = 10 ** 12
DEFAULT_SIGN_GAS = 50 * TGAS
ONE_YOCTO = 1


def _default_domains() -> Dict[SignatureScheme, int]:
    # Deployed contract convention: domain 0 is secp256k1, domain 1 is Ed25519
    return {SignatureScheme.ECDSA: 0, SignatureScheme.EDDSA: 1}


class ContractConfig(BaseModel):
    """
    Configuration of an ``MpcContract``.

    Example:
        ```python
        config = ContractConfig(network_id="testnet", sign_gas=100 * TGAS)
        config.resolved_contract_id  # "v1.signer-prod.testnet"
        ```
    """
    network_id: NetworkId = Field(default="mainnet", description="NEAR network")
    contract_id: Optional[str] = Field(default=None, description="Signer contract; defaults per network")
    rpc_url: Optional[str] = Field(default=None, description="RPC endpoint; defaults per network")
    sign_gas: int = Field(default=DEFAULT_SIGN_GAS, gt=0, description="Gas attached to sign calls")
    sign_deposit: int = Field(default=ONE_YOCTO, ge=1, description="Deposit attached to sign calls (yoctoNEAR)")
    default_domains: Dict[SignatureScheme, int] = Field(default_factory=_default_domains)

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("default_domains")
    @classmethod
    def _complete_domains(cls, v: Dict[SignatureScheme, int]) -> Dict[SignatureScheme, int]:
        merged = _default_domains()
        merged.update(v)
        if any(domain < 0 for domain in merged.values()):
            raise ValueError("domain ids must be >= 0")
        return merged

    @property
    def resolved_contract_id(self) -> str:
        """Explicit contract id, or the network default."""
        return self.contract_id or DEFAULT_CONTRACT_IDS[self.network_id]

    @property
    def resolved_rpc_url(self) -> str:
        """Explicit RPC URL, or the network default."""
        return self.rpc_url or DEFAULT_RPC_URLS[self.network_id]

    def domain_for(self, scheme: SignatureScheme) -> int:
        """Default domain id for a scheme."""
        return self.default_domains[scheme]

    @classmethod
    def from_env(cls, prefix: str = "CHAINSIG_", environ: Optional[Mapping[str, str]] = None) -> ContractConfig:
        """
        Build a config from environment variables.

        Reads ``{prefix}NETWORK``, ``{prefix}CONTRACT_ID``, ``{prefix}RPC_URL``
        and ``{prefix}SIGN_GAS``; unset variables keep their defaults.

        Args:
            prefix: Variable name prefix
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ValidationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values = {}
        if env.get(f"{prefix}NETWORK"):
            values["network_id"] = env[f"{prefix}NETWORK"]
        if env.get(f"{prefix}CONTRACT_ID"):
            values["contract_id"] = env[f"{prefix}CONTRACT_ID"]
        if env.get(f"{prefix}RPC_URL"):
            values["rpc_url"] = env[f"{prefix}RPC_URL"]
        if env.get(f"{prefix}SIGN_GAS"):
            values["sign_gas"] = env[f"{prefix}SIGN_GAS"]

        try:
            return cls(**values)
        except ValueError as e:
            raise ValidationError(f"Invalid configuration in environment: {e}", cause=e)


__all__ = [
    "NetworkId",
    "DEFAULT_CONTRACT_IDS",
    "DEFAULT_RPC_URLS",
    "TGAS",
    "DEFAULT_SIGN_GAS",
    "ONE_YOCTO",
    "ContractConfig",
]
