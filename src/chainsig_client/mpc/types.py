"""
MPC signer contract types.

Pydantic schemas for the sign request sent to the contract and the
scheme-tagged signature it returns. Shapes follow the deployed ``v1.signer``
contract:

    sign args: {"request": {"domain_id": 0, "path": "...", "payload_v2": {"Ecdsa": "<hex>"}}}
    response:  {"scheme": "Secp256k1", "big_r": {"affine_point": "02..."}, "s": {"scalar": "..."}, "recovery_id": 0}
               {"scheme": "Ed25519", "signature": [64 byte values]}
"""

from __future__ import annotations
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from ..runtime.encoding import is_hex, strip_0x

ECDSA_PAYLOAD_BYTES = 32
EDDSA_MIN_PAYLOAD_BYTES = 32
EDDSA_MAX_PAYLOAD_BYTES = 1232


class SignatureScheme(str, Enum):
    """Signature scheme of a domain; values are the ``payload_v2`` tags."""

    ECDSA = "Ecdsa"
    EDDSA = "Eddsa"

    @property
    def response_tag(self) -> str:
        """``scheme`` tag the contract puts on responses for this scheme."""
        return "Secp256k1" if self is SignatureScheme.ECDSA else "Ed25519"


# =============================================================================
# Request
# =============================================================================

class SignRequest(BaseModel):
    """
    Caller-facing sign request.

    ``message`` is the hex payload: a 32-byte hash for ECDSA, a 32..1232 byte
    message for EdDSA. Bytes are accepted and hex-encoded. Length and content
    checks are done by ``MpcContract.build_sign_args`` so that failures
    surface as ``ValidationError`` before anything is submitted.
    """
    path: str = Field(description="Derivation path")
    message: str = Field(description="Hex payload to sign")
    scheme: SignatureScheme = Field(default=SignatureScheme.ECDSA, description="Signature scheme")
    domain_id: Optional[int] = Field(default=None, description="Contract domain; defaults per scheme")

    model_config = {"populate_by_name": True}

    @field_validator("message", mode="before")
    @classmethod
    def _hex_encode_bytes(cls, v: Any) -> Any:
        if isinstance(v, (bytes, bytearray)):
            return bytes(v).hex()
        return v


class SignRequestArgs(BaseModel):
    """Validated ``sign`` arguments as the contract expects them."""
    domain_id: int = Field(ge=0)
    path: str
    payload_v2: Dict[str, str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to contract call arguments."""
        return {
            "request": {
                "domain_id": self.domain_id,
                "path": self.path,
                "payload_v2": dict(self.payload_v2),
            }
        }


# =============================================================================
# Response
# =============================================================================

def _check_hex(value: str, size: int, name: str) -> str:
    clean = strip_0x(value)
    if not is_hex(clean) or len(clean) != size * 2:
        raise ValueError(f"{name} must be {size} bytes of hex")
    return clean


class AffinePoint(BaseModel):
    """Compressed SEC1 point as hex."""
    affine_point: str

    @field_validator("affine_point")
    @classmethod
    def _compressed_point(cls, v: str) -> str:
        clean = _check_hex(v, 33, "affine_point")
        if clean[:2] not in ("02", "03"):
            raise ValueError("affine_point must be a compressed point (02/03 tag)")
        return clean


class Scalar(BaseModel):
    """32-byte big-endian scalar as hex."""
    scalar: str

    @field_validator("scalar")
    @classmethod
    def _scalar(cls, v: str) -> str:
        return _check_hex(v, 32, "scalar")


class Secp256k1SignatureResponse(BaseModel):
    """ECDSA signature as returned by the contract."""
    scheme: Literal["Secp256k1"]
    big_r: AffinePoint
    s: Scalar
    recovery_id: int = Field(ge=0, le=3)


class Ed25519SignatureResponse(BaseModel):
    """EdDSA signature as returned by the contract."""
    scheme: Literal["Ed25519"]
    signature: List[Annotated[int, Field(ge=0, le=255)]] = Field(min_length=64, max_length=64)


SignatureResponse = Annotated[
    Union[Secp256k1SignatureResponse, Ed25519SignatureResponse],
    Field(discriminator="scheme"),
]

signature_response_adapter: TypeAdapter = TypeAdapter(SignatureResponse)


__all__ = [
    "ECDSA_PAYLOAD_BYTES",
    "EDDSA_MIN_PAYLOAD_BYTES",
    "EDDSA_MAX_PAYLOAD_BYTES",
    "SignatureScheme",
    "SignRequest",
    "SignRequestArgs",
    "AffinePoint",
    "Scalar",
    "Secp256k1SignatureResponse",
    "Ed25519SignatureResponse",
    "SignatureResponse",
    "signature_response_adapter",
]
