"""
MPC signer contract client.

Wraps the NEAR Chain Signatures contract: read-only key queries, and the
``sign`` call that asks the MPC network for a signature under a key derived
for the calling account.

A sign call goes through these states:

    BUILDING -> VALIDATING -> SUBMITTED -> COMPLETED | REJECTED
                 VALIDATING -> REJECTED

Everything before SUBMITTED is local and free. A request refused during
validation is logged as REJECTED at DEBUG; a rejection after submission is
logged at WARNING. Once submitted, the call is
paid for and may not be retried safely: there is no retry and no
deduplication here, and any error raised after submission has
``cost_incurred`` set.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..crypto.ed25519 import NEAR_ED25519_PREFIX, Ed25519PublicKey
from ..crypto.secp256k1 import CURVE_ORDER, NEAR_SECP256K1_PREFIX, CurvePoint, Secp256k1Signature
from ..keys.derivation import DerivedKey
from ..runtime.encoding import decode_base64_json, is_hex, strip_0x
from ..runtime.errors import (
    ContractRejectedError,
    MalformedKeyError,
    MalformedResponseError,
    ValidationError,
)
from ..transport.base import Transport
from .config import ContractConfig
from .types import (
    ECDSA_PAYLOAD_BYTES,
    EDDSA_MAX_PAYLOAD_BYTES,
    EDDSA_MIN_PAYLOAD_BYTES,
    Ed25519SignatureResponse,
    Secp256k1SignatureResponse,
    SignatureResponse,
    SignatureScheme,
    SignRequest,
    SignRequestArgs,
    signature_response_adapter,
)

logger = logging.getLogger(__name__)

MPCSignature = Union[Secp256k1Signature, bytes]


class SignState(Enum):
    """Lifecycle of a sign call."""

    BUILDING = "building"
    VALIDATING = "validating"
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    REJECTED = "rejected"


class MpcContract:
    """
    Client for the NEAR MPC signer contract.

    Example:
        ```python
        contract = MpcContract(transport, ContractConfig(network_id="testnet"))

        root = DerivedKey.from_near(contract.public_key())
        child = root.derive("alice.testnet", "ethereum-1")

        signature = contract.sign(path="ethereum-1", message=msg_hash.hex())
        assert signature.verify(msg_hash, child.public_point)
        ```
    """

    def __init__(self, transport: Transport, config: Optional[ContractConfig] = None):
        """
        Initialize the contract client.

        Args:
            transport: Transport used for view and function calls
            config: Contract configuration (mainnet defaults when omitted)
        """
        self.transport = transport
        self.config = config or ContractConfig()

    @property
    def contract_id(self) -> str:
        return self.config.resolved_contract_id

    # =========================================================================
    # View methods
    # =========================================================================

    def public_key(self, domain_id: Optional[int] = None) -> str:
        """
        Get the root public key of a domain.

        Args:
            domain_id: Domain to query; the contract's default when omitted

        Returns:
            Key in NEAR wire format (``secp256k1:...`` or ``ed25519:...``)
        """
        args: Dict[str, Any] = {}
        if domain_id is not None:
            args["domain_id"] = domain_id
        return self.transport.view(self.contract_id, "public_key", args)

    def derived_public_key(self, predecessor: str, path: str, domain_id: Optional[int] = None) -> str:
        """
        Get the public key the contract derives for ``(predecessor, path)``.

        ``domain_id`` is always sent; when omitted, the configured ECDSA
        domain is used.

        Args:
            predecessor: Account that will call ``sign``
            path: Derivation path
            domain_id: Domain to derive in

        Returns:
            Key in NEAR wire format
        """
        if domain_id is None:
            domain_id = self.config.domain_for(SignatureScheme.ECDSA)
        return self.transport.view(self.contract_id, "derived_public_key", {
            "predecessor": predecessor,
            "path": path,
            "domain_id": domain_id,
        })

    def latest_key_version(self) -> int:
        """Get the latest key version of the contract."""
        return int(self.transport.view(self.contract_id, "latest_key_version", {}))

    def derived_key(self, predecessor: str, path: str, domain_id: Optional[int] = None) -> DerivedKey:
        """
        Fetch a derived secp256k1 key as a public-only ``DerivedKey``.

        Raises:
            MalformedKeyError: If the domain does not hold a secp256k1 key
        """
        wire = self.derived_public_key(predecessor, path, domain_id)
        if not isinstance(wire, str) or not wire.startswith(NEAR_SECP256K1_PREFIX):
            raise MalformedKeyError(f"Expected a secp256k1 key, got {wire!r}")
        return DerivedKey.from_near(wire)

    def scheme_for_domain(self, domain_id: int) -> SignatureScheme:
        """
        Probe which scheme a domain signs with, from its root key prefix.

        Raises:
            MalformedResponseError: If the key prefix is not recognized
        """
        wire = self.public_key(domain_id)
        if isinstance(wire, str):
            if wire.startswith(NEAR_SECP256K1_PREFIX):
                return SignatureScheme.ECDSA
            if wire.startswith(NEAR_ED25519_PREFIX):
                return SignatureScheme.EDDSA
        err = MalformedResponseError(f"Unknown key type for domain {domain_id}: {wire!r}")
        err.cost_incurred = False
        raise err

    @staticmethod
    def parse_public_key(wire: str) -> Union[CurvePoint, Ed25519PublicKey]:
        """
        Parse a NEAR wire key of either curve.

        Raises:
            MalformedKeyError: On an unknown prefix or a malformed key
        """
        if isinstance(wire, str) and wire.startswith(NEAR_SECP256K1_PREFIX):
            return CurvePoint.from_near(wire)
        if isinstance(wire, str) and wire.startswith(NEAR_ED25519_PREFIX):
            return Ed25519PublicKey.from_near(wire)
        raise MalformedKeyError(f"Unknown key prefix: {wire!r}")

    # =========================================================================
    # Sign
    # =========================================================================

    def build_sign_args(self, request: SignRequest) -> Dict[str, Any]:
        """
        Validate a sign request and build the ``sign`` call arguments.

        Args:
            request: Sign request

        Returns:
            ``{"request": {"domain_id", "path", "payload_v2"}}``

        Raises:
            ValidationError: If the path, message or domain is invalid
        """
        logger.debug(f"Sign state {SignState.BUILDING.name}: path={request.path!r} scheme={request.scheme.name}")
        domain_id = request.domain_id
        if domain_id is None:
            domain_id = self.config.domain_for(request.scheme)

        logger.debug(f"Sign state {SignState.VALIDATING.name}")
        try:
            message = self._validate_sign_request(request, domain_id)
        except ValidationError as e:
            logger.debug(f"Sign state {SignState.REJECTED.name}: {e}")
            raise

        args = SignRequestArgs(
            domain_id=domain_id,
            path=request.path,
            payload_v2={request.scheme.value: message.lower()},
        )
        return args.to_dict()

    @staticmethod
    def _validate_sign_request(request: SignRequest, domain_id: int) -> str:
        """Check a sign request and return its message hex without ``0x``."""
        if not request.path or not request.path.strip():
            raise ValidationError("Path must not be empty", field="path")

        message = strip_0x(request.message)
        if not message:
            raise ValidationError("Message must not be empty", field="message")
        if not is_hex(message):
            raise ValidationError("Message must be even-length hex", field="message")

        size = len(message) // 2
        if request.scheme is SignatureScheme.ECDSA:
            if size != ECDSA_PAYLOAD_BYTES:
                raise ValidationError(
                    f"ECDSA payload must be exactly {ECDSA_PAYLOAD_BYTES} bytes, got {size}",
                    field="message",
                    details={"length": size},
                )
        elif not EDDSA_MIN_PAYLOAD_BYTES <= size <= EDDSA_MAX_PAYLOAD_BYTES:
            raise ValidationError(
                f"EdDSA payload must be {EDDSA_MIN_PAYLOAD_BYTES}-{EDDSA_MAX_PAYLOAD_BYTES} bytes, got {size}",
                field="message",
                details={"length": size},
            )

        if domain_id < 0:
            raise ValidationError(f"Domain id must be >= 0, got {domain_id}", field="domain_id")

        return message

    def sign(
        self,
        request: Optional[SignRequest] = None,
        *,
        path: Optional[str] = None,
        message: Union[str, bytes, None] = None,
        scheme: SignatureScheme = SignatureScheme.ECDSA,
        domain_id: Optional[int] = None,
    ) -> MPCSignature:
        """
        Ask the MPC network for a signature.

        Pass either a ``SignRequest`` or its fields as keyword arguments.

        Args:
            request: Sign request
            path: Derivation path
            message: Hex (or bytes) payload
            scheme: Signature scheme
            domain_id: Contract domain; defaults per scheme

        Returns:
            ``Secp256k1Signature`` for ECDSA, 64 signature bytes for EdDSA

        Raises:
            ValidationError: Before submission; nothing was sent
            ContractRejectedError: The contract failed the call
            MalformedResponseError: The call executed but returned garbage
            TransportError: Passed through from the transport
        """
        if request is None:
            try:
                request = SignRequest(path=path, message=message, scheme=scheme, domain_id=domain_id)
            except PydanticValidationError as e:
                logger.debug(f"Sign state {SignState.REJECTED.name}: invalid sign request")
                raise ValidationError(f"Invalid sign request: {e}", cause=e)

        args = self.build_sign_args(request)
        inner = args["request"]

        logger.info(
            f"Submitting sign request to {self.contract_id}: path={inner['path']!r} domain={inner['domain_id']}"
        )
        logger.debug(f"Sign state {SignState.SUBMITTED.name}")
        outcome = self.transport.call_function(
            self.contract_id,
            "sign",
            args,
            gas=self.config.sign_gas,
            deposit=self.config.sign_deposit,
        )

        try:
            response = self.parse_signature_response(outcome)
        except (ContractRejectedError, MalformedResponseError) as e:
            logger.warning(f"Sign state {SignState.REJECTED.name}: {e}")
            raise

        signature = self.convert_signature(response)
        logger.debug(f"Sign state {SignState.COMPLETED.name}")
        logger.info(f"Sign request completed: path={inner['path']!r} scheme={response.scheme}")
        return signature

    # =========================================================================
    # Response handling
    # =========================================================================

    @staticmethod
    def parse_signature_response(outcome: Any) -> SignatureResponse:
        """
        Extract the signature payload from a final execution outcome.

        Args:
            outcome: Result of ``Transport.call_function``

        Returns:
            Validated ``Secp256k1SignatureResponse`` or ``Ed25519SignatureResponse``

        Raises:
            ContractRejectedError: If ``status.Failure`` is set
            MalformedResponseError: If the payload is missing or invalid
        """
        status = outcome.get("status") if isinstance(outcome, dict) else None
        if not isinstance(status, dict):
            raise MalformedResponseError("Outcome has no status", details={"outcome": outcome})

        if "Failure" in status:
            raise ContractRejectedError(
                f"Sign call failed: {status['Failure']}",
                details={"failure": status["Failure"]},
            )

        success_value = status.get("SuccessValue")
        if not success_value:
            raise MalformedResponseError("No success value in transaction result", details={"status": status})

        try:
            payload = decode_base64_json(success_value)
        except ValueError as e:
            raise MalformedResponseError(f"Failed to decode signature response: {e}", cause=e)

        try:
            return signature_response_adapter.validate_python(payload)
        except PydanticValidationError as e:
            scheme = payload.get("scheme") if isinstance(payload, dict) else None
            raise MalformedResponseError(
                f"Invalid signature response (scheme {scheme!r})",
                details={"payload": payload},
                cause=e,
            )

    @staticmethod
    def convert_signature(response: SignatureResponse) -> MPCSignature:
        """
        Convert a parsed response into a native signature.

        Raises:
            MalformedResponseError: If the values are not a valid signature
        """
        if isinstance(response, Secp256k1SignatureResponse):
            # Drop the 02/03 tag; R.x may exceed n, so reduce it
            r = int(response.big_r.affine_point[2:], 16) % CURVE_ORDER
            s = int(response.s.scalar, 16)
            try:
                return Secp256k1Signature(r, s, response.recovery_id)
            except ValueError as e:
                raise MalformedResponseError(f"Invalid ECDSA signature values: {e}", cause=e)
        if isinstance(response, Ed25519SignatureResponse):
            return bytes(response.signature)
        raise MalformedResponseError(f"Unsupported signature scheme: {type(response).__name__}")


__all__ = [
    "MPCSignature",
    "SignState",
    "MpcContract",
]
