"""ProofGate SDK - blockchain guardrails for AI agents.

Validate transactions before execution to block wallet drains, infinite
approvals and other unsafe calls.

Example:
    >>> from proofgate import ProofGate
    >>> pg = ProofGate(api_key="pg_your_key")
    >>> result = pg.validate(sender=agent_wallet, to=contract, data=calldata)
    >>> if not result.safe:
    ...     print(f"Blocked: {result.reason}")
"""

from .client import AsyncProofGate, ProofGate, is_transaction_safe, is_transaction_safe_async
from .config import ProofGateConfig
from .types import (
    AgentCheckResponse,
    AgentRegistration,
    AgentStats,
    EvidenceAgent,
    EvidenceProof,
    EvidenceResponse,
    EvidenceResult,
    EvidenceTransaction,
    Severity,
    TrustTier,
    UsageResponse,
    ValidateRequest,
    ValidateResponse,
    ValidationCheck,
    ValidationStatus,
    VerificationStatus,
)
from .exceptions import (
    APIError,
    ConfigurationError,
    ErrorCode,
    MalformedResponseError,
    NetworkError,
    ProofGateError,
    RequestTimeoutError,
    ValidationFailedError,
)

__version__ = "0.1.0"

__all__ = [
    "ProofGate",
    "AsyncProofGate",
    "ProofGateConfig",
    "is_transaction_safe",
    "is_transaction_safe_async",
    "ValidateRequest",
    "ValidateResponse",
    "ValidationCheck",
    "ValidationStatus",
    "Severity",
    "AgentCheckResponse",
    "AgentStats",
    "AgentRegistration",
    "VerificationStatus",
    "TrustTier",
    "EvidenceResponse",
    "EvidenceTransaction",
    "EvidenceResult",
    "EvidenceAgent",
    "EvidenceProof",
    "UsageResponse",
    "ErrorCode",
    "ProofGateError",
    "ConfigurationError",
    "ValidationFailedError",
    "APIError",
    "NetworkError",
    "RequestTimeoutError",
    "MalformedResponseError",
]
