"""Pydantic data models for the ProofGate SDK.

Attribute names are snake_case; the camelCase names used on the wire are
kept as aliases, so ``model_dump(by_alias=True)`` reproduces the service
payload and ``model_validate`` accepts it as-is.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValidationStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    PENDING = "PENDING"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    REGISTERED = "registered"
    UNVERIFIED = "unverified"
    UNKNOWN = "unknown"


class TrustTier(str, Enum):
    DIAMOND = "diamond"
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    UNVERIFIED = "unverified"


class WireModel(BaseModel):
    """Read-only value returned by the service.

    Unknown fields are kept so newer service payloads pass through intact.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


class ValidateRequest(BaseModel):
    """A transaction to be checked before it is signed and sent.

    ``sender``, ``to`` and ``data`` are opaque to the client: only their
    presence is checked. Chain-specific correctness is the service's job.

    Attributes:
        sender: Sender address, the agent's wallet (wire name ``from``)
        to: Target contract address
        data: Transaction calldata, hex encoded
        value: Value in wei as a decimal string
        guardrail_id: Guardrail to apply, overrides the client default
        chain_id: Chain to validate on, overrides the client default
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    sender: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    data: str = Field(min_length=1)
    value: str = "0"
    guardrail_id: str | None = Field(default=None, alias="guardrailId")
    chain_id: int | None = Field(default=None, alias="chainId")


class ValidationCheck(WireModel):
    """Outcome of one named rule, e.g. ``allowed_contracts`` or ``daily_limit``.

    Severity is informational: the overall verdict is ``ValidateResponse.safe``.
    """

    name: str
    passed: bool
    details: str
    severity: Severity


class ValidateResponse(WireModel):
    """Result of a validation call.

    ``safe`` is the verdict an agent must act on. Do not infer safety from
    ``status``; the service may add statuses beyond PASS/FAIL/PENDING, which
    are kept here as plain strings.
    """

    validation_id: str = Field(alias="validationId")
    status: ValidationStatus | str = Field(alias="result", union_mode="left_to_right")
    reason: str
    evidence_uri: str = Field(alias="evidenceUri")
    safe: bool
    checks: tuple[ValidationCheck, ...]
    chain_id: int = Field(alias="chainId")
    authenticated: bool
    tier: str
    backend: str
    on_chain_recorded: bool = Field(alias="onChainRecorded")


# -----------------------------------------------------------------------------
# Agents
# -----------------------------------------------------------------------------


class AgentStats(WireModel):
    total_validations: int = Field(alias="totalValidations")
    passed_validations: int = Field(alias="passedValidations")
    failed_validations: int = Field(alias="failedValidations")
    pass_rate: float = Field(alias="passRate")


class AgentRegistration(WireModel):
    name: str | None
    registered_at: str = Field(alias="registeredAt")


class AgentCheckResponse(WireModel):
    """Trust and reputation snapshot for a wallet.

    Attributes:
        wallet: Wallet address (lowercase)
        is_registered: Whether the agent is registered with ProofGate
        verification_status: verified, registered, unverified or unknown
        verification_message: Human-readable verification summary
        trust_score: Trust score computed by the service (0-100)
        tier: Trust tier
        tier_emoji: Tier symbol for display
        tier_name: Tier display name
        stats: Validation counts and pass rate
        registration: Registration info, None for unregistered agents
        recommendation: Safety recommendation text
    """

    wallet: str
    is_registered: bool = Field(alias="isRegistered")
    verification_status: VerificationStatus = Field(alias="verificationStatus")
    verification_message: str = Field(alias="verificationMessage")
    trust_score: float = Field(alias="trustScore", ge=0, le=100)
    tier: TrustTier
    tier_emoji: str = Field(alias="tierEmoji")
    tier_name: str = Field(alias="tierName")
    stats: AgentStats
    registration: AgentRegistration | None
    recommendation: str


# -----------------------------------------------------------------------------
# Evidence
# -----------------------------------------------------------------------------


class EvidenceTransaction(WireModel):
    sender: str = Field(alias="from")
    to: str
    data: str
    value: str


class EvidenceResult(WireModel):
    status: ValidationStatus | str = Field(union_mode="left_to_right")
    reason: str
    safe: bool


class EvidenceAgent(WireModel):
    wallet: str
    name: str | None = None
    verified: bool


class EvidenceProof(WireModel):
    authenticated: bool
    on_chain_recorded: bool = Field(alias="onChainRecorded")
    batch_id: str | None = Field(alias="batchId")
    recorded_at: str | None = Field(alias="recordedAt")


class EvidenceResponse(WireModel):
    """Immutable record of a past validation decision."""

    validation_id: str = Field(alias="validationId")
    timestamp: str
    chain_id: int = Field(alias="chainId")
    transaction: EvidenceTransaction
    result: EvidenceResult
    guardrail_id: str | None = Field(alias="guardrailId")
    agent: EvidenceAgent
    proof: EvidenceProof


# -----------------------------------------------------------------------------
# Usage
# -----------------------------------------------------------------------------


class UsageResponse(WireModel):
    """Validation quota and spend for a wallet. This endpoint uses snake_case."""

    wallet: str
    tier: str
    validations_used: int
    validations_limit: int
    daily_spent_wei: str
