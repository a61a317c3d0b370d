"""Client configuration."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://www.proofgate.xyz/api"
DEFAULT_CHAIN_ID = 56  # BSC mainnet
DEFAULT_TIMEOUT_MS = 30_000
API_KEY_PREFIX = "pg_"


class ProofGateConfig(BaseModel):
    """
    Client-wide defaults, fixed for the lifetime of a client.

    The API key is checked by the client rather than here, so that a missing
    or malformed key surfaces as a ProofGateError with a stable code.

    Attributes:
        api_key: API key from the ProofGate dashboard (starts with ``pg_``).
        base_url: Base URL of the API.
        chain_id: Chain used when a request does not name one.
        guardrail_id: Guardrail used when a request does not name one.
        timeout: Per-request timeout in milliseconds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    chain_id: int = DEFAULT_CHAIN_ID
    guardrail_id: str | None = None
    timeout: Annotated[int, Field(gt=0)] = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000
