"""ProofGate clients for validating agent transactions before execution."""

import asyncio
import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .config import API_KEY_PREFIX, ProofGateConfig
from .exceptions import (
    APIError,
    ConfigurationError,
    ErrorCode,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    ValidationFailedError,
)
from .types import (
    AgentCheckResponse,
    EvidenceResponse,
    UsageResponse,
    ValidateRequest,
    ValidateResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

RequestLike = ValidateRequest | Mapping[str, Any] | None


def _build_config(
    config: ProofGateConfig | Mapping[str, Any] | None,
    options: dict[str, Any],
) -> ProofGateConfig:
    """Merge caller options over the defaults and check the API key.

    The caller's config object is never modified; a new one is returned.
    """
    if isinstance(config, ProofGateConfig):
        data = config.model_dump(exclude_unset=True)
    else:
        data = dict(config or {})
    data.update(options)

    api_key = data.get("api_key")
    if not api_key:
        raise ConfigurationError(
            "API key is required. Get one at https://www.proofgate.xyz/dashboard",
            ErrorCode.MISSING_CREDENTIAL,
        )
    if not isinstance(api_key, str) or not api_key.startswith(API_KEY_PREFIX):
        raise ConfigurationError(
            f'Invalid API key format. Keys start with "{API_KEY_PREFIX}"',
            ErrorCode.INVALID_CREDENTIAL,
        )

    return ProofGateConfig(**data)


def _coerce_request(request: RequestLike, fields: dict[str, Any]) -> ValidateRequest:
    if isinstance(request, ValidateRequest) and not fields:
        return request
    if isinstance(request, ValidateRequest):
        data = request.model_dump(exclude_unset=True)
    else:
        data = dict(request or {})
    data.update(fields)
    return ValidateRequest.model_validate(data)


class _BaseClient:
    """Behavior shared by the sync and async clients.

    Holds the frozen configuration and everything that does not touch the
    network: request bodies, response status mapping and payload decoding.
    """

    def __init__(
        self,
        config: ProofGateConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ):
        self.config = _build_config(config, options)
        self._headers = {
            "Content-Type": "application/json",
            "X-API-Key": self.config.api_key,
        }
        self._timeout = httpx.Timeout(self.config.timeout_seconds)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_url={self.config.base_url!r}, "
            f"chain_id={self.config.chain_id})"
        )

    def _validate_body(self, request: ValidateRequest) -> dict[str, Any]:
        """Build the /validate body, filling in client defaults.

        guardrailId is left out when neither the request nor the client
        names one.
        """
        body: dict[str, Any] = {
            "from": request.sender,
            "to": request.to,
            "data": request.data,
            "value": request.value or "0",
        }
        guardrail_id = request.guardrail_id or self.config.guardrail_id or None
        if guardrail_id is not None:
            body["guardrailId"] = guardrail_id
        body["chainId"] = (
            request.chain_id if request.chain_id is not None else self.config.chain_id
        )
        return body

    @staticmethod
    def _evidence_path(validation_id: str) -> str:
        # The id is a single path segment, so "/" must be escaped too, and
        # "." or ".." must not be collapsed as dot segments.
        if not validation_id:
            raise ValueError("validation_id must be a non-empty string")
        segment = quote(validation_id, safe="")
        if segment in (".", ".."):
            segment = segment.replace(".", "%2E")
        return f"/evidence/{segment}"

    def _handle_response(self, method: str, path: str, response: httpx.Response) -> dict[str, Any]:
        """Decode a response body or raise the matching ProofGateError.

        Raises:
            APIError: Non-success status
            MalformedResponseError: Success status without a JSON object body
        """
        logger.debug("%s %s -> %d", method, path, response.status_code)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = None
            if isinstance(data, dict):
                message = data.get("error") or data.get("message")
            raise APIError(
                str(message) if message else f"HTTP {response.status_code}",
                response.status_code,
            )

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from {method} {path}",
                response.status_code,
            )
        return data

    def _transport_error(
        self, method: str, path: str, exc: BaseException
    ) -> RequestTimeoutError | NetworkError:
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, FutureTimeoutError)):
            logger.warning(
                "%s %s timed out after %dms", method, path, self.config.timeout
            )
            return RequestTimeoutError()
        logger.warning("%s %s failed: %s", method, path, exc)
        return NetworkError(str(exc) or type(exc).__name__)

    @staticmethod
    def _parse(model: type[ModelT], data: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected {model.__name__} payload: {e.error_count()} invalid field(s)"
            ) from e


class ProofGate(_BaseClient):
    """Blocking client for the ProofGate validation API.

    Every call issues exactly one HTTP request. Nothing is retried; failures
    are raised as ProofGateError subclasses and retry policy is left to the
    caller.

    Example:
        >>> pg = ProofGate(api_key="pg_your_key", chain_id=56)
        >>> result = pg.validate(sender=agent_wallet, to=contract, data=calldata)
        >>> if result.safe:
        ...     wallet.send_transaction(to=contract, data=calldata)
        ... else:
        ...     print("Blocked:", result.reason)
    """

    def __init__(
        self,
        config: ProofGateConfig | Mapping[str, Any] | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        **options: Any,
    ):
        """Initialize the client.

        Args:
            config: ProofGateConfig, or a mapping of its fields
            transport: Optional httpx transport replacing the network layer
            **options: ProofGateConfig fields, applied over ``config``

        Raises:
            ConfigurationError: API key missing (MISSING_CREDENTIAL) or not
                starting with ``pg_`` (INVALID_CREDENTIAL)
        """
        super().__init__(config, **options)
        self._client = httpx.Client(
            base_url=self.config.base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=transport,
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close HTTP client."""
        self.close()

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request and handle errors.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Endpoint path, relative to the base URL
            json: JSON body for POST requests
            params: Query parameters

        Returns:
            Response JSON object

        Raises:
            RequestTimeoutError: No response within the configured timeout
            NetworkError: Transport failure
            APIError: Non-success HTTP status
            MalformedResponseError: Body is not a JSON object
        """
        logger.debug("%s %s", method, path)
        # httpx timeouts apply per connect/read/write step, so the whole
        # exchange runs in a worker thread bounded by one deadline.
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="proofgate")
        future = pool.submit(
            self._client.request,
            method=method,
            url=path,
            json=json,
            params=params,
        )
        try:
            response = future.result(timeout=self.config.timeout_seconds)
        except (httpx.HTTPError, FutureTimeoutError) as e:
            future.cancel()
            raise self._transport_error(method, path, e) from e
        finally:
            pool.shutdown(wait=False)

        return self._handle_response(method, path, response)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, request: RequestLike = None, **fields: Any) -> ValidateResponse:
        """Validate a transaction before execution.

        Args:
            request: ValidateRequest, or a mapping of its fields (wire or
                attribute names)
            **fields: ValidateRequest fields, applied over ``request``

        Returns:
            ValidateResponse exactly as returned by the service

        Raises:
            ProofGateError: TIMEOUT, NETWORK_ERROR, API_ERROR or
                MALFORMED_RESPONSE
        """
        body = self._validate_body(_coerce_request(request, fields))
        return self._parse(ValidateResponse, self._request("POST", "/validate", json=body))

    def validate_or_throw(self, request: RequestLike = None, **fields: Any) -> ValidateResponse:
        """Validate and raise if the transaction is unsafe.

        Returns:
            ValidateResponse, only when ``safe`` is true

        Raises:
            ValidationFailedError: ``safe`` is false; the response is
                attached as ``validation_result``
        """
        result = self.validate(request, **fields)
        if not result.safe:
            logger.info("Validation %s blocked: %s", result.validation_id, result.reason)
            raise ValidationFailedError(result)
        return result

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def check_agent(self, wallet: str) -> AgentCheckResponse:
        """Get an agent's trust score and verification status.

        Args:
            wallet: Agent wallet address

        Returns:
            AgentCheckResponse
        """
        data = self._request("GET", "/agents/check", params={"wallet": wallet})
        return self._parse(AgentCheckResponse, data)

    def get_evidence(self, validation_id: str) -> EvidenceResponse:
        """Get the evidence record for a past validation.

        Args:
            validation_id: Validation ID, e.g. ``val_abc123``

        Returns:
            EvidenceResponse
        """
        data = self._request("GET", self._evidence_path(validation_id))
        return self._parse(EvidenceResponse, data)

    def get_usage(self, wallet: str) -> UsageResponse:
        """Get validation usage and daily spend for a wallet."""
        data = self._request("GET", "/validate", params={"wallet": wallet})
        return self._parse(UsageResponse, data)


class AsyncProofGate(_BaseClient):
    """Awaitable client for the ProofGate validation API.

    Same surface as ProofGate. Calls on one instance may run concurrently;
    the client holds no per-call state.

    Example:
        >>> async with AsyncProofGate(api_key="pg_your_key") as pg:
        ...     result = await pg.validate(sender=agent_wallet, to=contract, data=calldata)
    """

    def __init__(
        self,
        config: ProofGateConfig | Mapping[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **options: Any,
    ):
        super().__init__(config, **options)
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request and handle errors.

        The whole exchange runs under one deadline, so a transport that never
        answers is cancelled once the configured timeout elapses.
        """
        logger.debug("%s %s", method, path)
        try:
            response = await asyncio.wait_for(
                self._client.request(
                    method=method,
                    url=path,
                    json=json,
                    params=params,
                ),
                timeout=self.config.timeout_seconds,
            )
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            raise self._transport_error(method, path, e) from e

        return self._handle_response(method, path, response)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    async def validate(self, request: RequestLike = None, **fields: Any) -> ValidateResponse:
        """Validate a transaction before execution. See ProofGate.validate."""
        body = self._validate_body(_coerce_request(request, fields))
        data = await self._request("POST", "/validate", json=body)
        return self._parse(ValidateResponse, data)

    async def validate_or_throw(
        self, request: RequestLike = None, **fields: Any
    ) -> ValidateResponse:
        """Validate and raise ValidationFailedError if the transaction is unsafe."""
        result = await self.validate(request, **fields)
        if not result.safe:
            logger.info("Validation %s blocked: %s", result.validation_id, result.reason)
            raise ValidationFailedError(result)
        return result

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def check_agent(self, wallet: str) -> AgentCheckResponse:
        data = await self._request("GET", "/agents/check", params={"wallet": wallet})
        return self._parse(AgentCheckResponse, data)

    async def get_evidence(self, validation_id: str) -> EvidenceResponse:
        data = await self._request("GET", self._evidence_path(validation_id))
        return self._parse(EvidenceResponse, data)

    async def get_usage(self, wallet: str) -> UsageResponse:
        data = await self._request("GET", "/validate", params={"wallet": wallet})
        return self._parse(UsageResponse, data)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def is_transaction_safe(api_key: str, request: RequestLike = None, **fields: Any) -> bool:
    """Validate one transaction with a throwaway client and return the verdict.

    Example:
        >>> is_transaction_safe("pg_xxx", sender=agent, to=contract, data=calldata)
        True
    """
    with ProofGate(api_key=api_key) as pg:
        return pg.validate(request, **fields).safe


async def is_transaction_safe_async(
    api_key: str, request: RequestLike = None, **fields: Any
) -> bool:
    """Async variant of is_transaction_safe."""
    async with AsyncProofGate(api_key=api_key) as pg:
        result = await pg.validate(request, **fields)
    return result.safe
