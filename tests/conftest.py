"""pytest configuration for proofgate tests."""

import json
import os

import httpx
import pytest


API_KEY = "pg_test_key"
BASE_URL = "https://api.proofgate.test/api"

SENDER = "0x1234567890123456789012345678901234567890"
TARGET = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
CALLDATA = "0xa9059cbb"


# Skip marker for tests that talk to the real API
requires_api = pytest.mark.skipif(
    not os.environ.get("PROOFGATE_API_KEY"),
    reason="Requires a ProofGate API key (set PROOFGATE_API_KEY)",
)


def validate_payload(**overrides) -> dict:
    """A well-formed /validate response body."""
    payload = {
        "validationId": "val_abc123",
        "result": "PASS",
        "reason": "All checks passed",
        "evidenceUri": "https://www.proofgate.xyz/evidence/val_abc123",
        "safe": True,
        "checks": [
            {
                "name": "allowed_contracts",
                "passed": True,
                "details": "Target is whitelisted",
                "severity": "info",
            },
            {
                "name": "daily_limit",
                "passed": True,
                "details": "0 of 10 BNB spent today",
                "severity": "warning",
            },
        ],
        "chainId": 56,
        "authenticated": True,
        "tier": "pro",
        "backend": "evidence-service",
        "onChainRecorded": False,
    }
    payload.update(overrides)
    return payload


def agent_payload(**overrides) -> dict:
    payload = {
        "wallet": SENDER,
        "isRegistered": True,
        "verificationStatus": "verified",
        "verificationMessage": "Agent is verified",
        "trustScore": 87,
        "tier": "gold",
        "tierEmoji": "🥇",
        "tierName": "Gold",
        "stats": {
            "totalValidations": 120,
            "passedValidations": 114,
            "failedValidations": 6,
            "passRate": 95.0,
        },
        "registration": {"name": "trader-bot", "registeredAt": "2026-01-02T03:04:05Z"},
        "recommendation": "Safe to interact",
    }
    payload.update(overrides)
    return payload


def evidence_payload(**overrides) -> dict:
    payload = {
        "validationId": "val_abc123",
        "timestamp": "2026-02-01T12:00:00Z",
        "chainId": 56,
        "transaction": {"from": SENDER, "to": TARGET, "data": CALLDATA, "value": "0"},
        "result": {"status": "FAIL", "reason": "Unlimited approval", "safe": False},
        "guardrailId": None,
        "agent": {"wallet": SENDER, "name": "trader-bot", "verified": True},
        "proof": {
            "authenticated": True,
            "onChainRecorded": True,
            "batchId": "batch_42",
            "recordedAt": "2026-02-01T12:05:00Z",
        },
    }
    payload.update(overrides)
    return payload


def usage_payload(**overrides) -> dict:
    payload = {
        "wallet": SENDER,
        "tier": "free",
        "validations_used": 12,
        "validations_limit": 100,
        "daily_spent_wei": "1500000000000000000",
    }
    payload.update(overrides)
    return payload


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers with a fixed response and keeps every request."""

    def __init__(self, json_data=None, status_code: int = 200):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(status_code, json=json_data)

        super().__init__(handler)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def base_url():
    return BASE_URL
