#!/usr/bin/env python3
"""Basic usage example for the ProofGate SDK.

This example demonstrates:
- Validating a transaction before execution
- Using validate_or_throw() as an execution gate
- Checking an agent's trust score
- Looking up evidence and usage

Run with: PROOFGATE_API_KEY=pg_your_key python examples/basic_usage.py
"""

import os

from proofgate import ProofGate, ProofGateError, ValidationFailedError

AGENT_WALLET = "0x1234567890123456789012345678901234567890"
TOKEN_CONTRACT = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
# transfer(address,uint256) with empty arguments, for illustration only
CALLDATA = "0xa9059cbb"


def main():
    """Run basic SDK operations."""
    # The host process owns the secret; the SDK never reads the environment itself.
    pg = ProofGate(api_key=os.environ["PROOFGATE_API_KEY"], chain_id=56)

    with pg:
        print("Validating transaction...")
        result = pg.validate(sender=AGENT_WALLET, to=TOKEN_CONTRACT, data=CALLDATA)
        print(f"  Validation ID: {result.validation_id}")
        print(f"  Status: {result.status}  Safe: {result.safe}")
        print(f"  Reason: {result.reason}")
        for check in result.checks:
            mark = "ok" if check.passed else "FAILED"
            print(f"    [{check.severity.value}] {check.name}: {mark} - {check.details}")

        print("\nGating execution with validate_or_throw()...")
        try:
            pg.validate_or_throw(sender=AGENT_WALLET, to=TOKEN_CONTRACT, data=CALLDATA)
            print("  Safe - hand the transaction to the signer")
        except ValidationFailedError as e:
            print(f"  Blocked: {e.message}")
            print(f"  Evidence: {e.validation_result.evidence_uri}")

        print("\nChecking agent trust...")
        agent = pg.check_agent(AGENT_WALLET)
        print(f"  {agent.tier_emoji} {agent.tier_name} - trust score {agent.trust_score}/100")
        print(f"  {agent.recommendation}")

        print("\nFetching evidence...")
        evidence = pg.get_evidence(result.validation_id)
        print(f"  Recorded on-chain: {evidence.proof.on_chain_recorded}")

        usage = pg.get_usage(AGENT_WALLET)
        print(f"\nUsage: {usage.validations_used}/{usage.validations_limit} validations ({usage.tier})")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
    except ProofGateError as e:
        print(f"\nError [{e.code.value}]: {e.message}")
