"""
Evaluation runner: plays scripted calls through the wrap-up pipeline.

Usage:
    cd backend
    API_KEY=... python -m app.evals.run_evals

For each scenario the end-of-call fan-out runs against the live endpoint,
the eligibility gates are checked against expectations, and the claim or
quote task runs when its gate is expected to open.  Prints a report and
exits non-zero on any failure.
"""

from __future__ import annotations

import asyncio
import sys

from app.core.errors import AssistError
from app.core.logging import setup_logging
from app.core.settings import settings
from app.evals.scenarios import SCENARIOS, Scenario
from app.infra.providers.gemini import GeminiClient
from app.tasks.claims import ERROR_MARKER, process_accident_claim
from app.tasks.quotes import generate_quote
from app.usecases.end_call import wrap_up_call


async def run_scenario(client: GeminiClient, scenario: Scenario) -> tuple[bool, list[str]]:
    """
    Run a single scenario and return (passed, list_of_failure_messages).
    """
    failures: list[str] = []

    wrap_up = await wrap_up_call(client, scenario.transcript, call_id=scenario.name)

    sentiment = wrap_up.analysis.sentiment.value
    if sentiment not in scenario.allowed_sentiments:
        failures.append(
            f"Sentiment: expected one of {scenario.allowed_sentiments}, got '{sentiment}'"
        )

    claim_ok = wrap_up.claim_eligibility.eligible
    if claim_ok != scenario.expect_claim_eligible:
        failures.append(
            f"Claim eligibility: expected {scenario.expect_claim_eligible}, "
            f"got {wrap_up.claim_eligibility.to_dict()}"
        )

    quote_ok = wrap_up.quote_eligibility.eligible
    if quote_ok != scenario.expect_quote_eligible:
        failures.append(
            f"Quote eligibility: expected {scenario.expect_quote_eligible}, "
            f"got {wrap_up.quote_eligibility.to_dict()}"
        )

    if scenario.expect_claim_eligible and claim_ok:
        claim = await process_accident_claim(client, scenario.transcript, call_id=scenario.name)
        if claim.policy_number in (None, ERROR_MARKER):
            failures.append(f"Claim extraction: policy number missing ({claim.policy_number!r})")

    if scenario.expect_quote_eligible and quote_ok:
        try:
            quote = await generate_quote(client, scenario.transcript, call_id=scenario.name)
        except AssistError as e:
            failures.append(f"Quote generation raised: {e}")
        else:
            if quote.annual_premium <= 0 or quote.monthly_premium <= 0:
                failures.append(
                    f"Quote premiums not positive: {quote.monthly_premium}/{quote.annual_premium}"
                )

    return len(failures) == 0, failures


async def main():
    setup_logging("WARNING")
    client = GeminiClient.from_settings(settings)

    print("=" * 60)
    print("Agent Assist Evaluation Harness")
    print(f"Model: {settings.llm_model}")
    print("=" * 60)
    print()

    passed_count = 0
    total = len(SCENARIOS)

    for scenario in SCENARIOS:
        print(f"--- {scenario.name}: {scenario.description}")

        ok, failures = await run_scenario(client, scenario)

        if ok:
            print("  PASS")
            passed_count += 1
        else:
            print("  FAIL:")
            for f in failures:
                print(f"    - {f}")
        print()

    print("=" * 60)
    print(f"Results: {passed_count}/{total} passed")
    print("=" * 60)

    if passed_count < total:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
