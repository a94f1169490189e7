"""End-of-call fan-out and the call lifecycle around it."""

from __future__ import annotations

import asyncio

import pytest

from app.domain.artifacts import ClaimEligibility, QuoteEligibility, Sentiment
from app.domain.call import CallState, CallStatus
from app.domain.transcript import Speaker
from app.infra.session_store import create_call
from app.tasks.analysis import fallback_result
from app.usecases.analyze_call import analyze_call
from app.usecases.end_call import end_call, wrap_up_call
from fakes import route_by_schema

ANALYSIS = {
    "summary": "Customer reported a rear-end collision.",
    "sentiment": "Negative",
    "next_actions": ["Open a claim", "Arrange a rental", "Send confirmation"],
}
CLAIM_OK = {"is_accident": True, "has_policy_number": True}
QUOTE_NO = {"has_name": True, "has_dob": False, "has_tenure": False}


def _stored_call(transcript, call_id: str = "call_test") -> CallState:
    state = CallState(call_id=call_id)
    for entry in transcript:
        state.add_entry(entry.speaker, entry.text)
    create_call(state)
    return state


@pytest.mark.asyncio
async def test_three_requests_in_flight_together(client, sdk, accident_transcript) -> None:
    started: list[str] = []
    all_started = asyncio.Event()

    def _gate(name: str, body: dict):
        async def _reply() -> dict:
            started.append(name)
            if len(started) == 3:
                all_started.set()
            # Only resolves if the other two were issued before this one finished.
            await asyncio.wait_for(all_started.wait(), timeout=2)
            return body
        return _reply

    sdk.chat.completions.create = route_by_schema({
        "conversation_analysis": _gate("analysis", ANALYSIS),
        "claim_eligibility": _gate("claim", CLAIM_OK),
        "quote_eligibility": _gate("quote", QUOTE_NO),
    })

    wrap_up = await wrap_up_call(client, accident_transcript)

    assert sorted(started) == ["analysis", "claim", "quote"]
    assert sdk.chat.completions.create.await_count == 3
    assert wrap_up.analysis.sentiment is Sentiment.NEGATIVE
    assert wrap_up.claim_eligibility.eligible
    assert wrap_up.quote_eligibility == QuoteEligibility(True, False, False)


@pytest.mark.asyncio
async def test_one_failed_branch_does_not_sink_the_others(
    client, sdk, accident_transcript
) -> None:
    sdk.chat.completions.create = route_by_schema({
        "conversation_analysis": ConnectionError("endpoint unreachable"),
        "claim_eligibility": CLAIM_OK,
        "quote_eligibility": QUOTE_NO,
    })

    wrap_up = await wrap_up_call(client, accident_transcript)

    assert wrap_up.analysis == fallback_result()
    assert wrap_up.claim_eligibility == ClaimEligibility(True, True)
    assert wrap_up.quote_eligibility.has_name


@pytest.mark.asyncio
async def test_notes_reach_the_analysis_prompt_only(client, sdk, accident_transcript) -> None:
    sdk.chat.completions.create = route_by_schema({
        "conversation_analysis": ANALYSIS,
        "claim_eligibility": CLAIM_OK,
        "quote_eligibility": QUOTE_NO,
    })

    await wrap_up_call(client, accident_transcript, "Customer sounded shaken.")

    prompts = {
        call.kwargs["response_format"]["json_schema"]["name"]: call.kwargs["messages"][-1]["content"]
        for call in sdk.chat.completions.create.await_args_list
    }
    assert "Customer sounded shaken." in prompts["conversation_analysis"]
    assert "Customer sounded shaken." not in prompts["claim_eligibility"]


@pytest.mark.asyncio
async def test_end_call_stores_wrap_up_and_is_idempotent(
    client, sdk, accident_transcript
) -> None:
    state = _stored_call(accident_transcript)
    sdk.chat.completions.create = route_by_schema({
        "conversation_analysis": ANALYSIS,
        "claim_eligibility": CLAIM_OK,
        "quote_eligibility": QUOTE_NO,
    })

    first = await end_call(client, state.call_id)
    second = await end_call(client, state.call_id)

    assert first["status"] == "completed"
    assert first["wrap_up"]["claim_eligibility"] == CLAIM_OK
    assert second == first
    assert sdk.chat.completions.create.await_count == 3
    assert state.status is CallStatus.COMPLETED
    assert state.analysis.summary == ANALYSIS["summary"]


@pytest.mark.asyncio
async def test_end_call_with_greeting_only_skips_eligibility_requests(client, sdk) -> None:
    state = CallState(call_id="call_short")
    state.add_entry(Speaker.AGENT, "Thank you for calling.")
    create_call(state)
    sdk.chat.completions.create = route_by_schema({"conversation_analysis": ANALYSIS})

    result = await end_call(client, state.call_id)

    assert result["wrap_up"]["claim_eligibility"] == {
        "is_accident": False,
        "has_policy_number": False,
    }
    assert result["wrap_up"]["quote_eligibility"] == {
        "has_name": False,
        "has_dob": False,
        "has_tenure": False,
    }
    assert sdk.chat.completions.create.await_count == 1


@pytest.mark.asyncio
async def test_end_unknown_call(client) -> None:
    assert await end_call(client, "call_missing") == {"error": "call_not_found"}


@pytest.mark.asyncio
async def test_cancelled_wrap_up_reopens_call(client, sdk, accident_transcript) -> None:
    state = _stored_call(accident_transcript)
    in_flight = asyncio.Event()

    async def _hang(**kwargs):
        in_flight.set()
        await asyncio.sleep(10)

    sdk.chat.completions.create.side_effect = _hang

    task = asyncio.create_task(end_call(client, state.call_id))
    await asyncio.wait_for(in_flight.wait(), timeout=2)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert state.status is CallStatus.ACTIVE
    assert state.analysis is None

    sdk.chat.completions.create = route_by_schema({
        "conversation_analysis": ANALYSIS,
        "claim_eligibility": CLAIM_OK,
        "quote_eligibility": QUOTE_NO,
    })
    retry = await end_call(client, state.call_id)

    assert retry["status"] == "completed"
    assert retry["wrap_up"]["claim_eligibility"] == CLAIM_OK
    assert state.status is CallStatus.COMPLETED


@pytest.mark.asyncio
async def test_reanalysis_rejected_while_wrapping_up(client, sdk, accident_transcript) -> None:
    state = _stored_call(accident_transcript)
    state.status = CallStatus.ENDING

    result = await analyze_call(client, state.call_id)

    assert result["error"] == "call_ending"
    assert state.analysis is None
    sdk.chat.completions.create.assert_not_awaited()
