"""
End-call use case.

Runs the end-of-call fan-out: conversation analysis, claim eligibility and
quote eligibility are requested concurrently, and the wrap-up is returned
once all three have resolved.  Each branch handles its own failure and
resolves to its fallback, so one bad branch never sinks the others.

Idempotent: ending a completed call returns the stored wrap-up.
"""

from __future__ import annotations

import asyncio

from app.core.logging import logger
from app.domain.artifacts import CallWrapUp
from app.domain.call import CallStatus
from app.domain.transcript import Transcript
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.tasks.analysis import analyze_conversation
from app.tasks.claims import check_claim_eligibility
from app.tasks.quotes import check_quote_eligibility


async def wrap_up_call(
    client: GeminiClient,
    transcript: Transcript,
    notes: str | None = None,
    *,
    call_id: str = "",
) -> CallWrapUp:
    """Fan out the three post-call requests and join their results."""
    analysis, claim_eligibility, quote_eligibility = await asyncio.gather(
        analyze_conversation(client, transcript, notes, call_id=call_id),
        check_claim_eligibility(client, transcript, call_id=call_id),
        check_quote_eligibility(client, transcript, call_id=call_id),
    )
    return CallWrapUp(
        analysis=analysis,
        claim_eligibility=claim_eligibility,
        quote_eligibility=quote_eligibility,
    )


async def end_call(client: GeminiClient, call_id: str) -> dict:
    """
    Stop the call, run the wrap-up and store it.

    Returns dict with status and the wrap-up (see CallWrapUp.to_dict), or
    a dict with an "error" key.
    """
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}

    if state.status is CallStatus.COMPLETED and state.analysis is not None:
        return {"status": state.status.value, "wrap_up": _stored_wrap_up(state)}
    if state.status is CallStatus.ENDING:
        return {"error": "call_ending", "detail": "The call is already being wrapped up."}

    state.status = CallStatus.ENDING
    try:
        wrap_up = await wrap_up_call(
            client, state.transcript_snapshot(), state.notes, call_id=call_id
        )
    except BaseException:
        # Cancelled or failed mid-fan-out: reopen so the call can be ended again.
        state.status = CallStatus.ACTIVE
        logger.warning("Call %s: wrap-up interrupted, call reopened", call_id)
        raise
    state.apply_wrap_up(wrap_up)
    state.status = CallStatus.COMPLETED

    logger.info(
        "Call %s ended: %d entries, sentiment=%s, claim_eligible=%s, quote_eligible=%s",
        call_id,
        len(state.transcript),
        wrap_up.analysis.sentiment.value,
        wrap_up.claim_eligibility.eligible,
        wrap_up.quote_eligibility.eligible,
    )

    return {"status": state.status.value, "wrap_up": wrap_up.to_dict()}


def _stored_wrap_up(state) -> dict:
    return CallWrapUp(
        analysis=state.analysis,
        claim_eligibility=state.claim_eligibility,
        quote_eligibility=state.quote_eligibility,
    ).to_dict()
