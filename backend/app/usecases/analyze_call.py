"""
Analyze-call use case.

Re-runs the conversation analysis on demand, typically after the agent
edits the notes post-call.  Only the analysis is refreshed; the
eligibility results from the wrap-up stay as they were.
"""

from __future__ import annotations

from app.core.logging import logger
from app.domain.call import CallStatus
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.tasks.analysis import analyze_conversation


async def analyze_call(client: GeminiClient, call_id: str) -> dict:
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}
    if state.status is CallStatus.ENDING:
        return {"error": "call_ending", "detail": "The call is still being wrapped up."}

    analysis = await analyze_conversation(
        client, state.transcript_snapshot(), state.notes, call_id=call_id
    )
    state.analysis = analysis
    logger.info("Call %s: analysis refreshed (%s)", call_id, analysis.sentiment.value)
    return {"status": state.status.value, "analysis": analysis.to_dict()}
