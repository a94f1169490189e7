"""
Send-message use case.

Handles one customer utterance:
  1. Load the call; reject unknown, finished or blank input
  2. Append the customer entry to the transcript
  3. Request the agent reply on a snapshot taken *after* step 2
  4. Append the reply, unless the call ended while we were waiting

The reply request is a plain await sequenced after the state update, so
the model always sees the customer's latest line.
"""

from __future__ import annotations

import time

from app.core.logging import logger
from app.domain.call import CallStatus
from app.domain.transcript import Speaker
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.tasks.agent_reply import generate_agent_reply


async def send_message(client: GeminiClient, call_id: str, text: str) -> dict:
    """
    Process one customer utterance and return the agent's reply.

    Returns dict with status, agent_text and the transcript length, or a
    dict with an "error" key.
    """
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}
    if state.status is not CallStatus.ACTIVE:
        return {"error": "call_not_active", "detail": "The call has already ended."}

    text = text.strip()
    if not text:
        return {"error": "empty_message", "detail": "Message is blank."}

    state.add_entry(Speaker.CUSTOMER, text)
    snapshot = state.transcript_snapshot()

    t0 = time.monotonic()
    agent_text = await generate_agent_reply(client, snapshot, call_id=call_id)
    reply_ms = (time.monotonic() - t0) * 1000

    if state.status is not CallStatus.ACTIVE:
        # Ended mid-request: the late reply is dropped.
        logger.info("Call %s: dropping agent reply that arrived after call end", call_id)
        return {
            "status": state.status.value,
            "agent_text": None,
            "transcript_length": len(state.transcript),
        }

    state.add_entry(Speaker.AGENT, agent_text)
    logger.info(
        "Call %s turn %d: reply in %.0fms",
        call_id,
        len(state.transcript),
        reply_ms,
    )

    return {
        "status": state.status.value,
        "agent_text": agent_text,
        "transcript_length": len(state.transcript),
    }
