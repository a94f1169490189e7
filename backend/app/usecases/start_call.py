"""
Start-call use case.

Creates a fresh CallState seeded with the agent's greeting and registers
it in the call store.  The caller then drives the conversation through
send_message().
"""

from __future__ import annotations

from app.core.logging import logger
from app.domain.call import OPENER, CallState
from app.domain.transcript import Speaker
from app.infra.session_store import create_call
from app.utils.ids import generate_call_id


def start_call() -> dict:
    """
    Initialize a new call.

    Returns:
        dict with call_id, status and the agent's opening line.
    """
    call_id = generate_call_id()

    state = CallState(call_id=call_id)
    state.add_entry(Speaker.AGENT, OPENER)
    create_call(state)

    logger.info("Call started: %s", call_id)

    return {
        "call_id": call_id,
        "status": state.status.value,
        "agent_text": OPENER,
    }
