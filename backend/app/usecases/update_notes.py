"""Update-notes use case: replace the agent's manual notes for a call."""

from __future__ import annotations

from app.infra.session_store import get_call


def update_notes(call_id: str, notes: str) -> dict:
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}
    state.notes = notes
    return {"status": state.status.value, "notes": state.notes}
