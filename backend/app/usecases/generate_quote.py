"""
Generate-quote use case.

Gated on quote eligibility (name, date of birth and tenure all provided).
Generation failure is not papered over: the quote slot is cleared, the
error is recorded on the call and reported back as "quote_failed".
"""

from __future__ import annotations

from app.core.errors import AssistError, InsufficientTranscriptError
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.tasks.quotes import generate_quote as generate


async def generate_quote(client: GeminiClient, call_id: str) -> dict:
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}

    eligibility = state.quote_eligibility
    if eligibility is None:
        return {
            "error": "eligibility_unknown",
            "detail": "End the call first so quote eligibility can be checked.",
        }
    if not eligibility.eligible:
        return {
            "error": "not_eligible",
            "detail": "Customer name, date of birth and policy tenure are all required.",
        }

    state.quote = None
    state.quote_error = None
    try:
        quote = await generate(client, state.transcript_snapshot(), call_id=call_id)
    except InsufficientTranscriptError as e:
        return {"error": "insufficient_transcript", "detail": str(e)}
    except AssistError as e:
        state.quote_error = str(e)
        return {"error": "quote_failed", "detail": str(e)}

    state.quote = quote
    return {"status": state.status.value, "quote": quote.to_dict()}
