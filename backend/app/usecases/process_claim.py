"""
Process-claim use case.

Gated on the claim eligibility computed at end of call: both flags must
be true.  ``variant`` picks the output shape, "accident" for the
preliminary accident report or "document" for the flat claim form.
"""

from __future__ import annotations

from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.tasks.claims import extract_claim_document, process_accident_claim
from app.tasks.common import has_enough_context

CLAIM_VARIANTS = ("accident", "document")


async def process_claim(client: GeminiClient, call_id: str, variant: str = "accident") -> dict:
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}
    if variant not in CLAIM_VARIANTS:
        return {"error": "invalid_variant", "detail": f"Unknown claim variant: {variant}"}

    snapshot = state.transcript_snapshot()
    if not has_enough_context(snapshot):
        return {
            "error": "insufficient_transcript",
            "detail": "Not enough conversation to process a claim.",
        }
    eligibility = state.claim_eligibility
    if eligibility is None:
        return {
            "error": "eligibility_unknown",
            "detail": "End the call first so claim eligibility can be checked.",
        }
    if not eligibility.eligible:
        return {
            "error": "not_eligible",
            "detail": "An accident report and a policy number are both required.",
        }

    if variant == "document":
        document = await extract_claim_document(client, snapshot, call_id=call_id)
        state.claim_document = document
        return {
            "status": state.status.value,
            "variant": variant,
            "claim_document": document.to_dict(),
        }

    claim = await process_accident_claim(client, snapshot, call_id=call_id)
    state.accident_claim = claim
    return {
        "status": state.status.value,
        "variant": variant,
        "accident_claim": claim.to_dict(),
    }
