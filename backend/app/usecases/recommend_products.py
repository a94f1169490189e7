"""
Recommend-products use case.

Needs at least two transcript entries; the previous recommendations are
cleared before the new request so a failure leaves an empty list rather
than stale suggestions.
"""

from __future__ import annotations

from app.core.logging import logger
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.tasks.common import has_enough_context
from app.tasks.recommendations import recommend_products as recommend


async def recommend_products(client: GeminiClient, call_id: str) -> dict:
    state = get_call(call_id)
    if state is None:
        return {"error": "call_not_found"}

    snapshot = state.transcript_snapshot()
    if not has_enough_context(snapshot):
        logger.info("Call %s: not enough transcript for product recommendations", call_id)
        return {
            "error": "insufficient_transcript",
            "detail": "Not enough conversation to recommend products.",
        }

    state.recommendations = []
    recs = await recommend(client, snapshot, call_id=call_id)
    state.recommendations = recs
    return {
        "status": state.status.value,
        "recommendations": [r.to_dict() for r in recs],
    }
