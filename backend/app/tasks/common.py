"""Helpers shared by the assist tasks."""

from __future__ import annotations

from app.core.settings import settings
from app.domain.transcript import Transcript

COMPANY_NAME = "ABC General Insurance"


def has_enough_context(transcript: Transcript) -> bool:
    """True once the call has enough turns for eligibility / extraction work.

    Below the threshold the tasks return their "nothing known yet" value
    without calling the endpoint.
    """
    return len(transcript) >= settings.min_transcript_entries
