"""
Call state: everything the caller holds for one simulated call.

The assist tasks are stateless; this object is the caller's side of the
contract.  It owns the transcript, the agent's notes and whichever
artifacts have been produced so far, and it is the only thing the use
cases mutate.

Tasks are always handed ``transcript_snapshot()``, an immutable copy, so
an entry appended while a request is in flight never leaks into it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.domain.artifacts import (
    AccidentClaimDetails,
    AnalysisResult,
    CallWrapUp,
    ClaimDocument,
    ClaimEligibility,
    ProductRecommendation,
    QuoteDetails,
    QuoteEligibility,
)
from app.domain.transcript import Speaker, TranscriptEntry

OPENER = (
    "Thank you for calling ABC General Insurance. My name is Alex. "
    "How can I help you today?"
)


class CallStatus(Enum):
    """
    ACTIVE     -> conversation in progress, messages accepted
    ENDING     -> end-of-call analysis running
    COMPLETED  -> wrap-up stored; only post-call actions remain
    """
    ACTIVE = "active"
    ENDING = "ending"
    COMPLETED = "completed"


@dataclass
class CallState:
    call_id: str = ""
    status: CallStatus = CallStatus.ACTIVE
    transcript: list[TranscriptEntry] = field(default_factory=list)
    notes: str = ""

    analysis: AnalysisResult | None = None
    claim_eligibility: ClaimEligibility | None = None
    quote_eligibility: QuoteEligibility | None = None
    recommendations: list[ProductRecommendation] = field(default_factory=list)
    accident_claim: AccidentClaimDetails | None = None
    claim_document: ClaimDocument | None = None
    quote: QuoteDetails | None = None
    quote_error: str | None = None

    def add_entry(self, speaker: Speaker, text: str) -> TranscriptEntry:
        entry = TranscriptEntry(speaker=speaker, text=text)
        self.transcript.append(entry)
        return entry

    def transcript_snapshot(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self.transcript)

    def apply_wrap_up(self, wrap_up: CallWrapUp) -> None:
        self.analysis = wrap_up.analysis
        self.claim_eligibility = wrap_up.claim_eligibility
        self.quote_eligibility = wrap_up.quote_eligibility

    def to_dict(self) -> dict[str, Any]:
        def _opt(value: Any) -> Any:
            return value.to_dict() if value is not None else None

        return {
            "call_id": self.call_id,
            "status": self.status.value,
            "transcript": [e.to_dict() for e in self.transcript],
            "notes": self.notes,
            "analysis": _opt(self.analysis),
            "claim_eligibility": _opt(self.claim_eligibility),
            "quote_eligibility": _opt(self.quote_eligibility),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "accident_claim": _opt(self.accident_claim),
            "claim_document": _opt(self.claim_document),
            "quote": _opt(self.quote),
            "quote_error": self.quote_error,
        }
