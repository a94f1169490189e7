from __future__ import annotations

from pydantic import BaseModel
from typing import Literal

from app.schemas.artifacts import (
    AccidentClaimSchema,
    AnalysisSchema,
    ClaimDocumentSchema,
    ClaimEligibilitySchema,
    ProductRecommendationSchema,
    QuoteEligibilitySchema,
    QuoteSchema,
    WrapUpSchema,
)


class TranscriptEntrySchema(BaseModel):
    speaker: Literal["Customer", "Agent"]
    text: str


class StartCallResponse(BaseModel):
    call_id: str
    status: str
    agent_text: str


class MessageRequest(BaseModel):
    text: str


class MessageResponse(BaseModel):
    status: str
    agent_text: str | None = None
    transcript_length: int


class NotesRequest(BaseModel):
    notes: str = ""


class NotesResponse(BaseModel):
    status: str
    notes: str


class EndCallResponse(BaseModel):
    status: str
    wrap_up: WrapUpSchema


class AnalysisResponse(BaseModel):
    status: str
    analysis: AnalysisSchema


class RecommendationsResponse(BaseModel):
    status: str
    recommendations: list[ProductRecommendationSchema] = []


class ClaimResponse(BaseModel):
    status: str
    variant: Literal["accident", "document"]
    accident_claim: AccidentClaimSchema | None = None
    claim_document: ClaimDocumentSchema | None = None


class QuoteResponse(BaseModel):
    status: str
    quote: QuoteSchema


class CallStateResponse(BaseModel):
    call_id: str
    status: str
    transcript: list[TranscriptEntrySchema] = []
    notes: str = ""
    analysis: AnalysisSchema | None = None
    claim_eligibility: ClaimEligibilitySchema | None = None
    quote_eligibility: QuoteEligibilitySchema | None = None
    recommendations: list[ProductRecommendationSchema] = []
    accident_claim: AccidentClaimSchema | None = None
    claim_document: ClaimDocumentSchema | None = None
    quote: QuoteSchema | None = None
    quote_error: str | None = None
