"""
Conversation analysis: summary, customer sentiment and next-best actions.

The agent's manual notes, when given, ride along as a trailing prompt
section.  Sentiment is re-checked after decoding because the model does
not always honour the enum; anything outside it becomes Neutral.
"""

from __future__ import annotations

from app.core.errors import AssistError
from app.core.logging import logger
from app.domain import schema as s
from app.domain.artifacts import SENTIMENT_VALUES, AnalysisResult, Sentiment
from app.domain.transcript import Transcript, format_transcript
from app.infra.providers.contracts import AnalysisContract
from app.infra.providers.gemini import GeminiClient

ANALYSIS_SCHEMA = s.ResponseSchema(
    name="conversation_analysis",
    root=s.obj({
        "summary": s.string("A concise summary of the entire conversation in 2-3 sentences."),
        "sentiment": s.string(
            "The overall sentiment of the customer. Must be one of: "
            "Positive, Negative, Neutral, Mixed.",
            enum=SENTIMENT_VALUES,
        ),
        "next_actions": s.array(
            s.string(),
            "A list of 3 concrete, actionable next steps for the agent.",
        ),
    }),
)


def empty_result() -> AnalysisResult:
    return AnalysisResult(
        summary="No conversation to analyze.",
        sentiment=Sentiment.NEUTRAL,
        next_actions=[],
    )


def fallback_result() -> AnalysisResult:
    return AnalysisResult(
        summary="Could not analyze the conversation due to an error.",
        sentiment=Sentiment.NEUTRAL,
        next_actions=["Check API connection", "Review the transcript for issues"],
    )


def build_analysis_prompt(transcript: Transcript, notes: str | None = None) -> str:
    prompt = (
        "Analyze the following call center conversation transcript for an insurance "
        "company. Provide a concise summary (2-3 sentences), determine the overall "
        "customer sentiment, and suggest 3 concrete next-best actions for the agent.\n\n"
        f"Transcript:\n{format_transcript(transcript)}\n"
    )
    if notes and notes.strip():
        prompt += (
            "\nAgent's manual notes (take these into account in the summary and "
            f"next actions):\n{notes.strip()}\n"
        )
    return prompt


async def analyze_conversation(
    client: GeminiClient,
    transcript: Transcript,
    notes: str | None = None,
    *,
    call_id: str = "",
) -> AnalysisResult:
    if not transcript:
        return empty_result()

    try:
        decoded = await client.generate_structured(
            build_analysis_prompt(transcript, notes), AnalysisContract, ANALYSIS_SCHEMA
        )
        data = decoded.unwrap()
    except AssistError as e:
        logger.warning("Call %s: analysis failed (%s), using fallback", call_id, e)
        return fallback_result()

    sentiment = Sentiment.coerce(data.sentiment)
    if sentiment.value != data.sentiment:
        logger.info(
            "Call %s: sentiment %r outside %s, coerced to Neutral",
            call_id,
            data.sentiment,
            SENTIMENT_VALUES,
        )

    return AnalysisResult(
        summary=data.summary,
        sentiment=sentiment,
        next_actions=list(data.next_actions),
    )
