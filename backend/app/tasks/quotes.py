"""
Quote tasks: eligibility check and quote generation.

A quote needs the customer's name, date of birth and requested tenure.
The eligibility check reports which of the three the call has covered;
generation is only meant to run once all three are present.

Unlike the other tasks, generation has no fallback: a made-up default
quote would be worse than none, so failures raise QuoteGenerationError.
"""

from __future__ import annotations

from app.core.errors import AssistError, InsufficientTranscriptError, QuoteGenerationError
from app.core.logging import logger
from app.domain import schema as s
from app.domain.artifacts import QuoteDetails, QuoteEligibility
from app.domain.transcript import Transcript, format_transcript
from app.infra.providers.contracts import QuoteContract, QuoteEligibilityContract
from app.infra.providers.gemini import GeminiClient, GenerationConfig
from app.tasks.common import COMPANY_NAME, has_enough_context
from app.utils.ids import generate_quote_id

QUOTE_ELIGIBILITY_SCHEMA = s.ResponseSchema(
    name="quote_eligibility",
    root=s.obj({
        "has_name": s.boolean("True if the customer has given their full name."),
        "has_dob": s.boolean("True if the customer has given their date of birth."),
        "has_tenure": s.boolean(
            "True if the customer has said how long a policy term they want "
            "(e.g. 6 months, 1 year)."
        ),
    }),
)

NOT_ELIGIBLE = QuoteEligibility(has_name=False, has_dob=False, has_tenure=False)

_CHECK_CONFIG = GenerationConfig(temperature=0.0, disable_thinking=True)


async def check_quote_eligibility(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> QuoteEligibility:
    if not has_enough_context(transcript):
        return NOT_ELIGIBLE

    prompt = (
        f"You are an assistant for '{COMPANY_NAME}'. Check whether the customer in "
        "this call has provided the details needed for a new auto insurance quote: "
        "their full name, their date of birth and the policy tenure they want. Only "
        "count details the customer actually stated; if unsure, answer false.\n\n"
        f"Transcript:\n{format_transcript(transcript)}\n"
    )
    try:
        decoded = await client.generate_structured(
            prompt, QuoteEligibilityContract, QUOTE_ELIGIBILITY_SCHEMA, config=_CHECK_CONFIG
        )
        return decoded.unwrap().to_domain()
    except AssistError as e:
        logger.warning("Call %s: quote eligibility check failed (%s)", call_id, e)
        return NOT_ELIGIBLE


QUOTE_SCHEMA = s.ResponseSchema(
    name="quote",
    root=s.obj({
        "customer_name": s.string("The customer's full name as stated in the call."),
        "date_of_birth": s.string("The customer's date of birth as stated in the call."),
        "policy_type": s.string("The type of policy quoted, e.g. 'AutoGuard Plus'."),
        "tenure": s.string("The policy tenure the customer asked for."),
        "monthly_premium": s.number("Monthly premium in USD."),
        "annual_premium": s.number("Annual premium in USD, 12 times the monthly premium."),
        "coverage_details": s.obj(
            {
                "liability": s.string("Liability coverage limits."),
                "collision": s.string("Collision coverage and deductible."),
                "comprehensive": s.string("Comprehensive coverage and deductible."),
            },
            "Coverage included in the quote.",
        ),
    }),
)

_QUOTE_CONFIG = GenerationConfig(temperature=0.2)


def build_quote_prompt(transcript: Transcript) -> str:
    return (
        f"You are an underwriting assistant for '{COMPANY_NAME}'. Using the details "
        "the customer gave in the call below, prepare a preliminary auto insurance "
        "quote. Use the customer's name, date of birth and requested tenure exactly as "
        "stated. Price the policy realistically in US dollars, taking into account "
        "anything the customer said about their vehicle and driving history. The annual "
        "premium must equal twelve times the monthly premium.\n\n"
        f"Transcript:\n{format_transcript(transcript)}\n"
    )


async def generate_quote(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> QuoteDetails:
    """Generate a quote.  Raises QuoteGenerationError on any failure."""
    if not has_enough_context(transcript):
        raise InsufficientTranscriptError("Not enough conversation to generate a quote")

    try:
        decoded = await client.generate_structured(
            build_quote_prompt(transcript), QuoteContract, QUOTE_SCHEMA, config=_QUOTE_CONFIG
        )
        data = decoded.unwrap()
    except AssistError as e:
        logger.error("Call %s: quote generation failed (%s)", call_id, e)
        raise QuoteGenerationError(f"Quote generation failed: {e}") from e

    quote = QuoteDetails(
        quote_id=generate_quote_id(),
        customer_name=data.customer_name,
        date_of_birth=data.date_of_birth,
        policy_type=data.policy_type,
        tenure=data.tenure,
        monthly_premium=round(data.monthly_premium, 2),
        annual_premium=round(data.annual_premium, 2),
        coverage_details=data.coverage_details.to_domain(),
    )
    logger.info("Call %s: quote %s generated (%s)", call_id, quote.quote_id, quote.policy_type)
    return quote
