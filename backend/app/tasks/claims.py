"""
Claim tasks: eligibility check and claim extraction.

The eligibility check answers two questions about the call (is this an
accident report, has the policy number been given).  Extraction is only
meant to run once both hold; the caller enforces that gate.

Extraction comes in two shapes: the preliminary accident report
(AccidentClaimDetails) and the flat claim form (ClaimDocument).  In both,
a detail the customer never mentioned is null.  The "Error" sentinel
marks a failed request, not a missing detail.
"""

from __future__ import annotations

from app.core.errors import AssistError
from app.core.logging import logger
from app.domain import schema as s
from app.domain.artifacts import AccidentClaimDetails, ClaimDocument, ClaimEligibility
from app.domain.transcript import Transcript, format_transcript
from app.infra.providers.contracts import (
    AccidentClaimContract,
    ClaimDocumentContract,
    ClaimEligibilityContract,
)
from app.infra.providers.gemini import GeminiClient, GenerationConfig
from app.tasks.common import COMPANY_NAME, has_enough_context

ERROR_MARKER = "Error"

_CHECK_CONFIG = GenerationConfig(temperature=0.0, disable_thinking=True)
_EXTRACT_CONFIG = GenerationConfig(temperature=0.1)


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------

CLAIM_ELIGIBILITY_SCHEMA = s.ResponseSchema(
    name="claim_eligibility",
    root=s.obj({
        "is_accident": s.boolean(
            "True if the customer is reporting a vehicle accident or collision "
            "they want to claim for."
        ),
        "has_policy_number": s.boolean(
            "True if the customer has stated their policy number anywhere in the "
            "conversation."
        ),
    }),
)

_ELIGIBILITY_SYSTEM = f"""\
You are a claims triage assistant for '{COMPANY_NAME}'. You read call transcripts and \
answer yes/no questions strictly from what was said. If something was not clearly \
stated, the answer is false."""

NO_CLAIM = ClaimEligibility(is_accident=False, has_policy_number=False)


async def check_claim_eligibility(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> ClaimEligibility:
    if not has_enough_context(transcript):
        return NO_CLAIM

    prompt = (
        "Decide whether an accident claim can be started from this call.\n"
        "1. is_accident: is the customer reporting an auto accident?\n"
        "2. has_policy_number: has the customer given their policy number?\n\n"
        f"Transcript:\n{format_transcript(transcript)}\n"
    )
    try:
        decoded = await client.generate_structured(
            prompt,
            ClaimEligibilityContract,
            CLAIM_ELIGIBILITY_SCHEMA,
            system_instruction=_ELIGIBILITY_SYSTEM,
            config=_CHECK_CONFIG,
        )
        return decoded.unwrap().to_domain()
    except AssistError as e:
        logger.warning("Call %s: claim eligibility check failed (%s)", call_id, e)
        return NO_CLAIM


# ---------------------------------------------------------------------------
# Accident report
# ---------------------------------------------------------------------------

ACCIDENT_CLAIM_SCHEMA = s.ResponseSchema(
    name="accident_claim",
    root=s.obj({
        "policyholder_name": s.string("The full name of the policyholder.", nullable=True),
        "policy_number": s.string("The policy number mentioned by the customer.", nullable=True),
        "accident_date": s.string("The date and time of the accident.", nullable=True),
        "accident_location": s.string(
            "The specific location of the accident (e.g., address, intersection).",
            nullable=True,
        ),
        "incident_description": s.string(
            "A brief summary of how the accident occurred.", nullable=True
        ),
        "vehicles_involved": s.array(
            s.string(),
            "A list of the vehicles involved, including make and model if mentioned.",
            nullable=True,
        ),
        "injuries_reported": s.string(
            "Details about any injuries to any party involved. State 'None reported' "
            "if no injuries are mentioned.",
            nullable=True,
        ),
        "police_report_filed": s.string(
            "Confirmation of whether a police report was filed and the report number, "
            "if available.",
            nullable=True,
        ),
    }),
)


def accident_claim_fallback() -> AccidentClaimDetails:
    return AccidentClaimDetails(
        policyholder_name=ERROR_MARKER,
        policy_number=ERROR_MARKER,
        accident_date=ERROR_MARKER,
        accident_location=ERROR_MARKER,
        incident_description="Could not process claim due to an API error.",
        vehicles_involved=[],
        injuries_reported=ERROR_MARKER,
        police_report_filed=ERROR_MARKER,
    )


def _extraction_prompt(task: str, transcript: Transcript) -> str:
    return (
        f"You are a claims processing assistant for '{COMPANY_NAME}'. Your task is to "
        "analyze the following call transcript where a customer is reporting an auto "
        f"accident. {task}\n\n"
        "Provide the information in a structured JSON format. If a specific piece of "
        "information is not mentioned in the conversation, use a value of null for "
        "that field.\n\n"
        f"Transcript:\n{format_transcript(transcript)}\n"
    )


async def process_accident_claim(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> AccidentClaimDetails:
    if not has_enough_context(transcript):
        return AccidentClaimDetails()

    prompt = _extraction_prompt(
        "Extract the key details needed to file a preliminary claim report.", transcript
    )
    try:
        decoded = await client.generate_structured(
            prompt, AccidentClaimContract, ACCIDENT_CLAIM_SCHEMA, config=_EXTRACT_CONFIG
        )
        return decoded.unwrap().to_domain()
    except AssistError as e:
        logger.warning("Call %s: accident claim extraction failed (%s)", call_id, e)
        return accident_claim_fallback()


# ---------------------------------------------------------------------------
# Claim form
# ---------------------------------------------------------------------------

_CLAIM_DOCUMENT_FIELDS: dict[str, str] = {
    "policyholder_name": "The full name of the policyholder.",
    "policy_number": "The policy number mentioned by the customer.",
    "contact_phone": "A phone number the customer can be reached on.",
    "incident_date": "The date of the accident.",
    "incident_time": "The time of the accident.",
    "incident_location": "Where the accident happened (address, intersection, road).",
    "vehicle_make": "Make of the policyholder's vehicle.",
    "vehicle_model": "Model of the policyholder's vehicle.",
    "vehicle_year": "Model year of the policyholder's vehicle.",
    "license_plate": "License plate of the policyholder's vehicle.",
    "incident_description": "A brief summary of how the accident occurred.",
    "damage_description": "Damage to the policyholder's vehicle or property.",
    "other_party_details": "Name, insurer or vehicle of any other party involved.",
    "police_report_number": "The police report number, if one was filed.",
}

CLAIM_DOCUMENT_SCHEMA = s.ResponseSchema(
    name="claim_document",
    root=s.obj({
        name: s.string(desc, nullable=True) for name, desc in _CLAIM_DOCUMENT_FIELDS.items()
    }),
)

CLAIM_DOCUMENT_FALLBACK = ClaimDocument(
    **{name: ERROR_MARKER for name in ClaimDocument.field_names()}
)


async def extract_claim_document(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> ClaimDocument:
    if not has_enough_context(transcript):
        return ClaimDocument()

    prompt = _extraction_prompt(
        "Fill in the fields of the claim form from what the customer said.", transcript
    )
    try:
        decoded = await client.generate_structured(
            prompt, ClaimDocumentContract, CLAIM_DOCUMENT_SCHEMA, config=_EXTRACT_CONFIG
        )
        return decoded.unwrap().to_domain()
    except AssistError as e:
        logger.warning("Call %s: claim document extraction failed (%s)", call_id, e)
        return CLAIM_DOCUMENT_FALLBACK
