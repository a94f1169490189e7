"""
Response contracts: Pydantic models that validate model JSON output.

Every structured task decodes the endpoint's text through ``decode()``,
which never raises.  It returns a DecodeResult holding either the
validated contract or a description of what went wrong, and the caller
decides whether that is fatal (``unwrap()``) or a fallback.

Field names match the response schemas declared next to each task prompt.
Nullable fields have no default: the key must be present, and absence is
spelled ``null``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.errors import ResponseContractError
from app.domain.artifacts import (
    AccidentClaimDetails,
    ClaimDocument,
    ClaimEligibility,
    CoverageDetails,
    ProductRecommendation,
    QuoteEligibility,
)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if not self.ok:
            raise ResponseContractError(self.error)
        return self.value  # type: ignore[return-value]


class _Contract(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

class AnalysisContract(_Contract):
    summary: str
    # Untyped: out-of-set values are coerced, but the key must be present.
    sentiment: Any
    next_actions: list[str]


class RecommendationItem(_Contract):
    product_name: str
    reasoning: str

    def to_domain(self) -> ProductRecommendation:
        return ProductRecommendation(product_name=self.product_name, reasoning=self.reasoning)


class RecommendationsContract(_Contract):
    recommendations: list[RecommendationItem] = Field(default_factory=list)


class AccidentClaimContract(_Contract):
    policyholder_name: Optional[str]
    policy_number: Optional[str]
    accident_date: Optional[str]
    accident_location: Optional[str]
    incident_description: Optional[str]
    vehicles_involved: Optional[list[str]]
    injuries_reported: Optional[str]
    police_report_filed: Optional[str]

    def to_domain(self) -> AccidentClaimDetails:
        return AccidentClaimDetails(**self.model_dump())


class ClaimDocumentContract(_Contract):
    policyholder_name: Optional[str]
    policy_number: Optional[str]
    contact_phone: Optional[str]
    incident_date: Optional[str]
    incident_time: Optional[str]
    incident_location: Optional[str]
    vehicle_make: Optional[str]
    vehicle_model: Optional[str]
    vehicle_year: Optional[str]
    license_plate: Optional[str]
    incident_description: Optional[str]
    damage_description: Optional[str]
    other_party_details: Optional[str]
    police_report_number: Optional[str]

    def to_domain(self) -> ClaimDocument:
        return ClaimDocument(**self.model_dump())


class ClaimEligibilityContract(_Contract):
    is_accident: bool
    has_policy_number: bool

    def to_domain(self) -> ClaimEligibility:
        return ClaimEligibility(
            is_accident=self.is_accident, has_policy_number=self.has_policy_number
        )


class QuoteEligibilityContract(_Contract):
    has_name: bool
    has_dob: bool
    has_tenure: bool

    def to_domain(self) -> QuoteEligibility:
        return QuoteEligibility(
            has_name=self.has_name, has_dob=self.has_dob, has_tenure=self.has_tenure
        )


class CoverageContract(_Contract):
    liability: str
    collision: str
    comprehensive: str

    def to_domain(self) -> CoverageDetails:
        return CoverageDetails(
            liability=self.liability,
            collision=self.collision,
            comprehensive=self.comprehensive,
        )


class QuoteContract(_Contract):
    customer_name: str = Field(min_length=1)
    date_of_birth: str = Field(min_length=1)
    policy_type: str = Field(min_length=1)
    tenure: str = Field(min_length=1)
    monthly_premium: float = Field(ge=0)
    annual_premium: float = Field(ge=0)
    coverage_details: CoverageContract


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode(contract: type[M], payload: str | None) -> DecodeResult[M]:
    """Parse ``payload`` as JSON and validate it against ``contract``."""
    cleaned = _clean_json_payload(payload or "")
    if not cleaned:
        return DecodeResult(error=f"{contract.__name__}: empty response body")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        return DecodeResult(error=f"{contract.__name__}: invalid JSON ({exc})")
    if not isinstance(data, dict):
        return DecodeResult(
            error=f"{contract.__name__}: expected a JSON object, got {type(data).__name__}"
        )
    try:
        return DecodeResult(value=contract.model_validate(data))
    except ValidationError as exc:
        return DecodeResult(
            error=f"{contract.__name__}: {exc.error_count()} validation error(s): {exc}"
        )


def _clean_json_payload(payload: str) -> str:
    """Strip Markdown code fences and keep the outermost ``{...}`` span."""
    cleaned = payload.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]
    return cleaned
