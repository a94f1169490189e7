"""
Artifacts produced by the assist tasks.

Plain dataclasses, framework-free like the rest of the domain layer.  The
response contracts (infra/providers/contracts.py) decode model output into
these; the Pydantic schemas in schemas/ mirror them at the HTTP boundary.

Every artifact is created fresh per call and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any


class Sentiment(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    MIXED = "Mixed"

    @classmethod
    def coerce(cls, value: object) -> "Sentiment":
        """Map a model-supplied value onto the enum; anything unknown is Neutral."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NEUTRAL


SENTIMENT_VALUES = [s.value for s in Sentiment]


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    sentiment: Sentiment
    next_actions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "sentiment": self.sentiment.value,
            "next_actions": list(self.next_actions),
        }


@dataclass(frozen=True)
class ProductRecommendation:
    product_name: str
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AccidentClaimDetails:
    """Preliminary accident report.  ``None`` means "not mentioned"."""
    policyholder_name: str | None = None
    policy_number: str | None = None
    accident_date: str | None = None
    accident_location: str | None = None
    incident_description: str | None = None
    vehicles_involved: list[str] | None = None
    injuries_reported: str | None = None
    police_report_filed: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ClaimDocument:
    """Flat claim-form record.  ``None`` means "not mentioned"."""
    policyholder_name: str | None = None
    policy_number: str | None = None
    contact_phone: str | None = None
    incident_date: str | None = None
    incident_time: str | None = None
    incident_location: str | None = None
    vehicle_make: str | None = None
    vehicle_model: str | None = None
    vehicle_year: str | None = None
    license_plate: str | None = None
    incident_description: str | None = None
    damage_description: str | None = None
    other_party_details: str | None = None
    police_report_number: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


@dataclass(frozen=True)
class ClaimEligibility:
    is_accident: bool = False
    has_policy_number: bool = False

    @property
    def eligible(self) -> bool:
        return self.is_accident and self.has_policy_number

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class QuoteEligibility:
    has_name: bool = False
    has_dob: bool = False
    has_tenure: bool = False

    @property
    def eligible(self) -> bool:
        return self.has_name and self.has_dob and self.has_tenure

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CoverageDetails:
    liability: str
    collision: str
    comprehensive: str


@dataclass(frozen=True)
class QuoteDetails:
    quote_id: str
    customer_name: str
    date_of_birth: str
    policy_type: str
    tenure: str
    monthly_premium: float
    annual_premium: float
    coverage_details: CoverageDetails

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CallWrapUp:
    """Joined result of the end-of-call fan-out."""
    analysis: AnalysisResult
    claim_eligibility: ClaimEligibility
    quote_eligibility: QuoteEligibility

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis": self.analysis.to_dict(),
            "claim_eligibility": self.claim_eligibility.to_dict(),
            "quote_eligibility": self.quote_eligibility.to_dict(),
        }
