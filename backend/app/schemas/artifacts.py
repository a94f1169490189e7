from __future__ import annotations

from pydantic import BaseModel
from typing import Literal


class AnalysisSchema(BaseModel):
    summary: str
    sentiment: Literal["Positive", "Negative", "Neutral", "Mixed"]
    next_actions: list[str] = []


class ProductRecommendationSchema(BaseModel):
    product_name: str
    reasoning: str


class AccidentClaimSchema(BaseModel):
    policyholder_name: str | None = None
    policy_number: str | None = None
    accident_date: str | None = None
    accident_location: str | None = None
    incident_description: str | None = None
    vehicles_involved: list[str] | None = None
    injuries_reported: str | None = None
    police_report_filed: str | None = None


class ClaimDocumentSchema(BaseModel):
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


class ClaimEligibilitySchema(BaseModel):
    is_accident: bool
    has_policy_number: bool


class QuoteEligibilitySchema(BaseModel):
    has_name: bool
    has_dob: bool
    has_tenure: bool


class CoverageSchema(BaseModel):
    liability: str
    collision: str
    comprehensive: str


class QuoteSchema(BaseModel):
    quote_id: str
    customer_name: str
    date_of_birth: str
    policy_type: str
    tenure: str
    monthly_premium: float
    annual_premium: float
    coverage_details: CoverageSchema


class WrapUpSchema(BaseModel):
    analysis: AnalysisSchema
    claim_eligibility: ClaimEligibilitySchema
    quote_eligibility: QuoteEligibilitySchema
