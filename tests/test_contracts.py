from __future__ import annotations

import json

import pytest

from app.core.errors import ResponseContractError
from app.infra.providers.contracts import (
    AccidentClaimContract,
    ClaimEligibilityContract,
    QuoteContract,
    decode,
)


class TestDecode:
    def test_valid_payload(self) -> None:
        result = decode(
            ClaimEligibilityContract,
            '{"is_accident": true, "has_policy_number": false}',
        )
        assert result.ok
        assert result.unwrap().to_domain().is_accident is True

    def test_strips_markdown_fences(self) -> None:
        payload = '```json\n{"is_accident": false, "has_policy_number": true}\n```'
        result = decode(ClaimEligibilityContract, payload)
        assert result.ok
        assert result.value.has_policy_number is True

    def test_invalid_json_is_an_error_not_an_exception(self) -> None:
        result = decode(ClaimEligibilityContract, "{not json")
        assert not result.ok
        assert "invalid JSON" in result.error
        with pytest.raises(ResponseContractError):
            result.unwrap()

    def test_empty_body(self) -> None:
        result = decode(ClaimEligibilityContract, "   ")
        assert not result.ok

    def test_non_object_json(self) -> None:
        assert not decode(ClaimEligibilityContract, "[1, 2]").ok

    def test_missing_required_field(self) -> None:
        result = decode(ClaimEligibilityContract, '{"is_accident": true}')
        assert not result.ok
        assert "validation error" in result.error

    def test_nullable_fields_must_be_present(self) -> None:
        full = {
            "policyholder_name": None,
            "policy_number": "12345",
            "accident_date": None,
            "accident_location": None,
            "incident_description": None,
            "vehicles_involved": None,
            "injuries_reported": None,
            "police_report_filed": None,
        }
        assert decode(AccidentClaimContract, json.dumps(full)).ok

        partial = dict(full)
        del partial["accident_date"]
        assert not decode(AccidentClaimContract, json.dumps(partial)).ok

    def test_negative_premium_rejected(self) -> None:
        payload = {
            "customer_name": "James Carter",
            "date_of_birth": "1988-03-14",
            "policy_type": "AutoGuard Plus",
            "tenure": "1 year",
            "monthly_premium": -10,
            "annual_premium": 120,
            "coverage_details": {
                "liability": "$100k/$300k",
                "collision": "$500 deductible",
                "comprehensive": "$250 deductible",
            },
        }
        assert not decode(QuoteContract, json.dumps(payload)).ok
