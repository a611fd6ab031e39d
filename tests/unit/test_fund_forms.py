"""
Unit tests for the mutual fund form schemas.
"""
import pytest

from fundkit.validation.forms.funds import (
    FUND_COMPARISON,
    FUND_FILTER,
    FUND_INVESTMENT,
    FUND_REDEMPTION,
    GOAL_ALLOCATION,
    SIP_SETUP,
    STP_SETUP,
    SWP_SETUP,
    check_allocations,
)
from fundkit.validation.rules import FormContext


class TestFundInvestment:
    def test_valid_lumpsum(self, investment_payload):
        assert FUND_INVESTMENT.validate(investment_payload).is_valid

    @pytest.mark.parametrize("amount, valid", [
        (99, False),
        (100, True),
        ("100000000", True),
        (100_000_001, False),
        ("abc", False),
    ])
    def test_amount_limits(self, investment_payload, amount, valid):
        investment_payload["amount"] = amount
        result = FUND_INVESTMENT.validate(investment_payload)
        assert result.is_valid is valid
        if not valid:
            assert result.errors["amount"] == "Amount must be between ₹100 and ₹10 crore"

    def test_sip_fields_required_for_sip(self, investment_payload):
        investment_payload["investmentType"] = "sip"
        result = FUND_INVESTMENT.validate(investment_payload)
        assert result.errors == {
            "sipFrequency": "SIP frequency is required",
            "sipStartDate": "SIP start date is required",
            "sipDuration": "SIP duration is required",
        }

    def test_sip_duration_minimum(self, investment_payload):
        investment_payload.update({
            "investmentType": "sip",
            "sipFrequency": "monthly",
            "sipStartDate": "2025-07-01",
            "sipDuration": 3,
        })
        result = FUND_INVESTMENT.validate(investment_payload)
        assert result.errors == {"sipDuration": "Minimum SIP duration is 6 months"}


class TestFundRedemption:
    @pytest.fixture
    def payload(self):
        return {"fundId": "FUND001", "redemptionType": "partial", "bankAccountId": "BA1"}

    def test_partial_needs_amount_or_units(self, payload):
        result = FUND_REDEMPTION.validate(payload)
        assert result.errors == {"amount": "Either amount or units must be specified"}

    def test_partial_with_units_only(self, payload):
        payload["units"] = "12.5"
        assert FUND_REDEMPTION.validate(payload).is_valid

    def test_partial_with_negative_amount(self, payload):
        payload["amount"] = -10
        result = FUND_REDEMPTION.validate(payload)
        assert result.errors == {"amount": "Amount must be a positive number"}

    def test_full_needs_confirmation(self, payload):
        payload["redemptionType"] = "full"
        result = FUND_REDEMPTION.validate(payload)
        assert result.errors == {"confirmFullRedemption": "Please confirm full redemption"}
        payload["confirmFullRedemption"] = True
        assert FUND_REDEMPTION.validate(payload).is_valid


class TestSipSetup:
    def test_valid(self, sip_payload, today):
        assert SIP_SETUP.validate(sip_payload, today=today).is_valid

    def test_sip_date_today_allowed(self, sip_payload, today):
        sip_payload["sipDate"] = today.isoformat()
        assert SIP_SETUP.validate(sip_payload, today=today).is_valid

    def test_sip_date_in_past(self, sip_payload, today):
        sip_payload["sipDate"] = "2025-06-14"
        result = SIP_SETUP.validate(sip_payload, today=today)
        assert result.errors == {"sipDate": "SIP date cannot be in the past"}

    def test_amount_limits(self, sip_payload, today):
        sip_payload["amount"] = 100_001
        result = SIP_SETUP.validate(sip_payload, today=today)
        assert result.errors == {"amount": "SIP amount must be between ₹500 and ₹1 lakh"}

    def test_nach_needs_mandate(self, sip_payload, today):
        sip_payload["paymentMethod"] = "nach"
        result = SIP_SETUP.validate(sip_payload, today=today)
        assert result.errors == {"mandateId": "NACH mandate ID is required"}


class TestSwpAndStp:
    def test_swp_requires_tax_acknowledgement(self):
        result = SWP_SETUP.validate({
            "fundId": "FUND001",
            "amount": 1000,
            "frequency": "monthly",
            "startDate": "2025-07-01",
            "duration": 12,
            "bankAccountId": "BA1",
        })
        assert result.errors == {"acknowledgeTax": "Please acknowledge the tax implications"}

    def test_stp_valid(self, stp_payload):
        assert STP_SETUP.validate(stp_payload).is_valid

    def test_stp_same_fund(self, stp_payload):
        stp_payload["targetFundId"] = stp_payload["sourceFundId"]
        result = STP_SETUP.validate(stp_payload)
        assert result.errors == {"targetFundId": "Source and target funds cannot be the same"}

    def test_stp_missing_target_reports_required(self, stp_payload):
        stp_payload["targetFundId"] = ""
        result = STP_SETUP.validate(stp_payload)
        assert result.errors == {"targetFundId": "Please select target fund"}

    def test_stp_amount_limits(self, stp_payload):
        stp_payload["amount"] = 999
        result = STP_SETUP.validate(stp_payload)
        assert result.errors == {"amount": "STP amount must be between ₹1,000 and ₹10 lakh"}


class TestFundFilter:
    def test_empty_filter_is_valid(self):
        assert FUND_FILTER.validate({}).is_valid

    def test_inverted_returns_range(self):
        result = FUND_FILTER.validate({"minReturns": 15, "maxReturns": 10})
        assert result.errors == {
            "minReturns": "Minimum returns cannot be greater than maximum returns",
        }

    def test_negative_risk(self):
        result = FUND_FILTER.validate({"minRisk": -1})
        assert result.errors == {"minRisk": "Minimum risk must be a non-negative number"}

    def test_aum_must_be_positive(self):
        result = FUND_FILTER.validate({"minAUM": 0})
        assert result.errors == {"minAUM": "Minimum AUM must be a positive number"}


class TestFundComparison:
    @pytest.mark.parametrize("funds, message", [
        (["F1"], "Please select at least 2 funds to compare"),
        (["F1", "F2", "F3", "F4", "F5", "F6"], "Maximum 5 funds can be compared at once"),
    ])
    def test_fund_count(self, funds, message):
        result = FUND_COMPARISON.validate({"funds": funds, "comparisonPeriod": "1Y"})
        assert result.errors == {"funds": message}

    def test_valid(self):
        assert FUND_COMPARISON.validate({"funds": ["F1", "F2"], "comparisonPeriod": "3Y"}).is_valid


class TestGoalAllocation:
    def test_allocations_summing_to_100(self):
        result = GOAL_ALLOCATION.validate({
            "goalId": "G1",
            "funds": [{"allocation": 33.33}, {"allocation": 33.33}, {"allocation": "33.34"}],
        })
        assert result.is_valid

    def test_total_off_by_more_than_tolerance(self):
        result = GOAL_ALLOCATION.validate({
            "goalId": "G1",
            "funds": [{"allocation": 50}, {"allocation": 49.98}],
        })
        assert result.errors == {"allocation": "Total allocation must be 100%"}

    def test_per_fund_range_reported_by_index(self):
        result = GOAL_ALLOCATION.validate({
            "goalId": "G1",
            "funds": [{"allocation": 120}, {"allocation": -20}],
        })
        assert result.errors == {
            "funds[0].allocation": "Allocation must be between 0% and 100%",
            "funds[1].allocation": "Allocation must be between 0% and 100%",
        }

    def test_no_funds(self):
        result = GOAL_ALLOCATION.validate({"goalId": "G1", "funds": []})
        assert result.errors == {"funds": "Please select at least one fund"}

    def test_check_ignores_missing_funds(self):
        assert check_allocations(FormContext({})) == {}
