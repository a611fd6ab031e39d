"""
Mutual fund form schemas: investment, redemption, SIP/SWP/STP setup,
fund filters, comparison and goal allocation.
"""
from decimal import Decimal
from typing import Dict, Mapping

from fundkit.coercion import to_decimal
from fundkit.config.constants import (
    ALLOCATION_TOLERANCE,
    ALLOCATION_TOTAL,
    INVESTMENT_AMOUNT_LIMITS,
    MAX_COMPARE_FUNDS,
    MIN_COMPARE_FUNDS,
    MIN_SIP_DURATION_MONTHS,
    SIP_AMOUNT_LIMITS,
    STP_AMOUNT_LIMITS,
    SWP_AMOUNT_LIMITS,
)
from fundkit.validation.rules import (
    FormContext,
    FormSchema,
    accepted,
    all_of,
    amount_between,
    at_least,
    differs_from_field,
    field_equals,
    field_is_blank,
    list_size,
    non_negative,
    not_above_field,
    not_in_past,
    positive,
    required,
    required_if,
    valid_date,
    when,
)

_fund = [required("Please select a fund")]
_duration = [
    required("Duration is required"),
    positive("Duration must be a positive number"),
]
_sip_duration = [
    positive("Duration must be a positive number"),
    at_least(MIN_SIP_DURATION_MONTHS, "Minimum SIP duration is 6 months"),
]
_tax_acknowledgement = [accepted("Please acknowledge the tax implications")]
_terms = [accepted("You must accept the terms and conditions")]

_is_sip = field_equals("investmentType", "sip")
_is_partial = field_equals("redemptionType", "partial")


FUND_INVESTMENT = FormSchema.define("fund_investment", {
    "fundId": _fund,
    "investmentType": [required("Please select investment type")],
    "amount": [
        required("Investment amount is required"),
        amount_between(*INVESTMENT_AMOUNT_LIMITS, "Amount must be between ₹100 and ₹10 crore"),
    ],
    "sipFrequency": [required_if(_is_sip, "SIP frequency is required")],
    "sipStartDate": [
        when(
            _is_sip,
            required("SIP start date is required"),
            valid_date("Please enter a valid SIP start date"),
        ),
    ],
    "sipDuration": [when(_is_sip, required("SIP duration is required"), *_sip_duration)],
    "paymentMethod": [required("Please select payment method")],
    "acceptTerms": _terms,
})

FUND_REDEMPTION = FormSchema.define("fund_redemption", {
    "fundId": _fund,
    "redemptionType": [required("Please select redemption type")],
    "amount": [
        required_if(
            all_of(_is_partial, field_is_blank("units")),
            "Either amount or units must be specified",
        ),
        when(_is_partial, positive("Amount must be a positive number")),
    ],
    "units": [when(_is_partial, positive("Units must be a positive number"))],
    "confirmFullRedemption": [
        when(field_equals("redemptionType", "full"), accepted("Please confirm full redemption")),
    ],
    "bankAccountId": [required("Please select bank account for redemption")],
})

SIP_SETUP = FormSchema.define("sip_setup", {
    "fundId": _fund,
    "amount": [
        required("SIP amount is required"),
        amount_between(*SIP_AMOUNT_LIMITS, "SIP amount must be between ₹500 and ₹1 lakh"),
    ],
    "sipDate": [
        required("SIP date is required"),
        valid_date("Please enter a valid SIP date"),
        not_in_past("SIP date cannot be in the past"),
    ],
    "frequency": [required("SIP frequency is required")],
    "duration": [required("SIP duration is required"), *_sip_duration],
    "paymentMethod": [required("Please select payment method")],
    "mandateId": [
        required_if(field_equals("paymentMethod", "nach"), "NACH mandate ID is required"),
    ],
    "acceptTerms": _terms,
})

SWP_SETUP = FormSchema.define("swp_setup", {
    "fundId": _fund,
    "amount": [
        required("SWP amount is required"),
        amount_between(*SWP_AMOUNT_LIMITS, "SWP amount must be between ₹1,000 and ₹10 lakh"),
    ],
    "frequency": [required("SWP frequency is required")],
    "startDate": [
        required("SWP start date is required"),
        valid_date("Please enter a valid start date"),
    ],
    "duration": _duration,
    "bankAccountId": [required("Please select bank account for withdrawal")],
    "acknowledgeTax": _tax_acknowledgement,
})

STP_SETUP = FormSchema.define("stp_setup", {
    "sourceFundId": [required("Please select source fund")],
    "targetFundId": [
        required("Please select target fund"),
        differs_from_field("sourceFundId", "Source and target funds cannot be the same"),
    ],
    "amount": [
        required("STP amount is required"),
        amount_between(*STP_AMOUNT_LIMITS, "STP amount must be between ₹1,000 and ₹10 lakh"),
    ],
    "frequency": [required("STP frequency is required")],
    "startDate": [
        required("STP start date is required"),
        valid_date("Please enter a valid start date"),
    ],
    "duration": _duration,
    "acknowledgeTax": _tax_acknowledgement,
})

FUND_FILTER = FormSchema.define("fund_filter", {
    "minReturns": [
        non_negative("Minimum returns must be a non-negative number"),
        not_above_field("maxReturns", "Minimum returns cannot be greater than maximum returns"),
    ],
    "maxReturns": [non_negative("Maximum returns must be a non-negative number")],
    "minRisk": [
        non_negative("Minimum risk must be a non-negative number"),
        not_above_field("maxRisk", "Minimum risk cannot be greater than maximum risk"),
    ],
    "maxRisk": [non_negative("Maximum risk must be a non-negative number")],
    "minAUM": [
        positive("Minimum AUM must be a positive number"),
        not_above_field("maxAUM", "Minimum AUM cannot be greater than maximum AUM"),
    ],
    "maxAUM": [positive("Maximum AUM must be a positive number")],
})

FUND_COMPARISON = FormSchema.define("fund_comparison", {
    "funds": [
        list_size(
            MIN_COMPARE_FUNDS,
            MAX_COMPARE_FUNDS,
            "Please select at least 2 funds to compare",
            "Maximum 5 funds can be compared at once",
        ),
    ],
    "comparisonPeriod": [required("Please select comparison period")],
})


def check_allocations(context: FormContext) -> Dict[str, str]:
    """
    Goal allocation: per-fund percentages must each be within 0..100 and
    add up to 100 (tolerance 0.01). Non-numeric allocations count as 0 in
    the total and are reported individually.
    """
    funds = context.get("funds")
    if not isinstance(funds, (list, tuple)) or not funds:
        return {}

    errors: Dict[str, str] = {}
    total = Decimal(0)
    for index, fund in enumerate(funds):
        raw = fund.get("allocation") if isinstance(fund, Mapping) else None
        allocation = to_decimal(raw)
        if allocation is None or allocation < 0 or allocation > 100:
            errors[f"funds[{index}].allocation"] = "Allocation must be between 0% and 100%"
        if allocation is not None:
            total += allocation

    if abs(total - Decimal(str(ALLOCATION_TOTAL))) > Decimal(str(ALLOCATION_TOLERANCE)):
        errors["allocation"] = "Total allocation must be 100%"
    return errors


GOAL_ALLOCATION = FormSchema.define(
    "goal_allocation",
    {
        "goalId": [required("Please select a goal")],
        "funds": [list_size(1, None, "Please select at least one fund")],
    },
    checks=[check_allocations],
)


FUND_SCHEMAS: Dict[str, FormSchema] = {
    schema.name: schema
    for schema in (
        FUND_INVESTMENT,
        FUND_REDEMPTION,
        SIP_SETUP,
        SWP_SETUP,
        STP_SETUP,
        FUND_FILTER,
        FUND_COMPARISON,
        GOAL_ALLOCATION,
    )
}
