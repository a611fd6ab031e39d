"""
Primitive Validators — atomic predicates over a single value.

Every predicate is total: None, empty strings and values of the wrong type
return False instead of raising, so rule composition never needs a guard.

Country-specific identifier formats (tax id, national id, bank branch code,
phone, postal code) are grouped in an IdentifierRules bundle. Forms look
identifiers up through the bundle, so a deployment outside India swaps the
bundle and keeps every form schema unchanged.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional

from dateutil.relativedelta import relativedelta

from fundkit.coercion import is_blank, to_datetime, to_decimal
from fundkit.config.constants import (
    AADHAAR_PATTERN,
    ACCOUNT_NUMBER_PATTERN,
    DEFAULT_MAX_AMOUNT,
    DEFAULT_MIN_AMOUNT,
    EMAIL_PATTERN,
    IFSC_PATTERN,
    MAX_INVESTOR_AGE,
    MIN_INVESTOR_AGE,
    OTP_PATTERN,
    PAN_PATTERN,
    PASSWORD_PATTERN,
    PHONE_PATTERN,
    PINCODE_PATTERN,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_PHONE_RE = re.compile(PHONE_PATTERN)
_PAN_RE = re.compile(PAN_PATTERN)
_AADHAAR_RE = re.compile(AADHAAR_PATTERN)
_IFSC_RE = re.compile(IFSC_PATTERN)
_ACCOUNT_RE = re.compile(ACCOUNT_NUMBER_PATTERN)
_PINCODE_RE = re.compile(PINCODE_PATTERN)
_OTP_RE = re.compile(OTP_PATTERN)
_PASSWORD_RE = re.compile(PASSWORD_PATTERN)

_NON_DIGITS = re.compile(r"[^0-9]")
_WHITESPACE = re.compile(r"\s")


def _full_match(pattern: "re.Pattern[str]", value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return pattern.fullmatch(value) is not None


# ======================================================================
# String formats
# ======================================================================

def is_valid_email(value: Any) -> bool:
    """local@domain.tld with no whitespace. Not RFC 5322."""
    return _full_match(_EMAIL_RE, value)


def is_valid_phone(value: Any) -> bool:
    """Indian mobile number: 10 digits starting 6-9, punctuation ignored."""
    if not isinstance(value, str):
        return False
    return _full_match(_PHONE_RE, _NON_DIGITS.sub("", value))


def is_valid_pan(value: Any) -> bool:
    """PAN: 5 uppercase letters + 4 digits + 1 uppercase letter (ABCDE1234F)."""
    return _full_match(_PAN_RE, value)


def is_valid_aadhaar(value: Any) -> bool:
    """Aadhaar: exactly 12 digits once whitespace is removed."""
    if not isinstance(value, str):
        return False
    return _full_match(_AADHAAR_RE, _WHITESPACE.sub("", value))


def is_valid_ifsc(value: Any) -> bool:
    """IFSC: 4 uppercase letters, a literal 0, then 6 alphanumerics."""
    return _full_match(_IFSC_RE, value)


def is_valid_account_number(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return _full_match(_ACCOUNT_RE, _WHITESPACE.sub("", value))


def is_valid_pincode(value: Any) -> bool:
    return _full_match(_PINCODE_RE, value)


def is_valid_otp(value: Any) -> bool:
    return _full_match(_OTP_RE, value)


def is_valid_password(value: Any) -> bool:
    """
    At least 8 characters with one lowercase, one uppercase, one digit and
    one of ``@$!%*?&``. Characters outside that alphabet are rejected.
    """
    return _full_match(_PASSWORD_RE, value)


# ======================================================================
# Dates
# ======================================================================

def is_valid_date(value: Any) -> bool:
    return to_datetime(value) is not None


def is_valid_age(
    value: Any,
    min_age: int = MIN_INVESTOR_AGE,
    max_age: int = MAX_INVESTOR_AGE,
    today: Optional[date] = None,
) -> bool:
    """True if a person born on *value* is between min_age and max_age today."""
    born = to_datetime(value)
    if born is None:
        return False
    today = today or date.today()
    age = relativedelta(today, born.date()).years
    return min_age <= age <= max_age


# ======================================================================
# Numbers
# ======================================================================

def is_valid_amount(
    value: Any,
    min_amount: float = DEFAULT_MIN_AMOUNT,
    max_amount: float = DEFAULT_MAX_AMOUNT,
) -> bool:
    """Numeric and within [min_amount, max_amount]. Non-numeric is invalid."""
    amount = to_decimal(value)
    if amount is None:
        return False
    return to_decimal(min_amount) <= amount <= to_decimal(max_amount)


def is_valid_percentage(value: Any) -> bool:
    return is_valid_amount(value, 0, 100)


def is_positive_number(value: Any) -> bool:
    number = to_decimal(value)
    return number is not None and number > 0


def is_non_negative_number(value: Any) -> bool:
    number = to_decimal(value)
    return number is not None and number >= 0


def is_integer(value: Any) -> bool:
    number = to_decimal(value)
    return number is not None and number == number.to_integral_value()


def has_value(value: Any) -> bool:
    return not is_blank(value)


# ======================================================================
# Swappable identifier rule sets
# ======================================================================

@dataclass(frozen=True)
class IdentifierRules:
    """Country-specific identifier predicates used by the form schemas."""

    region: str
    tax_id: Predicate
    national_id: Predicate
    bank_code: Predicate
    bank_account: Predicate
    phone: Predicate
    postal_code: Predicate

    def predicate(self, kind: str) -> Predicate:
        if kind == "region" or not hasattr(self, kind):
            raise LookupError(f"Unknown identifier kind: {kind}")
        return getattr(self, kind)

    def __repr__(self) -> str:
        return f"IdentifierRules({self.region})"


INDIA_IDENTIFIERS = IdentifierRules(
    region="IN",
    tax_id=is_valid_pan,
    national_id=is_valid_aadhaar,
    bank_code=is_valid_ifsc,
    bank_account=is_valid_account_number,
    phone=is_valid_phone,
    postal_code=is_valid_pincode,
)

IDENTIFIER_RULESETS: Dict[str, IdentifierRules] = {
    INDIA_IDENTIFIERS.region: INDIA_IDENTIFIERS,
}


def get_identifier_rules(region: str) -> IdentifierRules:
    """Return the registered rule set for *region*; unknown regions raise."""
    try:
        return IDENTIFIER_RULESETS[region]
    except KeyError:
        logger.error("No identifier rules registered for region '%s'", region)
        raise LookupError(f"No identifier rules registered for region '{region}'") from None
