"""
Constants used across validation, formatting and querying.
Pinned so that every caller sees the same limits and messages.
"""
from typing import Dict, List, Tuple

# =============================================================================
# Identifier patterns (India)
# =============================================================================
EMAIL_PATTERN: str = r"[^\s@]+@[^\s@]+\.[^\s@]+"
PHONE_PATTERN: str = r"[6-9][0-9]{9}"            # after stripping non-digits
PAN_PATTERN: str = r"[A-Z]{5}[0-9]{4}[A-Z]"
AADHAAR_PATTERN: str = r"[0-9]{12}"              # after stripping whitespace
IFSC_PATTERN: str = r"[A-Z]{4}0[A-Z0-9]{6}"
ACCOUNT_NUMBER_PATTERN: str = r"[0-9]{9,18}"     # after stripping whitespace
PINCODE_PATTERN: str = r"[0-9]{6}"
OTP_PATTERN: str = r"[0-9]{6}"

# Password: 8+ chars, lower + upper + digit + one of the special characters,
# and nothing outside that alphabet.
PASSWORD_PATTERN: str = (
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}"
)

# =============================================================================
# Amount limits (INR)
# =============================================================================
DEFAULT_MIN_AMOUNT: int = 0
DEFAULT_MAX_AMOUNT: int = 100_000_000             # ₹10 crore

INVESTMENT_AMOUNT_LIMITS: Tuple[int, int] = (100, 100_000_000)
SIP_AMOUNT_LIMITS: Tuple[int, int] = (500, 100_000)
SWP_AMOUNT_LIMITS: Tuple[int, int] = (1_000, 1_000_000)
STP_AMOUNT_LIMITS: Tuple[int, int] = (1_000, 1_000_000)

MIN_SIP_DURATION_MONTHS: int = 6
MIN_INVESTOR_AGE: int = 18
MAX_INVESTOR_AGE: int = 100

ALLOCATION_TOTAL: float = 100.0
ALLOCATION_TOLERANCE: float = 0.01

MIN_COMPARE_FUNDS: int = 2
MAX_COMPARE_FUNDS: int = 5

MAX_FILTER_RANGE_DAYS: int = 365

# =============================================================================
# Transaction types that need extra fields on manual entry
# =============================================================================
UNIT_BASED_TRANSACTION_TYPES: List[str] = [
    "redemption", "swp", "stp_out", "dividend_reinvest", "bonus", "split", "merger",
]
PAYMENT_TRANSACTION_TYPES: List[str] = ["purchase", "sip"]
BANK_ACCOUNT_TRANSACTION_TYPES: List[str] = ["redemption", "swp"]

# =============================================================================
# Indian numbering thresholds (checked in order, first match wins)
# =============================================================================
CRORE: int = 10_000_000
LAKH: int = 100_000
THOUSAND: int = 1_000

LARGE_NUMBER_UNITS: List[Tuple[int, str]] = [
    (CRORE, "Cr"),
    (LAKH, "L"),
    (THOUSAND, "K"),
]

# =============================================================================
# Display
# =============================================================================
MISSING_PLACEHOLDER: str = "-"

CURRENCY_SYMBOLS: Dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
}

# locale -> (group separator, decimal separator)
LOCALE_SEPARATORS: Dict[str, Tuple[str, str]] = {
    "en-IN": (",", "."),
    "hi-IN": (",", "."),
    "en-US": (",", "."),
    "en-GB": (",", "."),
    "de-DE": (".", ","),
    "fr-FR": (" ", ","),
}
FALLBACK_LOCALE: str = "en-US"

DATE_FORMATS: List[str] = ["dd/mm/yyyy", "mm/dd/yyyy", "yyyy-mm-dd", "dd MMM yyyy"]
MONTH_ABBREVIATIONS: List[str] = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
FINANCIAL_YEAR_START_MONTH: int = 4              # April

# =============================================================================
# Collection queries
# =============================================================================
FILTER_WILDCARD: str = "all"
SORT_DIRECTIONS: List[str] = ["asc", "desc"]
FIELD_TYPES: List[str] = ["keyword", "text", "number", "date"]
