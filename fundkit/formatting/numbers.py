"""
Number, currency and percentage formatting for display.

All amounts go through Decimal with half-up rounding, so 1.005 renders as
"1.01" and large rupee values keep every digit. These functions produce
display strings only; never feed their output back into arithmetic.

Missing input (None, NaN, non-numeric text) renders as "-" so a zero and
a missing value never look the same on screen.

Compact notation uses the Indian units (K, L, Cr) for every locale, with
the same thresholds as format_large_number.
"""
import logging
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Optional, Tuple

from fundkit.coercion import is_blank, to_decimal
from fundkit.config.constants import (
    CURRENCY_SYMBOLS,
    FALLBACK_LOCALE,
    LARGE_NUMBER_UNITS,
    LOCALE_SEPARATORS,
    MISSING_PLACEHOLDER,
)
from fundkit.config.settings import DEFAULT_CURRENCY, DEFAULT_LOCALE

logger = logging.getLogger(__name__)

_NOT_NUMERIC = re.compile(r"[^0-9.\-]")


# ======================================================================
# Internal helpers
# ======================================================================

def _separators(locale: Optional[str]) -> Tuple[str, str]:
    locale = locale or DEFAULT_LOCALE
    if locale in LOCALE_SEPARATORS:
        return LOCALE_SEPARATORS[locale]
    logger.debug("No separators for locale '%s', using %s", locale, FALLBACK_LOCALE)
    return LOCALE_SEPARATORS[FALLBACK_LOCALE]


def _group_digits(digits: str, separator: str, indian: bool) -> str:
    """1234567 -> 1,234,567 (western) or 12,34,567 (indian)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    size = 2 if indian else 3
    groups = []
    while len(head) > size:
        groups.insert(0, head[-size:])
        head = head[:-size]
    if head:
        groups.insert(0, head)
    return separator.join(groups + [tail])


def _fraction_digits(decimals: int, min_fd: Optional[int], max_fd: Optional[int]) -> Tuple[int, int]:
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    low = decimals if min_fd is None else min_fd
    if max_fd is not None:
        high = max_fd
    elif min_fd is not None:
        high = max(decimals, low)
    else:
        high = decimals
    if low < 0 or high < low:
        raise ValueError(
            f"invalid fraction digits: min={low}, max={high}"
        )
    return low, high


def _fixed(number: Decimal, min_fd: int, max_fd: int) -> Tuple[bool, str, str]:
    """
    Round *number* half-up to *max_fd* places, then drop trailing zeros
    down to *min_fd* places.

    Returns:
        (negative, integer digits, fraction digits) with sign removed.
    """
    # precision covers every integer digit plus the requested fraction
    context = Context(prec=max(28, number.adjusted() + max_fd + 2), rounding=ROUND_HALF_UP)
    quantized = number.quantize(Decimal(1).scaleb(-max_fd), context=context)
    negative = quantized < 0
    text = format(abs(quantized), "f")
    integer, _, fraction = text.partition(".")
    while len(fraction) > min_fd and fraction.endswith("0"):
        fraction = fraction[:-1]
    return negative, integer, fraction


def _abbreviate(number: Decimal) -> Tuple[Decimal, str]:
    for threshold, unit in LARGE_NUMBER_UNITS:
        if abs(number) >= threshold:
            return number / Decimal(threshold), unit
    return number, ""


def _render(number: Decimal, min_fd: int, max_fd: int, locale: Optional[str]) -> Tuple[bool, str]:
    group, point = _separators(locale)
    negative, integer, fraction = _fixed(number, min_fd, max_fd)
    indian = (locale or DEFAULT_LOCALE).endswith("-IN")
    body = _group_digits(integer, group, indian)
    if fraction:
        body = f"{body}{point}{fraction}"
    return negative, body


# ======================================================================
# Public API
# ======================================================================

def get_currency_symbol(currency: str = DEFAULT_CURRENCY) -> str:
    """Symbol for an ISO currency code; unknown codes are returned as is."""
    return CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())


def format_number(
    value: Any,
    decimals: int = 2,
    compact: bool = False,
    locale: Optional[str] = None,
    min_fraction_digits: Optional[int] = None,
    max_fraction_digits: Optional[int] = None,
) -> str:
    """
    Format *value* with locale grouping.

    Args:
        value: Number or numeric string.
        decimals: Fraction digits (both min and max unless overridden).
        compact: Abbreviate with K / L / Cr.
        locale: e.g. "en-IN" (12,34,567.00) or "en-US" (1,234,567.00).

    Returns:
        Display string, or "-" for missing input.
    """
    number = to_decimal(value)
    if number is None:
        return MISSING_PLACEHOLDER
    min_fd, max_fd = _fraction_digits(decimals, min_fraction_digits, max_fraction_digits)

    unit = ""
    if compact:
        number, unit = _abbreviate(number)

    negative, body = _render(number, min_fd, max_fd, locale)
    text = f"-{body}" if negative else body
    return f"{text} {unit}" if unit else text


def format_currency(
    amount: Any,
    currency: Optional[str] = None,
    locale: Optional[str] = None,
    decimals: int = 2,
    compact: bool = False,
    show_symbol: bool = True,
    min_fraction_digits: Optional[int] = None,
    max_fraction_digits: Optional[int] = None,
) -> str:
    """
    Format a money amount, e.g. ``format_currency(1234567.5)`` -> "₹12,34,567.50".

    The sign goes before the symbol ("-₹500.00"). Codes without a known
    symbol are prefixed with the code and a space ("CHF 10.00").
    """
    number = to_decimal(amount)
    if number is None:
        return MISSING_PLACEHOLDER
    min_fd, max_fd = _fraction_digits(decimals, min_fraction_digits, max_fraction_digits)

    unit = ""
    if compact:
        number, unit = _abbreviate(number)

    negative, body = _render(number, min_fd, max_fd, locale)

    prefix = ""
    if show_symbol:
        code = (currency or DEFAULT_CURRENCY).upper()
        symbol = get_currency_symbol(code)
        prefix = f"{symbol} " if symbol == code else symbol

    text = f"{'-' if negative else ''}{prefix}{body}"
    return f"{text} {unit}" if unit else text


def format_percentage(value: Any, decimals: int = 2, show_symbol: bool = True) -> str:
    """Fixed-point percentage. None -> "-", 0 -> "0.00%"."""
    number = to_decimal(value)
    if number is None:
        return MISSING_PLACEHOLDER
    min_fd, max_fd = _fraction_digits(decimals, None, None)
    negative, integer, fraction = _fixed(number, min_fd, max_fd)
    text = f"{'-' if negative else ''}{integer}{'.' + fraction if fraction else ''}"
    return f"{text}%" if show_symbol else text


def format_percentage_change(value: Any) -> str:
    """Signed percentage: "+4.25%", "-1.10%", "0.00%"."""
    number = to_decimal(value)
    if number is None:
        return MISSING_PLACEHOLDER
    text = format_percentage(number, 2)
    return f"+{text}" if number > 0 and text != "0.00%" else text


def format_large_number(value: Any) -> str:
    """
    Abbreviate with Indian units.

    >= 1,00,00,000 -> "X.XX Cr", >= 1,00,000 -> "X.XX L", >= 1,000 -> "X.XX K",
    otherwise the full number with 2 decimals. A value exactly on a
    threshold belongs to the higher unit (100000 -> "1.00 L").
    """
    number = to_decimal(value)
    if number is None:
        return MISSING_PLACEHOLDER

    scaled, unit = _abbreviate(number)
    if not unit:
        return format_number(number, decimals=2)

    negative, integer, fraction = _fixed(scaled, 2, 2)
    return f"{'-' if negative else ''}{integer}.{fraction} {unit}"


def parse_currency(text: Any, locale: Optional[str] = None) -> Decimal:
    """
    Parse a formatted amount back to Decimal.

    Symbols, codes and group separators are dropped; the locale's decimal
    separator is honoured. Blank or unparsable input gives Decimal(0).
    Compact strings ("12.00 L") are not expanded.
    """
    if is_blank(text):
        return Decimal(0)
    if not isinstance(text, str):
        return to_decimal(text) or Decimal(0)

    group, point = _separators(locale)
    cleaned = text.replace(group, "")
    if point != ".":
        cleaned = cleaned.replace(point, ".")
    cleaned = _NOT_NUMERIC.sub("", cleaned)

    result = to_decimal(cleaned)
    if result is None:
        logger.debug("Could not parse currency text '%s'", text)
        return Decimal(0)
    return result
