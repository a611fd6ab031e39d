"""
Value coercion shared by validators, formatters and the query helper.

Form payloads arrive as JSON: numbers may be strings, dates are ISO text,
checkboxes are booleans. These helpers turn such values into Decimal,
float or datetime and return None instead of raising when they cannot.
"""
import math
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil import parser as date_parser


def is_blank(value: Any) -> bool:
    """
    True for values a form treats as "not provided".

    None, empty or whitespace-only strings, empty collections and NaN are
    blank. 0 and False are real values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce *value* to a finite Decimal, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result


def to_number(value: Any) -> Optional[float]:
    """Coerce *value* to a finite float, or None."""
    dec = to_decimal(value)
    return float(dec) if dec is not None else None


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce *value* to a datetime.

    datetime is returned as is, date is taken at midnight and strings go
    through dateutil's parser. Anything else, or unparsable text, is None.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value.strip())
        except (ValueError, OverflowError):
            return None
    return None


def to_timestamp(value: Any) -> Optional[float]:
    """POSIX timestamp of *value*; naive datetimes are read as UTC."""
    parsed = to_datetime(value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()
