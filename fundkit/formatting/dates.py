"""
Date formatting helpers for statements, transaction lists and reports.

Missing or unparsable dates render as an empty string.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from fundkit.coercion import to_datetime, to_timestamp
from fundkit.config.constants import DATE_FORMATS, FINANCIAL_YEAR_START_MONTH, MONTH_ABBREVIATIONS

logger = logging.getLogger(__name__)


def format_date(value: Any, fmt: str = "dd/mm/yyyy") -> str:
    """
    Render a date as "dd/mm/yyyy", "mm/dd/yyyy", "yyyy-mm-dd" or
    "dd MMM yyyy". Unknown formats fall back to "dd/mm/yyyy".
    """
    parsed = to_datetime(value)
    if parsed is None:
        return ""
    if fmt not in DATE_FORMATS:
        logger.debug("Unknown date format '%s', using dd/mm/yyyy", fmt)

    day = f"{parsed.day:02d}"
    month = f"{parsed.month:02d}"
    year = f"{parsed.year:04d}"

    if fmt == "mm/dd/yyyy":
        return f"{month}/{day}/{year}"
    if fmt == "yyyy-mm-dd":
        return f"{year}-{month}-{day}"
    if fmt == "dd MMM yyyy":
        return f"{day} {MONTH_ABBREVIATIONS[parsed.month - 1]} {year}"
    return f"{day}/{month}/{year}"


def format_datetime(value: Any) -> str:
    """"dd/mm/yyyy HH:MM" (24h)."""
    parsed = to_datetime(value)
    if parsed is None:
        return ""
    return f"{format_date(parsed)} {parsed.hour:02d}:{parsed.minute:02d}"


def format_date_for_input(value: Any) -> str:
    """ISO "yyyy-mm-dd" for date inputs."""
    return format_date(value, "yyyy-mm-dd")


def relative_time(value: Any, now: Optional[datetime] = None) -> str:
    """
    "Just now", "5 minutes ago", "3 hours ago", "2 days ago", then the
    date itself ("12 Mar 2025") from a week on.
    Naive values are read as UTC, the same as the wall clock.
    """
    then = to_timestamp(value)
    if then is None:
        return ""
    current = to_timestamp(now or datetime.now(timezone.utc))

    seconds = int(current - then)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "Just now"
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return format_date(value, "dd MMM yyyy")


def get_age(birth_date: Any, today: Optional[date] = None) -> Optional[int]:
    """Completed years since *birth_date*; None if it cannot be parsed."""
    born = to_datetime(birth_date)
    if born is None:
        return None
    return relativedelta(today or date.today(), born.date()).years


def is_date_in_range(value: Any, start: Any, end: Any) -> bool:
    """Inclusive range check; any unparsable bound gives False."""
    point, low, high = to_timestamp(value), to_timestamp(start), to_timestamp(end)
    if point is None or low is None or high is None:
        return False
    return low <= point <= high


def add_days(value: Any, days: int) -> Optional[datetime]:
    parsed = to_datetime(value)
    return parsed + timedelta(days=days) if parsed is not None else None


def add_months(value: Any, months: int) -> Optional[datetime]:
    """Calendar months; the day is clamped to the target month (31 Jan + 1 -> 28/29 Feb)."""
    parsed = to_datetime(value)
    return parsed + relativedelta(months=months) if parsed is not None else None


def get_financial_year(value: Any = None) -> str:
    """Indian financial year (April to March) containing *value*, e.g. "2024-2025"."""
    parsed = to_datetime(value) if value is not None else datetime.now()
    if parsed is None:
        return ""
    if parsed.month >= FINANCIAL_YEAR_START_MONTH:
        return f"{parsed.year}-{parsed.year + 1}"
    return f"{parsed.year - 1}-{parsed.year}"
