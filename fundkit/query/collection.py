"""
Collection query helper — filter, search, sort and paginate in memory.

Every list screen (users, audit logs, watchlists, transactions, fund
explorer) runs the same pipeline over records it already holds:

    1. Filters      per-field match, kind declared in criteria.field_types
    2. Search       case-insensitive substring over criteria.search_fields
    3. Sort         stable, single key, missing values last
    4. Paginate     after filter + sort; total counts every match

Records may be mappings or plain objects; dotted keys ("returns.oneYear")
reach into nested values.
"""
import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from dateutil.relativedelta import relativedelta
from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate as validate_schema
from pydantic import ValidationError

from fundkit.coercion import is_blank, to_datetime, to_decimal, to_number, to_timestamp
from fundkit.config.constants import FILTER_WILDCARD
from fundkit.config.schemas import QUERY_CRITERIA_SCHEMA
from fundkit.metrics import record_invalid_criteria, timed_query
from fundkit.models.query import QueryCriteria, QueryResult, SortSpec

logger = logging.getLogger(__name__)

_MISSING = object()

_TIME_PART = re.compile(r"\d:\d|T\d")

CriteriaInput = Union[QueryCriteria, Mapping, None]


class InvalidCriteriaError(ValueError):
    """Raised when query criteria are malformed or cannot be applied."""


# ======================================================================
# Field access
# ======================================================================

def resolve_field(record: Any, path: str, default: Any = None) -> Any:
    """
    Value at dotted *path* in *record*, or *default* when any step is absent.

    >>> resolve_field({"returns": {"oneYear": 12.4}}, "returns.oneYear")
    12.4
    """
    current = record
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif hasattr(current, part):
            current = getattr(current, part)
        else:
            return default
    return current


def _carried_by_any(items: Sequence[Any], path: str) -> bool:
    return any(resolve_field(item, path, _MISSING) is not _MISSING for item in items)


# ======================================================================
# Filtering
# ======================================================================

def _is_wildcard(value: Any) -> bool:
    return value is None or value == "" or value == FILTER_WILDCARD


def _day_after(bound: Any) -> Optional[float]:
    """Exclusive cutoff for a date-only upper bound, so its whole day matches."""
    if isinstance(bound, datetime):
        return None
    if isinstance(bound, str):
        if _TIME_PART.search(bound):
            return None
    elif not isinstance(bound, date):
        return None
    parsed = to_datetime(bound)
    if parsed is None:
        return None
    return to_timestamp(datetime.combine(parsed.date(), time.min) + relativedelta(days=1))


def _in_range(
    point: Any,
    bounds: Mapping,
    convert: Callable[[Any], Any],
    cutoff: Optional[Callable[[Any], Any]] = None,
) -> bool:
    if point is None:
        return False
    start, end = bounds.get("start"), bounds.get("end")
    if not is_blank(start):
        low = convert(start)
        if low is None or point < low:
            return False
    if not is_blank(end):
        before = cutoff(end) if cutoff is not None else None
        if before is not None:
            return point < before
        high = convert(end)
        if high is None or point > high:
            return False
    return True


def _matches(value: Any, expected: Any, kind: str) -> bool:
    if value is _MISSING or value is None:
        return False

    if kind == "text":
        return str(expected).casefold() in str(value).casefold()

    if kind == "number":
        if isinstance(expected, Mapping):
            return _in_range(to_decimal(value), expected, to_decimal)
        actual, wanted = to_decimal(value), to_decimal(expected)
        return actual is not None and actual == wanted

    if kind == "date":
        if isinstance(expected, Mapping):
            return _in_range(to_timestamp(value), expected, to_timestamp, cutoff=_day_after)
        actual, wanted = to_timestamp(value), to_timestamp(expected)
        return actual is not None and actual == wanted

    return value == expected


def filter_items(items: Iterable[Any], criteria: QueryCriteria) -> List[Any]:
    """
    Records matching every active filter and the search term.

    Wildcard filter values (None, "", "all") and filter keys that no
    record carries are ignored.
    """
    records = list(items)

    active: Dict[str, Any] = {}
    for key, expected in criteria.filters.items():
        if _is_wildcard(expected):
            continue
        if not _carried_by_any(records, key):
            logger.debug("Ignoring filter on '%s': no record carries it", key)
            continue
        active[key] = expected

    term = (criteria.search or "").strip().casefold()
    if term and not criteria.search_fields:
        logger.debug("Search term given without search fields; ignoring it")
        term = ""

    def keep(record: Any) -> bool:
        for key, expected in active.items():
            if not _matches(resolve_field(record, key, _MISSING), expected, criteria.field_type(key)):
                return False
        if term:
            return any(
                term in str(resolve_field(record, name, "")).casefold()
                for name in criteria.search_fields
            )
        return True

    return [record for record in records if keep(record)]


# ======================================================================
# Sorting
# ======================================================================

def _sort_value(value: Any, kind: str) -> Any:
    if value is _MISSING or value is None:
        return None
    if kind == "date":
        return to_timestamp(value)
    if kind == "number":
        return to_number(value)
    if kind == "text":
        return str(value).casefold()
    return value


def sort_items(items: Iterable[Any], sort: Optional[SortSpec], field_type: str = "keyword") -> List[Any]:
    """
    Stable sort by a single key.

    Ties keep their input order in both directions. Records without a
    usable value for the key go last, also in both directions.

    Raises:
        InvalidCriteriaError: the key holds values that cannot be compared.
    """
    records = list(items)
    if sort is None:
        return records

    present, missing = [], []
    for record in records:
        value = _sort_value(resolve_field(record, sort.key, _MISSING), field_type)
        (missing if value is None else present).append((value, record))

    try:
        ordered = sorted(present, key=lambda pair: pair[0], reverse=sort.direction == "desc")
    except TypeError as e:
        logger.error("Cannot sort on '%s': %s", sort.key, e)
        raise InvalidCriteriaError(f"Values of '{sort.key}' cannot be compared: {e}") from e

    return [record for _, record in ordered] + [record for _, record in missing]


# ======================================================================
# Pagination
# ======================================================================

def paginate(items: Sequence[Any], page: int, page_size: int) -> QueryResult:
    """Slice one page; a page past the end is empty, not an error."""
    if page < 1 or page_size < 1:
        raise InvalidCriteriaError(f"page and page_size must be >= 1, got {page}, {page_size}")
    start = (page - 1) * page_size
    return QueryResult(
        items=tuple(items[start:start + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
    )


# ======================================================================
# Entry point
# ======================================================================

def parse_criteria(criteria: CriteriaInput, collection: str = "default") -> QueryCriteria:
    """
    Build QueryCriteria from a raw dict (JSON schema check, then pydantic).

    Raises:
        InvalidCriteriaError: on either failure.
    """
    if criteria is None:
        return QueryCriteria()
    if isinstance(criteria, QueryCriteria):
        return criteria
    if not isinstance(criteria, Mapping):
        record_invalid_criteria(collection)
        raise InvalidCriteriaError(f"Criteria must be a mapping, got {type(criteria).__name__}")

    raw = dict(criteria)
    try:
        validate_schema(instance=raw, schema=QUERY_CRITERIA_SCHEMA)
    except SchemaValidationError as e:
        record_invalid_criteria(collection)
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        logger.warning("Rejected criteria for '%s' at %s: %s", collection, path, e.message)
        raise InvalidCriteriaError(f"Invalid criteria at {path}: {e.message}") from e

    try:
        return QueryCriteria.model_validate(raw)
    except ValidationError as e:
        record_invalid_criteria(collection)
        logger.warning("Rejected criteria for '%s': %d error(s)", collection, e.error_count())
        raise InvalidCriteriaError(f"Invalid criteria: {e}") from e


def query(items: Iterable[Any], criteria: CriteriaInput = None, collection: str = "default") -> QueryResult:
    """
    Filter, search, sort and paginate *items*.

    Args:
        items: Records already in memory (mappings or objects).
        criteria: QueryCriteria, a raw dict in the client's JSON spelling,
            or None for the first page of everything.
        collection: Label for metrics and logs, e.g. "audit_logs".

    Returns:
        QueryResult with the requested page and the post-filter total.

    Raises:
        InvalidCriteriaError: malformed criteria or an unsortable key.
    """
    parsed = parse_criteria(criteria, collection)

    with timed_query(collection):
        matched = filter_items(items, parsed)
        kind = parsed.field_type(parsed.sort.key) if parsed.sort else "keyword"
        try:
            ordered = sort_items(matched, parsed.sort, kind)
        except InvalidCriteriaError:
            record_invalid_criteria(collection)
            raise
        result = paginate(ordered, parsed.page, parsed.page_size)

    logger.debug(
        "Query on '%s': %d match(es), page %d of %d",
        collection, result.total, result.page, result.pages,
    )
    return result
