"""
Prometheus Metrics — validation and query observability.

Exposes counters and histograms for:
- Form validations per schema and outcome
- Field-level validation failures
- Collection query latency

Usage
-----
    from fundkit.metrics import record_validation, timed_query

    record_validation("kyc", result)

    with timed_query("users"):
        page = query(users, criteria)

Only schema and field names are used as labels; payload values never
reach a metric.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram

from fundkit.models.validation import ValidationResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Validations run, labelled by schema and outcome ("valid" / "invalid").
VALIDATIONS: Counter = Counter(
    "fundkit_validations_total",
    "Form validations by schema and outcome",
    ["schema", "outcome"],
)

# Failing fields, labelled by schema and field name.
VALIDATION_FAILURES: Counter = Counter(
    "fundkit_validation_failures_total",
    "Field-level validation failures by schema and field",
    ["schema", "field"],
)

# Query latency per list (seconds).
QUERY_LATENCY: Histogram = Histogram(
    "fundkit_query_seconds",
    "Collection query time in seconds",
    ["collection"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

# Criteria rejected as malformed.
INVALID_CRITERIA: Counter = Counter(
    "fundkit_invalid_criteria_total",
    "Query criteria rejected as malformed",
    ["collection"],
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_validation(schema: str, result: ValidationResult) -> None:
    """Count one validation of *schema* and each failing field."""
    outcome = "valid" if result.is_valid else "invalid"
    VALIDATIONS.labels(schema=schema, outcome=outcome).inc()
    for field_name in result.errors:
        VALIDATION_FAILURES.labels(schema=schema, field=field_name).inc()


def record_invalid_criteria(collection: str = "default") -> None:
    INVALID_CRITERIA.labels(collection=collection).inc()


@contextmanager
def timed_query(collection: str = "default") -> Generator[None, None, None]:
    """
    Context manager that records query latency for *collection*.

    Usage::

        with timed_query("audit_logs"):
            page = query(logs, criteria)
    """
    with QUERY_LATENCY.labels(collection=collection).time():
        yield
