"""
Statistical helpers for dashboard figures (returns, NAV series, ratings).

average / median / standard_deviation return 0.0 for empty input rather
than raising. Callers that must tell "no data" from "zero" check the
length themselves.
"""
import logging
from typing import Any, Iterable, List

import numpy as np

from fundkit.coercion import to_number

logger = logging.getLogger(__name__)


def _as_floats(values: Iterable[Any]) -> List[float]:
    if values is None or isinstance(values, (str, bytes)):
        return []
    numbers = [to_number(v) for v in values]
    dropped = sum(1 for n in numbers if n is None)
    if dropped:
        logger.debug("Ignoring %d non-numeric value(s)", dropped)
    return [n for n in numbers if n is not None]


def average(values: Iterable[Any]) -> float:
    numbers = _as_floats(values)
    if not numbers:
        return 0.0
    return float(np.mean(numbers))


def median(values: Iterable[Any]) -> float:
    numbers = _as_floats(values)
    if not numbers:
        return 0.0
    return float(np.median(numbers))


def standard_deviation(values: Iterable[Any]) -> float:
    """Population standard deviation; fewer than two values gives 0.0."""
    numbers = _as_floats(values)
    if len(numbers) < 2:
        return 0.0
    return float(np.std(numbers))


def normalize(value: float, minimum: float, maximum: float) -> float:
    """Position of *value* in [minimum, maximum]; a zero-width range gives 1.0."""
    if minimum == maximum:
        return 1.0
    return (value - minimum) / (maximum - minimum)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return float(np.clip(value, minimum, maximum))


def round_to_nearest(value: float, nearest: float = 0.05) -> float:
    """Round to the nearest multiple of *nearest* (half away from zero)."""
    if nearest <= 0:
        raise ValueError(f"nearest must be > 0, got {nearest}")
    steps = value / nearest
    rounded = np.floor(abs(steps) + 0.5) * np.sign(steps)
    return float(round(rounded * nearest, 10))
