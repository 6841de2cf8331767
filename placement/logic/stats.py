"""
Numeric helpers shared by the aggregation, ranking and prediction stages.

Every ratio here is guarded: a zero denominator yields 0, never NaN or inf.
"""

import math
from typing import Any, Iterable, Optional


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves away from zero for positives, like the dashboard does."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def safe_ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def percent(part: float, whole: float) -> int:
    """Integer percentage of part over whole; 0 when whole is 0."""
    return int(round_half_up(100 * safe_ratio(part, whole)))


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def parse_optional_float(value: Any) -> Optional[float]:
    """
    Parse loosely-typed numeric input.

    Empty, missing or non-numeric values mean "no value" and return None,
    never 0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def parse_optional_int(value: Any) -> Optional[int]:
    result = parse_optional_float(value)
    if result is None or not result.is_integer():
        return None
    return int(result)
