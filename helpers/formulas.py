"""Pure statistics formulas - no state, easily testable.

Every function tolerates junk input: values that are not real numbers
(None, strings, bools, NaN, inf) are filtered out instead of raising.
"""

import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from numbers import Real
from typing import Any

import numpy as np

STABLE_BAND = 0.1
GRADUAL_BAND = 0.3


def is_number(value: Any) -> bool:
    """True for finite real numbers (bools excluded)."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _numbers(values: Iterable[Any] | None) -> list[float]:
    if values is None or isinstance(values, (str, bytes)):
        return []
    return [v for v in values if is_number(v)]


def _round(value: float, precision: int) -> float | int:
    if precision <= 0:
        return int(round(value))
    return round(value, precision)


def _field(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def sum_values(values: Iterable[Any]) -> float:
    """Sum of numeric values."""
    return sum(_numbers(values))


def average(values: Iterable[Any], precision: int = 1) -> float:
    """Arithmetic mean rounded to `precision` places, 0 when empty."""
    nums = _numbers(values)
    if not nums:
        return 0
    return _round(sum(nums) / len(nums), precision)


def min_value(values: Iterable[Any]) -> float:
    nums = _numbers(values)
    return min(nums) if nums else 0


def max_value(values: Iterable[Any]) -> float:
    nums = _numbers(values)
    return max(nums) if nums else 0


def median(values: Iterable[Any]) -> float:
    """Median; mean of the two middle values for an even count."""
    nums = sorted(_numbers(values))
    if not nums:
        return 0
    mid = len(nums) // 2
    if len(nums) % 2 == 0:
        return (nums[mid - 1] + nums[mid]) / 2
    return nums[mid]


def percentage(value: Any, total: Any, precision: int = 0) -> float | int:
    """value / total as percent (0 when total is 0). Integer when precision is 0."""
    if not is_number(value) or not is_number(total) or total == 0:
        return 0
    return _round(value / total * 100, precision)


def change_rate(current: Any, previous: Any, precision: int = 1) -> dict[str, Any]:
    """Change from previous to current.

    Returns {"value", "rate", "direction"} where direction is one of
    increase, decrease, neutral, new (previous 0, current > 0),
    none (both 0) or invalid (non-numeric input).
    """
    if not is_number(current) or not is_number(previous):
        return {"value": 0, "rate": 0, "direction": "invalid"}

    if previous == 0:
        return {"value": current, "rate": 0, "direction": "new" if current > 0 else "none"}

    delta = current - previous
    rate = _round(delta / previous * 100, precision)

    if delta > 0:
        direction = "increase"
    elif delta < 0:
        direction = "decrease"
    else:
        direction = "neutral"

    return {"value": delta, "rate": rate, "direction": direction}


def group_by(records: Iterable[Any], field: str) -> dict[str, list]:
    """Group records by str(field value), keeping input order. Missing values are skipped."""
    groups: dict[str, list] = {}
    for record in records or []:
        key = _field(record, field)
        if key is None:
            continue
        groups.setdefault(str(key), []).append(record)
    return groups


def group_stats(groups: Mapping[str, Sequence[Any]], value_field: str) -> dict[str, dict[str, float]]:
    """Count / sum / average / min / max / median of one field per group."""
    result = {}
    for key, items in groups.items():
        values = _numbers(_field(item, value_field) for item in items)
        result[key] = {
            "count": len(items),
            "sum": sum_values(values),
            "average": average(values),
            "min": min_value(values),
            "max": max_value(values),
            "median": median(values),
        }
    return result


def top_n(records: Iterable[Any], field: str, limit: int = 5, order: str = "desc") -> list:
    """Stable sort by `field` (numeric when every value is numeric, else text) and truncate."""
    valid = [r for r in records or [] if _field(r, field) is not None]

    if all(is_number(_field(r, field)) for r in valid):
        key = lambda r: _field(r, field)  # noqa: E731
    else:
        key = lambda r: str(_field(r, field)).casefold()  # noqa: E731

    ranked = sorted(valid, key=key, reverse=order == "desc")
    return ranked[: max(0, limit)]


def frequency(records: Iterable[Any], field: str) -> list[dict[str, Any]]:
    """Distinct value counts with percent of total, most common first."""
    counts = Counter(str(v) for v in (_field(r, field) for r in records or []) if v is not None)
    total = sum(counts.values())
    return [
        {"value": value, "count": count, "percentage": percentage(count, total, 1)}
        for value, count in sorted(counts.items(), key=lambda kv: -kv[1])
    ]


def trend_analysis(values: Iterable[Any]) -> dict[str, Any]:
    """Least-squares trend over an index-ordered series.

    strength = |slope| / |mean|; bands: stable < 0.1 <= gradual < 0.3 <= sharp.
    """
    nums = _numbers(values)
    if len(nums) < 2:
        return {
            "direction": "insufficient_data",
            "band": "insufficient_data",
            "strength": 0.0,
            "slope": 0.0,
            "description": "insufficient data",
        }

    y = np.asarray(nums, dtype=float)
    x = np.arange(len(y), dtype=float)
    n = len(y)

    slope = float((n * (x * y).sum() - x.sum() * y.sum()) / (n * (x * x).sum() - x.sum() ** 2))
    mean = float(y.mean())
    strength = abs(slope) / abs(mean) if mean else 0.0

    if strength < STABLE_BAND:
        band = "stable"
    elif strength < GRADUAL_BAND:
        band = "gradual"
    else:
        band = "sharp"

    if band == "stable" or slope == 0:
        direction = "stable"
    else:
        direction = "increasing" if slope > 0 else "decreasing"

    if direction == "stable":
        description = "stable"
    else:
        description = f"{band} {'increase' if slope > 0 else 'decrease'}"

    return {
        "direction": direction,
        "band": band,
        "strength": round(strength, 2),
        "slope": round(slope, 2),
        "description": description,
    }


def correlation(x: Sequence[Any], y: Sequence[Any]) -> float:
    """Pearson correlation (-1..1); 0 on mismatched, short or zero-variance input."""
    if x is None or y is None or len(x) != len(y) or len(x) < 2:
        return 0.0

    pairs = [(a, b) for a, b in zip(x, y) if is_number(a) and is_number(b)]
    if len(pairs) < 2:
        return 0.0

    xs = np.asarray([p[0] for p in pairs], dtype=float)
    ys = np.asarray([p[1] for p in pairs], dtype=float)
    n = len(pairs)

    numerator = n * (xs * ys).sum() - xs.sum() * ys.sum()
    denominator = math.sqrt(max(0.0, (n * (xs * xs).sum() - xs.sum() ** 2) * (n * (ys * ys).sum() - ys.sum() ** 2)))
    if denominator == 0:
        return 0.0

    return round(float(numerator / denominator), 3)


def summary(values: Iterable[Any]) -> dict[str, float]:
    """Descriptive summary of a numeric series."""
    nums = _numbers(values)
    if not nums:
        return {"count": 0, "sum": 0, "average": 0, "min": 0, "max": 0, "median": 0, "range": 0}
    return {
        "count": len(nums),
        "sum": sum(nums),
        "average": average(nums),
        "min": min(nums),
        "max": max(nums),
        "median": median(nums),
        "range": max(nums) - min(nums),
    }


def normalize(values: Iterable[Any]) -> list[float]:
    """Min-max scale to 0..1 (all zeros when the range is 0)."""
    nums = _numbers(values)
    if not nums:
        return []
    low, high = min(nums), max(nums)
    if high == low:
        return [0.0 for _ in nums]
    return [(v - low) / (high - low) for v in nums]
