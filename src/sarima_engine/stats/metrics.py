"""Forecast accuracy metrics against held-out actuals."""
from __future__ import annotations

import math
from typing import Dict, List


def _check_lengths(*series: List[float]) -> int:
    lengths = {len(s) for s in series}
    if len(lengths) != 1:
        raise ValueError(f"series lengths differ: {sorted(lengths)}")
    return lengths.pop()


def mae(actual: List[float], predicted: List[float]) -> float:
    n = _check_lengths(actual, predicted)
    if n == 0:
        return 0.0
    return sum(abs(a - p) for a, p in zip(actual, predicted)) / n


def rmse(actual: List[float], predicted: List[float]) -> float:
    n = _check_lengths(actual, predicted)
    if n == 0:
        return 0.0
    return math.sqrt(sum((a - p) ** 2 for a, p in zip(actual, predicted)) / n)


def mape(actual: List[float], predicted: List[float]) -> float:
    """Mean absolute percentage error, skipping zero actuals."""

    _check_lengths(actual, predicted)
    terms = [abs((a - p) / a) for a, p in zip(actual, predicted) if a != 0]
    if not terms:
        return math.nan
    return sum(terms) / len(terms) * 100.0


def bias(actual: List[float], predicted: List[float]) -> float:
    n = _check_lengths(actual, predicted)
    if n == 0:
        return 0.0
    return sum(p - a for a, p in zip(actual, predicted)) / n


def coverage(actual: List[float], lower: List[float], upper: List[float]) -> float:
    """Share of actuals falling inside ``[lower, upper]``."""

    n = _check_lengths(actual, lower, upper)
    if n == 0:
        return 0.0
    inside = sum(1 for a, lo, hi in zip(actual, lower, upper) if lo <= a <= hi)
    return inside / n


def compute(
    actual: List[float],
    predicted: List[float],
    lower: List[float],
    upper: List[float],
) -> Dict[str, float]:
    return {
        "mae": mae(actual, predicted),
        "rmse": rmse(actual, predicted),
        "mape": mape(actual, predicted),
        "bias": bias(actual, predicted),
        "coverage": coverage(actual, lower, upper),
        "n": float(len(actual)),
    }
