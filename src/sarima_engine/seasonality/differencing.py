"""Lagged differencing of ordered real sequences."""
from __future__ import annotations

from typing import Sequence, Tuple


def _check_lag(lag: int) -> None:
    if lag < 1:
        raise ValueError(f"lag must be >= 1, got {lag}")


def difference(x: Sequence[float], lag: int = 1) -> Tuple[float, ...]:
    """Return ``y[i] = x[i + lag] - x[i]``; ``len(y) == max(len(x) - lag, 0)``."""

    _check_lag(lag)
    values = [float(v) for v in x]
    return tuple(values[i] - values[i - lag] for i in range(lag, len(values)))


def seasonal_then_first(x: Sequence[float], period: int = 12) -> Tuple[float, ...]:
    """Seasonal difference at ``period`` followed by a first difference."""

    return difference(difference(x, period), 1)


def integrate(y: Sequence[float], head: Sequence[float], lag: int = 1) -> Tuple[float, ...]:
    """Invert :func:`difference` given the first ``lag`` original values."""

    _check_lag(lag)
    if len(head) != lag:
        raise ValueError(f"head must hold exactly {lag} values, got {len(head)}")
    out = [float(v) for v in head]
    for i, delta in enumerate(y):
        out.append(out[i] + float(delta))
    return tuple(out)
