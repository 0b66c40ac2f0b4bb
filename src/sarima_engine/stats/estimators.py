"""Estimator helpers for model scoring and descriptive summaries."""
from __future__ import annotations

import math
from typing import Dict, Sequence

import numpy as np
import pandas as pd
from statsmodels.stats.diagnostic import acorr_ljungbox

from ..errors import InsufficientDataError


def sum_squared(residuals: Sequence[float]) -> float:
    """Return the sum of squared residuals."""

    arr = np.asarray(residuals, dtype=float)
    return float(np.sum(arr * arr))


def ljung_box_p_value(residuals: Sequence[float], lag: int = 12) -> float:
    """Return the Ljung-Box p-value at ``lag``.

    A high p-value means no evidence of autocorrelation left in the
    residuals up to ``lag``.
    """

    arr = np.asarray(residuals, dtype=float)
    if len(arr) <= lag:
        raise InsufficientDataError(
            f"Ljung-Box at lag {lag} needs more than {lag} residuals, got {len(arr)}"
        )
    table = acorr_ljungbox(arr, lags=[lag], return_df=True)
    return float(table["lb_pvalue"].iloc[0])


def describe(observations: pd.DataFrame) -> Dict[str, float]:
    """Summary statistics of the ``value`` column of daily observations."""

    values = observations["value"].astype(float)
    if values.empty:
        return {"count": 0, **{k: math.nan for k in ("mean", "std", "min", "q25", "median", "q75", "max")}}
    q = values.quantile([0.25, 0.5, 0.75])
    std = float(values.std()) if len(values) > 1 else math.nan
    return {
        "count": int(values.count()),
        "mean": float(values.mean()),
        "std": std,
        "min": float(values.min()),
        "q25": float(q.loc[0.25]),
        "median": float(q.loc[0.5]),
        "q75": float(q.loc[0.75]),
        "max": float(values.max()),
    }


def yearly_means(observations: pd.DataFrame) -> pd.DataFrame:
    """Mean, min and max of the daily values per calendar year."""

    dates = pd.to_datetime(observations["date"])
    frame = pd.DataFrame({"year": dates.dt.year, "value": observations["value"].astype(float)})
    out = frame.groupby("year", sort=True)["value"].agg(["mean", "min", "max", "count"])
    return out.reset_index()


__all__ = [
    "sum_squared",
    "ljung_box_p_value",
    "describe",
    "yearly_means",
]
