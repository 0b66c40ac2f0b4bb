"""Refit a selected order and forecast with normal-approximation bounds."""
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import pandas as pd

from ..core.types import FitResult, ForecastResult, ModelSpec
from ..errors import FatalFitFailure
from ..logging_utils import get_logger
from ..models.sarima import estimate, summarize

log = get_logger(__name__)

Z_95 = 1.96


def forecast(
    values: Sequence[float],
    spec: ModelSpec,
    horizon: int = 12,
    z: float = Z_95,
    ljung_box_lag: int = 12,
    maxiter: int = 50,
) -> Tuple[FitResult, ForecastResult]:
    """Re-estimate ``spec`` on ``values`` and forecast ``horizon`` steps.

    Bounds are ``point ± z * se`` from the forecast standard errors rather
    than the model's own predictive intervals.  There is no retry: any
    failure of the refit raises :class:`FatalFitFailure`.
    """

    if horizon < 1:
        raise ValueError("horizon must be >= 1")
    try:
        res = estimate(values, spec, maxiter=maxiter)
        fit = summarize(res, spec, ljung_box_lag)
        prediction = res.get_forecast(steps=horizon)
        points = np.asarray(prediction.predicted_mean, dtype=float)
        errors = np.asarray(prediction.se_mean, dtype=float)
    except Exception as exc:
        raise FatalFitFailure(f"refit of {spec.label} failed: {exc}") from exc

    if not (np.all(np.isfinite(points)) and np.all(np.isfinite(errors))):
        raise FatalFitFailure(f"refit of {spec.label} produced non-finite forecasts")

    result = ForecastResult(
        spec=spec,
        point_forecasts=tuple(float(v) for v in points),
        standard_errors=tuple(float(v) for v in errors),
        lower_bound=tuple(float(v) for v in points - z * errors),
        upper_bound=tuple(float(v) for v in points + z * errors),
        z=z,
    )
    log.info("forecast.completed", label=spec.label, horizon=horizon)
    return fit, result


def compare(result: ForecastResult, actual: Sequence[float]) -> pd.DataFrame:
    """Per-step comparison of the forecast with held-out actual values."""

    n = min(result.horizon, len(actual))
    rows = []
    for i in range(n):
        a = float(actual[i])
        point = result.point_forecasts[i]
        lower = result.lower_bound[i]
        upper = result.upper_bound[i]
        rows.append(
            {
                "step": i + 1,
                "actual": a,
                "forecast": point,
                "se": result.standard_errors[i],
                "lower": lower,
                "upper": upper,
                "error": a - point,
                "within_bounds": bool(lower <= a <= upper),
            }
        )
    return pd.DataFrame(
        rows,
        columns=["step", "actual", "forecast", "se", "lower", "upper", "error", "within_bounds"],
    )
