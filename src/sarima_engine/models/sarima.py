"""Seasonal ARIMA estimation on top of ``statsmodels``.

:func:`fit_candidate` never raises for estimation problems: it returns a
:class:`~sarima_engine.core.types.FitFailure` describing why the candidate
was rejected, so that a grid search can carry on with the next one.
"""
from __future__ import annotations

import math
import warnings
from typing import Sequence

import numpy as np
from statsmodels.tools.sm_exceptions import ConvergenceWarning
from statsmodels.tsa.statespace.sarimax import SARIMAX, SARIMAXResults

from ..core.types import FitFailure, FitOutcome, FitResult, ModelSpec
from ..logging_utils import get_logger
from ..stats.estimators import ljung_box_p_value, sum_squared

log = get_logger(__name__)


def estimate(values: Sequence[float], spec: ModelSpec, maxiter: int = 50) -> SARIMAXResults:
    """Fit ``spec`` to ``values`` by maximum likelihood and return the raw results."""

    model = SARIMAX(
        np.asarray(values, dtype=float),
        order=spec.order,
        seasonal_order=spec.seasonal_order,
    )
    return model.fit(disp=False, maxiter=maxiter)


def _converged(res: SARIMAXResults) -> bool:
    retvals = getattr(res, "mle_retvals", None) or {}
    return bool(retvals.get("converged", True))


def summarize(res: SARIMAXResults, spec: ModelSpec, ljung_box_lag: int = 12) -> FitResult:
    """Score a fitted model: AIC, residual SSE and Ljung-Box p-value.

    The first ``loglikelihood_burn`` residuals (d + D*s of them) come from the
    diffuse initialisation and are dropped before scoring.
    """

    burn = int(getattr(res, "loglikelihood_burn", 0) or 0)
    residuals = np.asarray(res.resid, dtype=float)[burn:]
    return FitResult(
        spec=spec,
        coefficients=tuple(float(v) for v in np.asarray(res.params, dtype=float)),
        param_names=tuple(str(n) for n in res.model.param_names),
        aic=float(res.aic),
        sse=sum_squared(residuals),
        ljung_box_p_value=ljung_box_p_value(residuals, ljung_box_lag),
        residuals=tuple(float(v) for v in residuals),
    )


def fit_candidate(
    values: Sequence[float],
    spec: ModelSpec,
    ljung_box_lag: int = 12,
    maxiter: int = 50,
    strict_convergence: bool = False,
) -> FitOutcome:
    """Estimate one candidate and return its scores or the failure reason."""

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            res = estimate(values, spec, maxiter=maxiter)
            result = summarize(res, spec, ljung_box_lag)
        except Exception as exc:
            return FitFailure(spec=spec, reason=f"{type(exc).__name__}: {exc}")

    conv_warnings = [w for w in caught if issubclass(w.category, ConvergenceWarning)]
    if strict_convergence and (conv_warnings or not _converged(res)):
        return FitFailure(spec=spec, reason="optimizer did not converge")
    if conv_warnings:
        log.debug("fit.convergence_warning", label=spec.label, count=len(conv_warnings))

    scores = (result.aic, result.sse, result.ljung_box_p_value)
    if not all(math.isfinite(v) for v in scores):
        return FitFailure(spec=spec, reason=f"non-finite scores {scores}")
    return result
