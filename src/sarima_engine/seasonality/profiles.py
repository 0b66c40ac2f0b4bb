"""Correlation profiles used to propose candidate AR/MA orders."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np
from statsmodels.tsa.stattools import acf, adfuller, pacf

from ..core.types import CandidateOrders, CorrelationProfile, StationarityResult
from ..errors import InsufficientDataError
from ..logging_utils import get_logger
from .differencing import difference, seasonal_then_first

log = get_logger(__name__)

# critical value of the two-sided 95% normal band
Z_95 = 1.96
MIN_ADF_POINTS = 10


def _significant(values: np.ndarray, band: float) -> Tuple[int, ...]:
    return tuple(int(lag) for lag in range(1, len(values)) if abs(values[lag]) > band)


def correlation_profile(x: Sequence[float], nlags: int = 36) -> CorrelationProfile:
    """Return ACF/PACF up to ``nlags`` with the ±1.96/sqrt(n) band.

    The PACF is truncated to ``len(x) // 2 - 1`` lags, the largest order the
    Yule-Walker estimator accepts.
    """

    arr = np.asarray(x, dtype=float)
    n = len(arr)
    if n <= nlags or n < 4:
        raise InsufficientDataError(f"need more than {nlags} points for {nlags} lags, got {n}")
    acf_values = acf(arr, nlags=nlags, fft=True)
    pacf_lags = min(nlags, n // 2 - 1)
    pacf_values = pacf(arr, nlags=pacf_lags, method="ywadjusted")
    band = Z_95 / math.sqrt(n)
    return CorrelationProfile(
        acf=tuple(float(v) for v in acf_values),
        pacf=tuple(float(v) for v in pacf_values),
        confint=band,
        significant_acf_lags=_significant(acf_values, band),
        significant_pacf_lags=_significant(pacf_values, band),
    )


def _leading_run(significant: Sequence[int], lags: Sequence[int]) -> int:
    count = 0
    for lag in lags:
        if lag not in significant:
            break
        count += 1
    return count


def suggest_orders(
    profile: CorrelationProfile,
    period: int = 12,
    max_order: int = 3,
    max_seasonal_order: int = 2,
) -> CandidateOrders:
    """Read AR/MA cut-offs from a differenced series' correlograms.

    ``p``/``q`` count the leading significant PACF/ACF lags among ``1..max_order``;
    ``P``/``Q`` do the same over multiples of ``period``.
    """

    acf_sig = set(profile.significant_acf_lags)
    pacf_sig = set(profile.significant_pacf_lags)
    short = range(1, max_order + 1)
    seasonal_acf = [period * k for k in range(1, max_seasonal_order + 1) if period * k < len(profile.acf)]
    seasonal_pacf = [period * k for k in range(1, max_seasonal_order + 1) if period * k < len(profile.pacf)]
    return CandidateOrders(
        p=_leading_run(pacf_sig, short),
        q=_leading_run(acf_sig, short),
        P=_leading_run(pacf_sig, seasonal_pacf),
        Q=_leading_run(acf_sig, seasonal_acf),
    )


def adf_test(x: Sequence[float]) -> StationarityResult:
    """Augmented Dickey-Fuller unit-root test with AIC lag selection."""

    arr = np.asarray(x, dtype=float)
    if len(arr) < MIN_ADF_POINTS:
        raise InsufficientDataError(
            f"ADF test needs at least {MIN_ADF_POINTS} points, got {len(arr)}"
        )
    statistic, p_value, used_lag, n_obs, critical, *_ = adfuller(arr, autolag="AIC")
    return StationarityResult(
        statistic=float(statistic),
        p_value=float(p_value),
        used_lag=int(used_lag),
        n_obs=int(n_obs),
        critical_values={k: float(v) for k, v in critical.items()},
    )


@dataclass(frozen=True)
class SeriesAnalysis:
    name: str
    length: int
    profile: CorrelationProfile
    stationarity: StationarityResult


@dataclass(frozen=True)
class AnalysisResult:
    series: Tuple[SeriesAnalysis, ...]
    suggested: CandidateOrders

    def by_name(self, name: str) -> SeriesAnalysis:
        for item in self.series:
            if item.name == name:
                return item
        raise KeyError(name)

    def to_serialisable(self) -> Dict[str, Any]:
        return {
            "suggested_orders": self.suggested.to_dict(),
            "series": [
                {
                    "name": s.name,
                    "length": s.length,
                    "adf_statistic": s.stationarity.statistic,
                    "adf_p_value": s.stationarity.p_value,
                    "adf_used_lag": s.stationarity.used_lag,
                    "adf_critical_values": s.stationarity.critical_values,
                    "acf": list(s.profile.acf),
                    "pacf": list(s.profile.pacf),
                    "confint": s.profile.confint,
                    "significant_acf_lags": list(s.profile.significant_acf_lags),
                    "significant_pacf_lags": list(s.profile.significant_pacf_lags),
                }
                for s in self.series
            ],
        }


def analyze(values: Sequence[float], period: int = 12, nlags: int = 36) -> AnalysisResult:
    """Profile the raw, seasonal and seasonal+first differenced series.

    Suggested orders come from the seasonal+first differenced series.
    """

    candidates = (
        ("raw", tuple(float(v) for v in values)),
        ("seasonal", difference(values, period)),
        ("seasonal_first", seasonal_then_first(values, period)),
    )
    items = []
    for name, series in candidates:
        items.append(
            SeriesAnalysis(
                name=name,
                length=len(series),
                profile=correlation_profile(series, nlags),
                stationarity=adf_test(series),
            )
        )
    suggested = suggest_orders(items[-1].profile, period=period)
    log.info(
        "analysis.completed",
        suggested=suggested.to_dict(),
        adf_p_values={i.name: round(i.stationarity.p_value, 4) for i in items},
    )
    return AnalysisResult(series=tuple(items), suggested=suggested)
