"""Value types passed between pipeline stages.

Every stage consumes these immutable values and returns new ones; nothing is
mutated after creation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Tuple, Union


@dataclass(frozen=True)
class Observation:
    date: date
    value: float


@dataclass(frozen=True)
class MonthlyMean:
    year: int
    month: int
    value: float


@dataclass(frozen=True)
class SeriesWindow:
    """Contiguous slice of the monthly series with an implicit period."""

    values: Tuple[float, ...]
    start_year: int
    start_month: int
    period: int = 12

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class ModelSpec:
    """Seasonal ARIMA order ``(p, d, q)(P, D, Q)[s]``."""

    p: int
    d: int
    q: int
    P: int
    D: int
    Q: int
    s: int = 12

    @property
    def order(self) -> Tuple[int, int, int]:
        return (self.p, self.d, self.q)

    @property
    def seasonal_order(self) -> Tuple[int, int, int, int]:
        return (self.P, self.D, self.Q, self.s)

    @property
    def label(self) -> str:
        return f"SARIMA({self.p},{self.d},{self.q})({self.P},{self.D},{self.Q})[{self.s}]"

    def to_dict(self) -> Dict[str, int]:
        return {
            "p": self.p,
            "d": self.d,
            "q": self.q,
            "P": self.P,
            "D": self.D,
            "Q": self.Q,
            "s": self.s,
        }

    @classmethod
    def from_sequence(cls, values, s: int = 12) -> "ModelSpec":
        """Build a spec from ``(p, d, q, P, D, Q)`` or ``(p, d, q, P, D, Q, s)``."""

        items = [int(v) for v in values]
        if len(items) == 6:
            items.append(s)
        if len(items) != 7:
            raise ValueError("order must have 6 or 7 integers: p,d,q,P,D,Q[,s]")
        if any(v < 0 for v in items) or items[6] < 1:
            raise ValueError(f"invalid order {items}")
        return cls(*items)


@dataclass(frozen=True)
class FitResult:
    spec: ModelSpec
    coefficients: Tuple[float, ...]
    param_names: Tuple[str, ...]
    aic: float
    sse: float
    ljung_box_p_value: float
    residuals: Tuple[float, ...] = field(repr=False)

    def coefficient_map(self) -> Dict[str, float]:
        return dict(zip(self.param_names, self.coefficients))


@dataclass(frozen=True)
class FitFailure:
    """A candidate that could not be estimated."""

    spec: ModelSpec
    reason: str


FitOutcome = Union[FitResult, FitFailure]


@dataclass(frozen=True)
class ForecastResult:
    spec: ModelSpec
    point_forecasts: Tuple[float, ...]
    standard_errors: Tuple[float, ...]
    lower_bound: Tuple[float, ...]
    upper_bound: Tuple[float, ...]
    z: float = 1.96

    @property
    def horizon(self) -> int:
        return len(self.point_forecasts)


@dataclass(frozen=True)
class StationarityResult:
    """Augmented Dickey-Fuller test outcome."""

    statistic: float
    p_value: float
    used_lag: int
    n_obs: int
    critical_values: Dict[str, float]


@dataclass(frozen=True)
class CorrelationProfile:
    acf: Tuple[float, ...]
    pacf: Tuple[float, ...]
    confint: float
    significant_acf_lags: Tuple[int, ...]
    significant_pacf_lags: Tuple[int, ...]


@dataclass(frozen=True)
class CandidateOrders:
    """Upper bounds for the AR/MA orders read off the correlograms."""

    p: int
    q: int
    P: int
    Q: int

    def to_dict(self) -> Dict[str, int]:
        return {"p": self.p, "q": self.q, "P": self.P, "Q": self.Q}


__all__ = [
    "Observation",
    "MonthlyMean",
    "SeriesWindow",
    "ModelSpec",
    "FitResult",
    "FitFailure",
    "FitOutcome",
    "ForecastResult",
    "StationarityResult",
    "CorrelationProfile",
    "CandidateOrders",
]
