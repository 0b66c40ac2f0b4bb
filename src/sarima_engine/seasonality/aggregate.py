"""Reduce daily observations to calendar-month means."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

import pandas as pd

from ..core.dataset import observations_from_records
from ..core.types import MonthlyMean, Observation
from ..errors import InsufficientDataError

ObservationsLike = Union[pd.DataFrame, Sequence[Observation]]


def _as_frame(observations: ObservationsLike) -> pd.DataFrame:
    if isinstance(observations, pd.DataFrame):
        return observations
    return observations_from_records(observations)


def monthly_means(observations: ObservationsLike) -> List[MonthlyMean]:
    """Return the arithmetic mean of ``value`` per (year, month).

    Accepts either the loader's ``date``/``value`` frame or a sequence of
    :class:`Observation`.  The result is ordered by (year, month).
    """

    df = _as_frame(observations)
    if df.empty:
        raise InsufficientDataError("cannot aggregate an empty observation sequence")

    dates = pd.to_datetime(df["date"])
    grouped = (
        pd.DataFrame({"year": dates.dt.year, "month": dates.dt.month, "value": df["value"].astype(float)})
        .groupby(["year", "month"], sort=True)["value"]
        .mean()
    )
    return [
        MonthlyMean(year=int(year), month=int(month), value=float(value))
        for (year, month), value in grouped.items()
    ]


def monthly_frame(means: Iterable[MonthlyMean]) -> pd.DataFrame:
    """Tabulate monthly means with ``year``, ``month`` and ``value`` columns."""

    return pd.DataFrame(
        [{"year": m.year, "month": m.month, "value": m.value} for m in means],
        columns=["year", "month", "value"],
    )


def monthly_values(means: Sequence[MonthlyMean]) -> Tuple[float, ...]:
    return tuple(m.value for m in means)
