from __future__ import annotations

import csv
import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest


def synthetic_daily(start: str = "2010-01-01", end: str = "2019-12-31", seed: int = 7) -> pd.DataFrame:
    """Ten years of daily maxima with an annual cycle and Gaussian noise."""

    dates = pd.date_range(start, end, freq="D")
    rng = np.random.RandomState(seed)
    doy = dates.dayofyear.to_numpy()
    values = 20.0 + 8.0 * np.sin(2 * np.pi * (doy - 105) / 365.25) + rng.normal(0.0, 2.0, len(dates))
    return pd.DataFrame({"date": dates, "value": np.round(values, 2)})


def write_daily_csv(path: Path, df: pd.DataFrame, date_col: str = "Date", value_col: str = "Tmax") -> None:
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=[date_col, value_col])
        writer.writeheader()
        for ts, value in zip(df["date"], df["value"]):
            writer.writerow({date_col: ts.strftime("%Y-%m-%d"), value_col: f"{value:.2f}"})


@pytest.fixture(scope="session")
def daily_frame() -> pd.DataFrame:
    return synthetic_daily()


@pytest.fixture(scope="session")
def train_values(daily_frame):
    from sarima_engine.seasonality.aggregate import monthly_means, monthly_values

    return monthly_values(monthly_means(daily_frame))[:108]


@pytest.fixture()
def daily_csv(tmp_path: Path, daily_frame) -> Path:
    path = tmp_path / "tmax.csv"
    write_daily_csv(path, daily_frame)
    return path


@pytest.fixture()
def spec_path(tmp_path: Path, daily_csv: Path) -> Path:
    raw = {
        "data": {"dataset_path": str(daily_csv), "date_col": "Date", "value_col": "Tmax"},
        "search": {"maxiter": 50},
        "artifacts": {"out_dir": str(tmp_path / "artifacts")},
    }
    path = tmp_path / "spec.json"
    path.write_text(json.dumps(raw))
    return path
