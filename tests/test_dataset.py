from __future__ import annotations

import json
from pathlib import Path

import pytest

from sarima_engine.core.dataset import load_observations
from sarima_engine.core.spec import DataSpec


def test_load_csv_with_window(daily_csv: Path):
    spec = DataSpec(
        dataset_path=str(daily_csv),
        date_col="Date",
        value_col="Tmax",
        start="2011-01-01",
        end="2011-12-31",
    )
    df = load_observations(spec)
    assert list(df.columns) == ["date", "value"]
    assert len(df) == 365
    assert df["date"].is_monotonic_increasing
    assert df["date"].iloc[0].strftime("%Y-%m-%d") == "2011-01-01"


def test_load_json_drops_unparseable_values(tmp_path: Path):
    rows = [
        {"date": "2020-01-02", "value": "3.5"},
        {"date": "2020-01-01", "value": 1.5},
        {"date": "2020-01-03", "value": "n/a"},
    ]
    path = tmp_path / "obs.json"
    path.write_text(json.dumps(rows))
    df = load_observations(DataSpec(dataset_path=str(path)))
    assert df["value"].tolist() == [1.5, 3.5]


def test_skiprows(tmp_path: Path):
    path = tmp_path / "obs.csv"
    path.write_text("date,value\n2019-12-31,9\n2020-01-01,1\n2020-01-02,2\n")
    df = load_observations(DataSpec(dataset_path=str(path), skiprows=1))
    assert df["value"].tolist() == [1.0, 2.0]


def test_missing_column(tmp_path: Path):
    path = tmp_path / "obs.csv"
    path.write_text("day,tmax\n2020-01-01,1\n")
    with pytest.raises(RuntimeError):
        load_observations(DataSpec(dataset_path=str(path)))
