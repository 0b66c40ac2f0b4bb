import math

import numpy as np
import pandas as pd
import pytest

from sarima_engine.errors import InsufficientDataError
from sarima_engine.stats import estimators


def test_describe(daily_frame):
    out = estimators.describe(daily_frame)
    assert out["count"] == len(daily_frame)
    assert out["min"] <= out["q25"] <= out["median"] <= out["q75"] <= out["max"]
    assert out["mean"] == pytest.approx(daily_frame["value"].mean())


def test_describe_empty():
    out = estimators.describe(pd.DataFrame({"date": [], "value": []}))
    assert out["count"] == 0
    assert math.isnan(out["mean"])


def test_yearly_means(daily_frame):
    table = estimators.yearly_means(daily_frame)
    assert table["year"].tolist() == list(range(2010, 2020))
    assert table["count"].tolist()[2] == 366


def test_ljung_box_p_value():
    rng = np.random.RandomState(5)
    noise = rng.normal(size=200)
    assert estimators.ljung_box_p_value(noise, 12) > 0.001
    trend = np.arange(200, dtype=float)
    assert estimators.ljung_box_p_value(trend, 12) < 1e-6
    with pytest.raises(InsufficientDataError):
        estimators.ljung_box_p_value([0.1] * 5, 12)


def test_sum_squared():
    assert estimators.sum_squared([1.0, -2.0, 3.0]) == 14.0
