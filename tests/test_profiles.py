import math

import numpy as np
import pytest

from sarima_engine.core.types import CorrelationProfile
from sarima_engine.errors import InsufficientDataError
from sarima_engine.seasonality import profiles


def test_correlation_profile_shapes(train_values):
    prof = profiles.correlation_profile(train_values, nlags=36)
    assert len(prof.acf) == 37
    assert len(prof.pacf) == 37
    assert prof.acf[0] == pytest.approx(1.0)
    assert prof.confint == pytest.approx(1.96 / math.sqrt(108))
    # the raw monthly series carries the annual cycle
    assert 12 in prof.significant_acf_lags


def test_pacf_lags_capped_for_short_series():
    rng = np.random.RandomState(1)
    prof = profiles.correlation_profile(rng.normal(size=40), nlags=30)
    assert len(prof.acf) == 31
    assert len(prof.pacf) == 40 // 2 - 1 + 1


def test_correlation_profile_too_short():
    with pytest.raises(InsufficientDataError):
        profiles.correlation_profile([1.0, 2.0, 3.0], nlags=12)


def test_suggest_orders_reads_cutoffs():
    acf = [1.0] + [0.0] * 36
    pacf = [1.0] + [0.0] * 36
    prof = CorrelationProfile(
        acf=tuple(acf),
        pacf=tuple(pacf),
        confint=0.2,
        significant_acf_lags=(1, 12),
        significant_pacf_lags=(1, 2, 12, 24),
    )
    orders = profiles.suggest_orders(prof, period=12)
    assert orders.to_dict() == {"p": 2, "q": 1, "P": 2, "Q": 1}


def test_adf_test_detects_stationary_noise():
    rng = np.random.RandomState(3)
    res = profiles.adf_test(rng.normal(size=200))
    assert res.p_value < 0.05
    assert set(res.critical_values) == {"1%", "5%", "10%"}
    with pytest.raises(InsufficientDataError):
        profiles.adf_test([1.0] * 5)


def test_analyze_bundles_three_series(train_values):
    result = profiles.analyze(train_values, period=12, nlags=36)
    assert [s.name for s in result.series] == ["raw", "seasonal", "seasonal_first"]
    assert [s.length for s in result.series] == [108, 96, 95]
    payload = result.to_serialisable()
    assert set(payload["suggested_orders"]) == {"p", "q", "P", "Q"}
    assert result.by_name("seasonal").length == 96
