from __future__ import annotations

import json
from pathlib import Path

import pytest

from sarima_engine.core import spec
from sarima_engine.errors import InsufficientDataError, PipelineError
from sarima_engine.pipeline import runner


def test_pipeline_end_to_end(spec_path: Path, tmp_path: Path):
    sp = spec.load_spec(spec_path)
    result = runner.run(sp)

    assert [s.value for s in result.completed] == ["load", "aggregate", "analyze", "select", "forecast"]
    assert len(result.monthly) == 120
    assert len(result.train) == 108 and len(result.test) == 12
    assert (result.test.start_year, result.test.start_month) == (2019, 1)
    assert result.grid.attempted == 16
    assert all(result.selected.aic <= r.aic for r in result.grid.results)
    assert result.refit.spec == result.selected.spec
    assert result.forecast.horizon == 12
    assert len(result.comparison) == 12
    assert result.metrics["coverage"] == 1.0
    assert all(result.comparison["within_bounds"])
    assert result.refit.ljung_box_p_value > 0.01
    assert result.refit.sse < 96 * 1.0

    out_dir = tmp_path / "artifacts"
    for name in ("monthly_means", "analysis", "comparison", "selected", "forecast", "summary"):
        assert (out_dir / f"{name}.json").exists()
    summary = json.loads((out_dir / "summary.json").read_text())
    assert summary["selected"]["label"] == result.selected.spec.label
    assert summary["stages"][-1] == "forecast"
    assert [y["year"] for y in summary["yearly"]] == list(range(2010, 2020))
    assert summary["yearly"][2]["count"] == 366
    comparison = json.loads((out_dir / "comparison.json").read_text())
    assert len(comparison) == len(result.grid.results)


def test_empty_dataset_fails_in_aggregate_stage(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("date,value\n")
    sp = spec.spec_from_dict({"data": {"dataset_path": str(path)}})
    with pytest.raises(PipelineError) as excinfo:
        runner.run(sp)
    assert excinfo.value.stage == "aggregate"
    assert isinstance(excinfo.value.cause, InsufficientDataError)


def test_short_dataset_fails_before_selection(tmp_path: Path, daily_frame):
    path = tmp_path / "short.csv"
    daily_frame.iloc[:400].to_csv(path, index=False)
    sp = spec.spec_from_dict({"data": {"dataset_path": str(path)}})
    with pytest.raises(PipelineError) as excinfo:
        runner.run(sp)
    assert excinfo.value.stage == "aggregate"
    assert "108/12" in str(excinfo.value)


def test_all_candidates_failing_stops_at_select(monkeypatch, spec_path: Path):
    from sarima_engine.core.types import FitFailure
    from sarima_engine.optimize import runner as grid_runner

    def always_fail(values, spec, **kwargs):
        return FitFailure(spec=spec, reason="forced")

    monkeypatch.setattr(grid_runner, "fit_candidate", always_fail)
    monkeypatch.setattr(runner, "fit_candidate", always_fail)
    sp = spec.load_spec(spec_path)
    with pytest.raises(PipelineError) as excinfo:
        runner.run(sp)
    assert excinfo.value.stage == "select"
