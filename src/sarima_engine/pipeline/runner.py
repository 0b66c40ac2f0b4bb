"""Top-level orchestration of a modelling run.

Stages run strictly in order (load, aggregate, analyze, select, forecast).
Each one receives the values produced by the previous stages and returns new
ones; the first failure stops the run with a :class:`PipelineError` naming
the stage, and no partial forecast is returned.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pandas as pd

from ..config import get_settings
from ..core.dataset import load_observations
from ..core.spec import PipelineSpec
from ..core.types import FitFailure, FitOutcome, FitResult, ForecastResult, MonthlyMean, SeriesWindow
from ..errors import PipelineError
from ..forecast.forecaster import compare, forecast
from ..io import artifacts
from ..logging_utils import get_logger
from ..models.sarima import fit_candidate
from ..optimize.runner import GridResult, run_grid, select_best
from ..seasonality.aggregate import monthly_frame, monthly_means
from ..seasonality.profiles import AnalysisResult, analyze
from ..stats import estimators, metrics
from ..validate.splitter import split_window

log = get_logger(__name__)


class Stage(str, Enum):
    LOAD = "load"
    AGGREGATE = "aggregate"
    ANALYZE = "analyze"
    SELECT = "select"
    FORECAST = "forecast"


@contextmanager
def _stage(stage: Stage) -> Iterator[None]:
    log.info("pipeline.stage_started", stage=stage.value)
    try:
        yield
    except PipelineError:
        raise
    except Exception as exc:
        log.error("pipeline.stage_failed", stage=stage.value, error=str(exc))
        raise PipelineError(stage.value, exc) from exc
    log.info("pipeline.stage_completed", stage=stage.value)


@dataclass(frozen=True)
class PipelineResult:
    observations: pd.DataFrame
    description: Dict[str, float]
    monthly: Tuple[MonthlyMean, ...]
    train: SeriesWindow
    test: SeriesWindow
    analysis: AnalysisResult
    exploratory: Optional[FitOutcome]
    grid: GridResult
    selected: FitResult
    refit: FitResult
    forecast: ForecastResult
    comparison: pd.DataFrame
    metrics: Dict[str, float]
    completed: Tuple[Stage, ...]
    artifacts: Dict[str, str] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        exploratory: Optional[Dict[str, Any]] = None
        if isinstance(self.exploratory, FitResult):
            exploratory = _fit_summary(self.exploratory)
        elif isinstance(self.exploratory, FitFailure):
            exploratory = {"label": self.exploratory.spec.label, "failed": self.exploratory.reason}
        return {
            "stages": [s.value for s in self.completed],
            "description": self.description,
            "yearly": _yearly_summary(self.observations),
            "months": len(self.monthly),
            "train": _window_summary(self.train),
            "test": _window_summary(self.test),
            "suggested_orders": self.analysis.suggested.to_dict(),
            "exploratory": exploratory,
            "attempted": self.grid.attempted,
            "failures": [{"label": f.spec.label, "reason": f.reason} for f in self.grid.failures],
            "selected": _fit_summary(self.refit),
            "metrics": self.metrics,
        }


def _yearly_summary(observations: pd.DataFrame) -> List[Dict[str, Any]]:
    table = estimators.yearly_means(observations)
    return [
        {
            "year": int(row["year"]),
            "mean": float(row["mean"]),
            "min": float(row["min"]),
            "max": float(row["max"]),
            "count": int(row["count"]),
        }
        for row in table.to_dict("records")
    ]


def _window_summary(window: SeriesWindow) -> Dict[str, Any]:
    return {"start": f"{window.start_year:04d}-{window.start_month:02d}", "size": len(window)}


def _fit_summary(fit: FitResult) -> Dict[str, Any]:
    return {
        "label": fit.spec.label,
        "spec": fit.spec.to_dict(),
        "coefficients": fit.coefficient_map(),
        "aic": fit.aic,
        "sse": fit.sse,
        "lb_pvalue": fit.ljung_box_p_value,
    }


def _write_artifacts(result: PipelineResult, out_dir: Path) -> Dict[str, str]:
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "monthly_means": out_dir / "monthly_means.json",
        "analysis": out_dir / "analysis.json",
        "comparison": out_dir / "comparison.json",
        "selected": out_dir / "selected.json",
        "forecast": out_dir / "forecast.json",
        "summary": out_dir / "summary.json",
    }
    artifacts.write_table(paths["monthly_means"], monthly_frame(result.monthly))
    artifacts.write_summary(paths["analysis"], result.analysis.to_serialisable())
    artifacts.write_table(paths["comparison"], result.grid.comparison_table())
    artifacts.write_summary(paths["selected"], _fit_summary(result.refit))
    artifacts.write_table(paths["forecast"], result.comparison)
    artifacts.write_summary(paths["summary"], result.summary())
    return {name: str(path) for name, path in paths.items()}


@dataclass(frozen=True)
class PreparedData:
    observations: pd.DataFrame
    description: Dict[str, float]
    monthly: Tuple[MonthlyMean, ...]
    train: SeriesWindow
    test: SeriesWindow


def prepare(spec: PipelineSpec) -> PreparedData:
    """Run the load and aggregate stages and carve the train/test windows."""

    with _stage(Stage.LOAD):
        observations = load_observations(spec.data)
        description = estimators.describe(observations)

    with _stage(Stage.AGGREGATE):
        monthly = tuple(monthly_means(observations))
        train, test = split_window(
            monthly,
            train_size=spec.split.train_size,
            test_size=spec.split.test_size,
            period=spec.search.s,
        )
    return PreparedData(
        observations=observations,
        description=description,
        monthly=monthly,
        train=train,
        test=test,
    )


def run(spec: PipelineSpec, out_dir: str | Path | None = None) -> PipelineResult:
    """Execute the full workflow described by ``spec``."""

    search = spec.search
    data = prepare(spec)
    completed = [Stage.LOAD, Stage.AGGREGATE]
    train, test = data.train, data.test

    with _stage(Stage.ANALYZE):
        analysis = analyze(train.values, period=search.s, nlags=spec.analysis.nlags)
    completed.append(Stage.ANALYZE)

    with _stage(Stage.SELECT):
        exploratory: Optional[FitOutcome] = None
        exploratory_spec = search.exploratory_spec()
        if exploratory_spec is not None:
            exploratory = fit_candidate(
                train.values,
                exploratory_spec,
                ljung_box_lag=search.ljung_box_lag,
                maxiter=search.maxiter,
                strict_convergence=search.strict_convergence,
            )
            if isinstance(exploratory, FitFailure):
                log.warning("exploratory.failed", label=exploratory_spec.label, reason=exploratory.reason)
        grid = run_grid(train.values, search)
        selected = select_best(grid.results)
    completed.append(Stage.SELECT)

    with _stage(Stage.FORECAST):
        refit, prediction = forecast(
            train.values,
            selected.spec,
            horizon=spec.forecast.horizon,
            z=spec.forecast.z,
            ljung_box_lag=search.ljung_box_lag,
            maxiter=search.maxiter,
        )
        comparison = compare(prediction, test.values)
        accuracy = metrics.compute(
            comparison["actual"].tolist(),
            comparison["forecast"].tolist(),
            comparison["lower"].tolist(),
            comparison["upper"].tolist(),
        )
    completed.append(Stage.FORECAST)

    result = PipelineResult(
        observations=data.observations,
        description=data.description,
        monthly=data.monthly,
        train=train,
        test=test,
        analysis=analysis,
        exploratory=exploratory,
        grid=grid,
        selected=selected,
        refit=refit,
        forecast=prediction,
        comparison=comparison,
        metrics=accuracy,
        completed=tuple(completed),
    )

    target = out_dir or spec.artifacts.out_dir or get_settings().artifacts_dir
    if target:
        paths = _write_artifacts(result, Path(target))
        result = replace(result, artifacts=paths)
    return result
