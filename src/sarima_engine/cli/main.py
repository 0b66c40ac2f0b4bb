"""Command line interface entry points."""
from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError

from ..core import spec as spec_module
from ..errors import PipelineError
from ..logging_utils import configure_logging

app = typer.Typer()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override SARIMA_LOG_LEVEL"),
) -> None:
    """Seasonal ARIMA model selection and forecasting for monthly means."""

    configure_logging(level=log_level)


def _fail(exc: PipelineError) -> NoReturn:
    typer.echo(str(exc), err=True)
    raise typer.Exit(1)


def _load_spec(path: Path) -> spec_module.PipelineSpec:
    try:
        return spec_module.load_spec(path)
    except (ValidationError, json.JSONDecodeError) as exc:
        _fail(PipelineError("spec", exc))


def _show_table(title: str, df) -> None:
    typer.echo(title)
    if df.empty:
        typer.echo("(empty)")
    else:
        typer.echo(df.to_string(index=False))


@app.command("run")
def run(
    spec: Path = typer.Option(..., "--spec", exists=True, file_okay=True, dir_okay=False),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", file_okay=False),
) -> None:
    """Run the whole pipeline and print the comparison and forecast tables."""

    from ..pipeline.runner import run as run_pipeline

    sp = _load_spec(spec)
    try:
        result = run_pipeline(sp, out_dir=out_dir)
    except PipelineError as exc:
        _fail(exc)
    _show_table("model comparison", result.grid.comparison_table())
    for failure in result.grid.failures:
        typer.echo(f"skipped {failure.spec.label}: {failure.reason}")
    selected = result.refit
    typer.echo(f"selected: {selected.spec.label} aic={selected.aic:.3f}")
    typer.echo("coefficients: " + json.dumps(selected.coefficient_map(), separators=(",", ":")))
    _show_table("forecast", result.comparison)
    typer.echo("metrics: " + json.dumps(result.metrics, separators=(",", ":")))
    if result.artifacts:
        typer.echo(f"artifacts: {Path(result.artifacts['summary']).parent}")


@app.command("grid")
def grid(spec: Path = typer.Option(..., "--spec", exists=True, file_okay=True, dir_okay=False)) -> None:
    """Fit the candidate grid on the training window and print the table."""

    from ..optimize.runner import run_grid, select_best
    from ..pipeline.runner import prepare

    sp = _load_spec(spec)
    try:
        data = prepare(sp)
    except PipelineError as exc:
        _fail(exc)
    result = run_grid(data.train.values, sp.search)
    _show_table("model comparison", result.comparison_table())
    if result.results:
        typer.echo(f"best: {select_best(result.results).spec.label}")
    else:
        typer.echo("No candidate could be estimated")
        raise typer.Exit(1)


@app.command("analyze")
def analyze(spec: Path = typer.Option(..., "--spec", exists=True, file_okay=True, dir_okay=False)) -> None:
    """Print stationarity tests and correlogram-suggested orders."""

    from ..pipeline.runner import prepare
    from ..seasonality.profiles import analyze as analyze_series

    sp = _load_spec(spec)
    try:
        data = prepare(sp)
    except PipelineError as exc:
        _fail(exc)
    result = analyze_series(data.train.values, period=sp.search.s, nlags=sp.analysis.nlags)
    for item in result.series:
        typer.echo(
            f"{item.name}: n={item.length} adf={item.stationarity.statistic:.3f} "
            f"p={item.stationarity.p_value:.4f} acf_sig={list(item.profile.significant_acf_lags)[:8]}"
        )
    typer.echo("suggested: " + json.dumps(result.suggested.to_dict(), separators=(",", ":")))


@app.command("forecast")
def forecast(
    spec: Path = typer.Option(..., "--spec", exists=True, file_okay=True, dir_okay=False),
    order: str = typer.Option(..., "--order", help="p,d,q,P,D,Q"),
) -> None:
    """Forecast the test window with a fixed order."""

    from ..core.types import ModelSpec
    from ..errors import FatalFitFailure
    from ..forecast.forecaster import compare, forecast as run_forecast
    from ..pipeline.runner import prepare

    sp = _load_spec(spec)
    try:
        model = ModelSpec.from_sequence(order.split(","), s=sp.search.s)
    except ValueError as exc:
        typer.echo(f"invalid --order: {exc}", err=True)
        raise typer.Exit(2)
    try:
        data = prepare(sp)
        _, prediction = run_forecast(
            data.train.values,
            model,
            horizon=sp.forecast.horizon,
            z=sp.forecast.z,
            ljung_box_lag=sp.search.ljung_box_lag,
            maxiter=sp.search.maxiter,
        )
    except PipelineError as exc:
        _fail(exc)
    except FatalFitFailure as exc:
        _fail(PipelineError("forecast", exc))
    _show_table(f"forecast {model.label}", compare(prediction, data.test.values))


if __name__ == "__main__":
    app()
