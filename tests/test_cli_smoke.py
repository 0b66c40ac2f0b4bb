import os
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("typer")

PYTHONPATH = str(Path(__file__).resolve().parents[1] / "src")


def _cli(*args: str) -> subprocess.CompletedProcess:
    env = {**os.environ, "PYTHONPATH": PYTHONPATH, "SARIMA_LOG_LEVEL": "WARNING"}
    return subprocess.run(
        [sys.executable, "-m", "sarima_engine.cli.main", *args],
        capture_output=True,
        text=True,
        env=env,
    )


def test_cli_run(spec_path: Path) -> None:
    result = _cli("run", "--spec", str(spec_path))
    assert result.returncode == 0, result.stderr
    assert "model comparison" in result.stdout
    assert "selected: SARIMA(" in result.stdout
    assert "within_bounds" in result.stdout


def test_cli_forecast_fixed_order(spec_path: Path) -> None:
    result = _cli("forecast", "--spec", str(spec_path), "--order", "1,0,1,0,1,1")
    assert result.returncode == 0, result.stderr
    assert "SARIMA(1,0,1)(0,1,1)[12]" in result.stdout


def test_cli_reports_failed_stage(tmp_path: Path) -> None:
    data = tmp_path / "empty.csv"
    data.write_text("date,value\n")
    spec_file = tmp_path / "spec.json"
    spec_file.write_text('{"data": {"dataset_path": "%s"}}' % data.as_posix())
    result = _cli("run", "--spec", str(spec_file))
    assert result.returncode == 1
    assert "aggregate failed" in result.stderr


def test_cli_rejects_malformed_spec(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text('{"data": ')
    result = _cli("grid", "--spec", str(broken))
    assert result.returncode == 1
    assert "spec failed" in result.stderr
    assert "Traceback" not in result.stderr

    invalid = tmp_path / "invalid.json"
    invalid.write_text('{"data": {"dataset_path": "x.csv"}, "split": {"test_size": 6}}')
    result = _cli("run", "--spec", str(invalid))
    assert result.returncode == 1
    assert "spec failed" in result.stderr
