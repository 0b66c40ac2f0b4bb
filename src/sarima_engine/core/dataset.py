"""Dataset loading utilities.

Daily observations are read from CSV or JSON with pandas and normalised to
a two-column frame (``date``, ``value``) sorted by date.  The loader does
not check the daily cadence; gaps and duplicates are the caller's concern.
"""
from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..logging_utils import get_logger
from .spec import DataSpec
from .types import Observation

log = get_logger(__name__)


def _coerce_date(value: str) -> date:
    return pd.Timestamp(value.strip()).date()


def _read_frame(spec: DataSpec) -> pd.DataFrame:
    path = Path(spec.dataset_path)
    if path.suffix.lower() == ".json":
        raw = json.loads(path.read_text())
        return pd.DataFrame(raw)
    return pd.read_csv(str(path), skiprows=range(1, spec.skiprows + 1) if spec.skiprows else None)


def load_observations(spec: DataSpec) -> pd.DataFrame:
    """Load daily observations described by ``spec``.

    Only rows inside the inclusive ``start``/``end`` window are kept.  Rows
    whose value cannot be parsed as a number are dropped.
    """

    df = _read_frame(spec)
    missing = [c for c in (spec.date_col, spec.value_col) if c not in df.columns]
    if missing:
        raise RuntimeError(f"dataset is missing column(s): {', '.join(missing)}")

    out = pd.DataFrame(
        {
            "date": pd.to_datetime(df[spec.date_col]).dt.normalize(),
            "value": pd.to_numeric(df[spec.value_col], errors="coerce"),
        }
    )
    dropped = int(out["value"].isna().sum())
    if dropped:
        log.warning("dataset.rows_dropped", count=dropped, path=spec.dataset_path)
        out = out.dropna(subset=["value"])

    if spec.start is not None:
        out = out[out["date"].dt.date >= _coerce_date(spec.start)]
    if spec.end is not None:
        out = out[out["date"].dt.date <= _coerce_date(spec.end)]

    out = out.sort_values("date").reset_index(drop=True)
    log.info("dataset.loaded", rows=len(out), path=spec.dataset_path)
    return out


def observations_from_records(records: Iterable[Observation]) -> pd.DataFrame:
    """Build the loader's frame layout from :class:`Observation` values."""

    rows = [{"date": pd.Timestamp(o.date), "value": float(o.value)} for o in records]
    if not rows:
        return pd.DataFrame({"date": pd.Series(dtype="datetime64[ns]"), "value": pd.Series(dtype=float)})
    return pd.DataFrame(rows).sort_values("date").reset_index(drop=True)

