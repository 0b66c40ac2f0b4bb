"""Specification models for modelling runs.

A run is described by a JSON document validated with the Pydantic models
below.  Every section has defaults matching the ten-year monthly study
(108 training months, 12 test months, ``{0,1}`` grid, seasonal period 12),
so only ``data.dataset_path`` is mandatory.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .types import ModelSpec


class DataSpec(BaseModel):
    """Location and column layout of the daily observations."""

    dataset_path: str
    date_col: str = "date"
    value_col: str = "value"
    start: Optional[str] = None
    end: Optional[str] = None
    skiprows: int = 0


class SplitSpec(BaseModel):
    """Fixed-index split of the monthly series."""

    train_size: int = Field(108, ge=1)
    test_size: int = Field(12, ge=1)


class SearchSpec(BaseModel):
    """Grid over the AR/MA orders with fixed differencing."""

    p: List[int] = Field(default_factory=lambda: [0, 1])
    q: List[int] = Field(default_factory=lambda: [0, 1])
    P: List[int] = Field(default_factory=lambda: [0, 1])
    Q: List[int] = Field(default_factory=lambda: [0, 1])
    d: int = Field(0, ge=0)
    D: int = Field(1, ge=0)
    s: int = Field(12, ge=2)
    ljung_box_lag: int = Field(12, ge=1)
    maxiter: int = Field(50, ge=1)
    strict_convergence: bool = False
    exploratory_order: Optional[List[int]] = Field(default_factory=lambda: [1, 1, 1, 0, 1, 1])

    @field_validator("p", "q", "P", "Q")
    @classmethod
    def _non_negative(cls, values: List[int]) -> List[int]:
        if not values:
            raise ValueError("search lists must not be empty")
        if any(v < 0 for v in values):
            raise ValueError("orders must be non-negative")
        return values

    @field_validator("exploratory_order")
    @classmethod
    def _six_orders(cls, values: Optional[List[int]]) -> Optional[List[int]]:
        if values is not None and len(values) != 6:
            raise ValueError("exploratory_order must be [p, d, q, P, D, Q]")
        return values

    def exploratory_spec(self) -> ModelSpec | None:
        if self.exploratory_order is None:
            return None
        return ModelSpec.from_sequence(self.exploratory_order, s=self.s)


class AnalysisSpec(BaseModel):
    nlags: int = Field(36, ge=1)


class ForecastSpec(BaseModel):
    horizon: int = Field(12, ge=1)
    z: float = Field(1.96, gt=0)


class ArtifactsSpec(BaseModel):
    """Configuration describing where to persist generated artifacts."""

    out_dir: Optional[str] = None


class PipelineSpec(BaseModel):
    data: DataSpec
    split: SplitSpec = SplitSpec()
    search: SearchSpec = SearchSpec()
    analysis: AnalysisSpec = AnalysisSpec()
    forecast: ForecastSpec = ForecastSpec()
    artifacts: ArtifactsSpec = ArtifactsSpec()

    @model_validator(mode="after")
    def _horizon_within_test(self) -> "PipelineSpec":
        if self.forecast.horizon > self.split.test_size:
            raise ValueError("forecast.horizon cannot exceed split.test_size")
        return self


# ---------------------------------------------------------------------------


def load_spec(path: str | Path) -> PipelineSpec:
    """Load a :class:`PipelineSpec` instance from a JSON file."""

    raw = json.loads(Path(path).read_text())
    return spec_from_dict(raw)


def spec_from_dict(raw: Mapping[str, Any]) -> PipelineSpec:
    """Public helper to build a :class:`PipelineSpec` from a JSON-compatible dict."""

    return PipelineSpec.model_validate(dict(raw))
