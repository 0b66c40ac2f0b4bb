"""Monthly aggregation, differencing and correlogram analysis."""
from __future__ import annotations

from .aggregate import monthly_frame, monthly_means, monthly_values
from .differencing import difference, integrate, seasonal_then_first
from .profiles import AnalysisResult, adf_test, analyze, correlation_profile, suggest_orders

__all__ = [
    "monthly_means",
    "monthly_frame",
    "monthly_values",
    "difference",
    "seasonal_then_first",
    "integrate",
    "AnalysisResult",
    "analyze",
    "adf_test",
    "correlation_profile",
    "suggest_orders",
]
