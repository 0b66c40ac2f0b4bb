"""Forecasting from a selected seasonal ARIMA order."""

from .forecaster import compare, forecast

__all__ = ["forecast", "compare"]
